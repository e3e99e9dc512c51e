"""
Simplify a few sentences with the bundled sample data under each
replacement policy.

Run from the repository root:
    python examples/simplify_demo.py
"""

from pathlib import Path

from lexsimplify import ReplacementConfiguration, SelectionPolicy, SubstitutionEngine, WordDatabase

DATA_DIR = Path(__file__).parent / "data"

SENTENCES = [
    "The weather is delightful!",
    "An exquisite meal, a joyful day.",
]


def main():
    database = WordDatabase()
    database.load_embeddings(DATA_DIR / "embeddings.txt")
    database.load_common_words(DATA_DIR / "common_words.txt")

    for policy in SelectionPolicy:
        config = ReplacementConfiguration(policy=policy)
        config.select_metrics(["cosine", "euclidean"])
        engine = SubstitutionEngine(database, config)
        print(f"== {policy.label} ==")
        for sentence in SENTENCES:
            print(f"  {sentence}")
            print(f"  -> {engine.simplify(sentence)}")

    # Per-word detail, including the cross-metric pick
    config = ReplacementConfiguration()
    config.select_metrics(["pearson", "cosine"])
    engine = SubstitutionEngine(database, config)
    for word in ("delightful", "meal", "day"):
        print(engine.explain_word(word).to_dict())


if __name__ == "__main__":
    main()
