"""
Lexical substitution engine.

Replaces uncommon words in a text with common words whose embedding vectors
score best (or worst, or at random) under the configured similarity metrics.

Per word:
1. words without a vector, and words that are already common, are kept
2. the candidate pool is every vector entry that is a common word
3. a consensus scan scores the pool with every selected metric
4. the selection policy picks the replacement; Most/Least Similar rank with
   the first selected metric, Random draws uniformly from the pool
"""

import logging
import math
import random
import re
import string
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from ..metrics.similarity import SimilarityMetric
from .configuration import ConfigurationSnapshot, ReplacementConfiguration, SelectionPolicy
from .errors import VectorLengthMismatchError

logger = logging.getLogger(__name__)

PUNCTUATION = string.punctuation
_PUNCT_CLASS = re.escape(PUNCTUATION)
TOKEN_PATTERN = re.compile(rf"[{_PUNCT_CLASS}]|[^{_PUNCT_CLASS}\s]+")

Candidate = Tuple[str, Optional[np.ndarray]]


class _NoMatch:
    """Sentinel returned by the ranking policies when nothing was comparable."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_MATCH"

    def __bool__(self) -> bool:
        return False


NO_MATCH = _NoMatch()


class WordStore(Protocol):
    """Lookups the engine needs from the word database."""

    def has_vector(self, token: str) -> bool: ...

    def get_vector(self, token: str) -> Optional[np.ndarray]: ...

    def is_common_word(self, token: str) -> bool: ...

    def all_vector_entries(self) -> Iterable[Tuple[str, np.ndarray]]: ...


@dataclass
class Replacement:
    """Decision record for one word."""
    original: str
    result: str
    reason: str
    policy: str
    metric: Optional[str] = None
    score: Optional[float] = None
    consensus_candidate: Optional[str] = None
    consensus_metric: Optional[str] = None
    consensus_score: Optional[float] = None
    candidates: int = 0

    @property
    def replaced(self) -> bool:
        return self.reason == "replaced"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_punctuation(token: str) -> bool:
    """True for a single ASCII punctuation character."""
    return len(token) == 1 and token in PUNCTUATION


def tokenize(text: str) -> List[str]:
    """
    Split text into punctuation and word tokens.

    Every punctuation character becomes its own token. Whitespace only
    separates words and is not kept.

    >>> tokenize("Hi, world!")
    ['Hi', ',', 'world', '!']
    """
    return TOKEN_PATTERN.findall(text)


def join_tokens(tokens: Sequence[str]) -> str:
    """
    Join tokens with one space, except before a punctuation token.

    >>> join_tokens(['hi', ',', 'world', '!'])
    'hi, world!'
    """
    parts: List[str] = []
    for index, token in enumerate(tokens):
        parts.append(token)
        if index < len(tokens) - 1 and not is_punctuation(tokens[index + 1]):
            parts.append(" ")
    return "".join(parts).strip()


class SubstitutionEngine:
    """
    Simplifies text against a word store and a replacement configuration.

    Stateless between calls. The configuration is read once at the start of
    each call, so changing it mid-call has no effect on that call.
    """

    def __init__(self,
                 store: WordStore,
                 config: Optional[ReplacementConfiguration] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            store: Word vectors and common-word lookups
            config: Active metrics and policy (defaults to Cosine, Most Similar)
            rng: Random source for the Random policy; pass a seeded
                ``random.Random`` for reproducible selections
        """
        if store is None:
            raise ValueError("store cannot be None")
        self.store = store
        self.config = config if config is not None else ReplacementConfiguration()
        self.rng = rng if rng is not None else random.Random()

    # --- public API ---

    def simplify(self, text: str) -> str:
        """Return ``text`` with uncommon words replaced."""
        snapshot = self.config.snapshot()
        pool: Optional[List[Candidate]] = None
        output: List[str] = []
        replaced = 0

        for token in tokenize(text):
            if is_punctuation(token):
                output.append(token)
                continue
            if pool is None:
                pool = self.candidate_pool()
            decision = self._decide(token, snapshot, pool, with_consensus=False)
            if decision.replaced:
                replaced += 1
            output.append(decision.result)

        logger.debug(f"Simplified {len(output)} tokens, {replaced} replaced")
        return join_tokens(output)

    def replace_word(self, word: str) -> str:
        """Return the replacement for a single word (lowercased)."""
        return self._decide(word.strip(), self.config.snapshot(), None).result

    def explain_word(self, word: str) -> Replacement:
        """Return the full decision record for a single word, consensus included."""
        return self._decide(word.strip(), self.config.snapshot(), None, with_consensus=True)

    def candidate_pool(self) -> List[Candidate]:
        """Every vector entry whose token is a common word, in store order."""
        return [
            (token, vector)
            for token, vector in self.store.all_vector_entries()
            if self.store.is_common_word(token)
        ]

    # --- decision ---

    def _decide(self,
                word: str,
                snapshot: ConfigurationSnapshot,
                pool: Optional[List[Candidate]],
                with_consensus: bool = False) -> Replacement:
        lowered = word.lower()
        record = Replacement(original=word, result=lowered, reason="replaced",
                             policy=snapshot.policy.value)

        target = self.store.get_vector(lowered)
        if target is None:
            record.reason = "no_vector"
            return record
        if self.store.is_common_word(lowered):
            record.reason = "common_word"
            return record

        if pool is None:
            pool = self.candidate_pool()
        record.candidates = len(pool)
        if not pool:
            record.reason = "empty_pool"
            return record

        if with_consensus and snapshot.metrics:
            candidate, metric, score = self.consensus(target, pool, snapshot.metrics)
            record.consensus_candidate = candidate
            record.consensus_metric = metric.name if metric else None
            record.consensus_score = score

        if snapshot.policy is SelectionPolicy.RANDOM:
            record.result = self.select_random(pool)
            return record

        primary = snapshot.primary_metric
        if primary is None:
            logger.warning("No similarity metrics selected; keeping original words")
            record.reason = "no_metrics"
            return record

        if snapshot.policy is SelectionPolicy.MOST_SIMILAR:
            winner, score = self.select_most_similar(target, pool, primary)
        else:
            winner, score = self.select_least_similar(target, pool, primary)

        record.metric = primary.name
        if winner is NO_MATCH:
            record.reason = "no_match"
            return record

        record.result = winner
        record.score = score
        logger.debug(f"{lowered!r} -> {winner!r} ({primary.name}={score:.4f})")
        return record

    # --- scoring ---

    def _comparable_scores(self,
                           target: np.ndarray,
                           pool: Iterable[Candidate],
                           metric: SimilarityMetric) -> Iterator[Tuple[str, float]]:
        """
        Yield (token, score) for every candidate that can be compared.

        Candidates with no vector, a vector of the wrong length, or an
        undefined (nan) score are skipped.
        """
        for token, vector in pool:
            if vector is None:
                continue
            try:
                score = metric.calculate(target, vector)
            except VectorLengthMismatchError as e:
                logger.debug(f"Skipping candidate {token!r}: {e.message}")
                continue
            if math.isnan(score):
                continue
            yield token, score

    def consensus(self,
                  target: np.ndarray,
                  pool: Sequence[Candidate],
                  metrics: Sequence[SimilarityMetric]
                  ) -> Tuple[Optional[str], Optional[SimilarityMetric], Optional[float]]:
        """
        Single running best across every metric.

        Metrics are scanned in order; a later metric takes over only with a
        strictly better score in its own direction. Scores are not averaged.
        """
        best_token: Optional[str] = None
        best_metric: Optional[SimilarityMetric] = None
        best_score: Optional[float] = None

        for metric in metrics:
            for token, score in self._comparable_scores(target, pool, metric):
                if best_score is None or metric.is_better(score, best_score):
                    best_token, best_metric, best_score = token, metric, score

        return best_token, best_metric, best_score

    def select_most_similar(self, target, pool, metric: SimilarityMetric):
        """Best-scoring candidate; on ties the last one seen wins."""
        best: Any = NO_MATCH
        best_score: Optional[float] = None
        for token, score in self._comparable_scores(target, pool, metric):
            if best_score is None or not metric.is_worse(score, best_score):
                best, best_score = token, score
        return best, best_score

    def select_least_similar(self, target, pool, metric: SimilarityMetric):
        """Worst-scoring candidate; on ties the last one seen wins."""
        worst: Any = NO_MATCH
        worst_score: Optional[float] = None
        for token, score in self._comparable_scores(target, pool, metric):
            if worst_score is None or not metric.is_better(score, worst_score):
                worst, worst_score = token, score
        return worst, worst_score

    def select_random(self, pool: Sequence[Candidate]) -> str:
        """Uniform pick from the pool, vectors not consulted."""
        return self.rng.choice(pool)[0]
