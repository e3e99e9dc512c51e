"""Shared fixtures for the lexical simplifier tests."""

import logging
import random

import pytest

from lexsimplify.embedding.database import WordDatabase
from lexsimplify.engine.configuration import ReplacementConfiguration, SelectionPolicy
from lexsimplify.engine.substitution import SubstitutionEngine


@pytest.fixture
def scenario_database():
    """happy is uncommon; content and sad are common."""
    return WordDatabase(
        vectors={
            "happy": [1.0, 0.0],
            "content": [0.9, 0.1],
            "sad": [-1.0, 0.0],
        },
        common_words=["content", "sad"],
    )


@pytest.fixture
def make_engine(scenario_database):
    """Build an engine over the scenario database with chosen metrics/policy."""
    def _make(metrics=("cosine",), policy=SelectionPolicy.MOST_SIMILAR, database=None, seed=None):
        config = ReplacementConfiguration(policy=policy)
        config.select_metrics(metrics)
        rng = random.Random(seed) if seed is not None else None
        return SubstitutionEngine(database or scenario_database, config, rng=rng)
    return _make


@pytest.fixture
def data_files(tmp_path):
    """Embedding and common-word files matching the scenario database."""
    embeddings = tmp_path / "embeddings.txt"
    embeddings.write_text(
        "happy, 1.0, 0.0\n"
        "content 0.9 0.1\n"
        "sad,-1.0,0.0\n"
    )
    common_words = tmp_path / "common.txt"
    common_words.write_text("content\nSad\n")
    return embeddings, common_words


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging setup so caplog sees records from every test."""
    yield
    logger = logging.getLogger("lexsimplify")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
