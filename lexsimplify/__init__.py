"""Lexical Simplifier - Replace uncommon words with similar common words using word embeddings."""

__version__ = "0.1.0"

from .engine import (
    SubstitutionEngine,
    ReplacementConfiguration,
    SelectionPolicy,
    Replacement,
    NO_MATCH,
)
from .embedding import WordDatabase
from .metrics import SimilarityMetric, list_names, lookup

__all__ = [
    "SubstitutionEngine",
    "ReplacementConfiguration",
    "SelectionPolicy",
    "Replacement",
    "NO_MATCH",
    "WordDatabase",
    "SimilarityMetric",
    "list_names",
    "lookup",
    "__version__",
]
