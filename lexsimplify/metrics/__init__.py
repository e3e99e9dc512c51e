"""
Vector similarity metrics for word embeddings.

Provides the raw vector routines and the fixed registry of named metrics
used by the substitution engine.
"""

from .vector_math import euclidean, cosine, jaccard, manhattan, pearson, chebyshev
from .similarity import (
    MetricKind,
    SimilarityMetric,
    REGISTRY,
    list_names,
    lookup,
    get_metric,
    default_metric,
)

__all__ = [
    # Vector routines
    'euclidean',
    'cosine',
    'jaccard',
    'manhattan',
    'pearson',
    'chebyshev',

    # Metrics
    'MetricKind',
    'SimilarityMetric',
    'REGISTRY',
    'list_names',
    'lookup',
    'get_metric',
    'default_metric',
]
