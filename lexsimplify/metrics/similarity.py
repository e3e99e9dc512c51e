"""
Similarity metrics and the metric registry.

A SimilarityMetric binds one vector_math routine to a display name and a
direction flag. The six metrics form a closed set (MetricKind); the registry
is built once at import time and never changes afterwards.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from . import vector_math
from .vector_math import VectorLike


class MetricKind(Enum):
    """The supported metrics, keyed by their lowercase registry name."""
    EUCLIDEAN = "euclidean"
    COSINE = "cosine"
    JACCARD = "jaccard"
    MANHATTAN = "manhattan"
    PEARSON = "pearson"
    CHEBYSHEV = "chebyshev"


@dataclass(frozen=True)
class SimilarityMetric:
    """
    Immutable binding of a vector routine to a name and a direction.

    Attributes:
        kind: Which of the six metrics this is
        name: Human readable name ("Cosine Similarity")
        higher_is_better: True when a larger score means more similar
        function: Pure (vector, vector) -> float routine
    """

    kind: MetricKind
    name: str
    higher_is_better: bool
    function: Callable[[VectorLike, VectorLike], float] = field(repr=False, compare=False)

    @property
    def key(self) -> str:
        """Registry key, e.g. "cosine"."""
        return self.kind.value

    @property
    def worst_score(self) -> float:
        """Starting value that any comparable score improves on."""
        return -math.inf if self.higher_is_better else math.inf

    def calculate(self, vector1: VectorLike, vector2: VectorLike) -> float:
        """Score two vectors. Raises VectorLengthMismatchError on bad input."""
        return self.function(vector1, vector2)

    def is_better(self, score: float, reference: float) -> bool:
        """True if ``score`` is strictly more similar than ``reference``."""
        return score > reference if self.higher_is_better else score < reference

    def is_worse(self, score: float, reference: float) -> bool:
        """True if ``score`` is strictly less similar than ``reference``."""
        return score < reference if self.higher_is_better else score > reference


_METRICS: Tuple[SimilarityMetric, ...] = (
    SimilarityMetric(MetricKind.EUCLIDEAN, "Euclidean Distance", False, vector_math.euclidean),
    SimilarityMetric(MetricKind.COSINE, "Cosine Similarity", True, vector_math.cosine),
    SimilarityMetric(MetricKind.JACCARD, "Jaccard Similarity", True, vector_math.jaccard),
    SimilarityMetric(MetricKind.MANHATTAN, "Manhattan Distance", False, vector_math.manhattan),
    SimilarityMetric(MetricKind.PEARSON, "Pearson Correlation", True, vector_math.pearson),
    SimilarityMetric(MetricKind.CHEBYSHEV, "Chebyshev Distance", False, vector_math.chebyshev),
)

# Canonical names shown to users, in menu order
METRIC_NAMES: Tuple[str, ...] = (
    "Euclidean", "Cosine", "Jaccard", "Manhattan", "Pearson", "Chebyshev"
)

REGISTRY: Mapping[str, SimilarityMetric] = MappingProxyType(
    {metric.key: metric for metric in _METRICS}
)


def list_names() -> Tuple[str, ...]:
    """Return the six canonical metric names in their fixed order."""
    return METRIC_NAMES


def lookup(name: str) -> Optional[SimilarityMetric]:
    """
    Find a metric by name, ignoring case and surrounding whitespace.

    Accepts the short name ("Cosine") or the display name
    ("Cosine Similarity"). Returns None when nothing matches.
    """
    if not name:
        return None

    key = name.strip().lower()
    metric = REGISTRY.get(key)
    if metric is not None:
        return metric

    # Display names carry a suffix ("Cosine Similarity")
    first_word = key.split()[0] if key.split() else key
    metric = REGISTRY.get(first_word)
    if metric is not None and metric.name.lower() == key:
        return metric
    return None


def get_metric(kind: MetricKind) -> SimilarityMetric:
    """Return the registered metric for a MetricKind."""
    return REGISTRY[kind.value]


def default_metric() -> SimilarityMetric:
    """The metric selected when nothing else is configured (Cosine)."""
    return get_metric(MetricKind.COSINE)
