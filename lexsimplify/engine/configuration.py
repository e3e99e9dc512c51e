"""Active metric list and selection policy for word replacement."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from ..metrics.similarity import SimilarityMetric, default_metric, lookup
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class SelectionPolicy(Enum):
    """How a replacement is picked from the scored candidate pool."""
    MOST_SIMILAR = "most_similar"
    LEAST_SIMILAR = "least_similar"
    RANDOM = "random"

    @property
    def label(self) -> str:
        """Menu label, e.g. "Most Similar"."""
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: Union["SelectionPolicy", str]) -> "SelectionPolicy":
        """
        Accept an enum member or a name such as "most_similar",
        "Least Similar", "least-similar" or "RANDOM".
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for policy in cls:
            if policy.value == normalized:
                return policy
        raise ConfigurationError(
            f"Unknown replacement policy: {value!r}",
            setting="policy",
            value=value,
        )


@dataclass(frozen=True)
class ConfigurationSnapshot:
    """Read-only view of the configuration taken at the start of a request."""
    metrics: Tuple[SimilarityMetric, ...]
    policy: SelectionPolicy

    @property
    def primary_metric(self):
        """First selected metric, or None when the list is empty."""
        return self.metrics[0] if self.metrics else None


class ReplacementConfiguration:
    """
    Mutable holder of the selected metrics and the selection policy.

    The interactive shell writes to it; the engine reads it once per request
    through ``snapshot()``. No messages are printed here.
    """

    def __init__(self,
                 metrics: Optional[Iterable[SimilarityMetric]] = None,
                 policy: SelectionPolicy = SelectionPolicy.MOST_SIMILAR):
        self._metrics: List[SimilarityMetric] = (
            list(metrics) if metrics is not None else [default_metric()]
        )
        self._policy = SelectionPolicy.parse(policy)

    @property
    def metrics(self) -> Tuple[SimilarityMetric, ...]:
        return tuple(self._metrics)

    @property
    def policy(self) -> SelectionPolicy:
        return self._policy

    def select_metrics(self, names: Iterable[str]) -> List[str]:
        """
        Replace the active metric list with the metrics named in ``names``.

        Unknown names are dropped. If nothing valid remains the list is left
        empty (the previous selection is not restored) and a warning is
        logged.

        Args:
            names: Metric names, case-insensitive

        Returns:
            The names that were not recognised
        """
        selected: List[SimilarityMetric] = []
        rejected: List[str] = []
        for name in names:
            metric = lookup(name)
            if metric is None:
                rejected.append(name)
            else:
                selected.append(metric)

        self._metrics = selected
        if rejected:
            logger.debug(f"Ignoring unknown metrics: {', '.join(rejected)}")
        if not selected:
            logger.warning("No valid similarity metrics selected")
        return rejected

    def set_policy(self, policy: Union[SelectionPolicy, str]) -> None:
        """Set the selection policy. Raises ConfigurationError for unknown names."""
        self._policy = SelectionPolicy.parse(policy)

    def reset_to_default(self) -> None:
        """Restore Cosine as the only metric and the Most Similar policy."""
        self._metrics = [default_metric()]
        self._policy = SelectionPolicy.MOST_SIMILAR

    def snapshot(self) -> ConfigurationSnapshot:
        return ConfigurationSnapshot(metrics=tuple(self._metrics), policy=self._policy)

    def describe(self) -> dict:
        """Plain dict of the current selection, for display and settings files."""
        return {
            "metrics": [metric.name for metric in self._metrics],
            "policy": self._policy.label,
        }

    def __repr__(self) -> str:
        names = ", ".join(metric.key for metric in self._metrics) or "-"
        return f"ReplacementConfiguration(metrics=[{names}], policy={self._policy.value})"
