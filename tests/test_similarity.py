"""Tests for similarity metrics and the metric registry."""

import math

import pytest

from lexsimplify.metrics.similarity import (
    MetricKind,
    REGISTRY,
    SimilarityMetric,
    default_metric,
    get_metric,
    list_names,
    lookup,
)


class TestRegistry:

    def test_list_names_order(self):
        assert list_names() == ("Euclidean", "Cosine", "Jaccard", "Manhattan", "Pearson", "Chebyshev")

    def test_every_name_resolves(self):
        for name in list_names():
            metric = lookup(name)
            assert isinstance(metric, SimilarityMetric)
            assert metric.key == name.lower()

    @pytest.mark.parametrize("name", ["cosine", "COSINE", "Cosine", "  cosine ", "Cosine Similarity"])
    def test_lookup_case_insensitive(self, name):
        assert lookup(name) is get_metric(MetricKind.COSINE)

    @pytest.mark.parametrize("name", ["", "cos", "hamming", "Cosine Distance"])
    def test_lookup_unknown(self, name):
        assert lookup(name) is None

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            REGISTRY["hamming"] = default_metric()

    def test_default_metric_is_cosine(self):
        assert default_metric().kind is MetricKind.COSINE

    def test_lookup_returns_shared_instances(self):
        assert lookup("pearson") is lookup("Pearson")


class TestDirection:

    @pytest.mark.parametrize("name,higher", [
        ("euclidean", False),
        ("cosine", True),
        ("jaccard", True),
        ("manhattan", False),
        ("pearson", True),
        ("chebyshev", False),
    ])
    def test_direction_flags(self, name, higher):
        assert lookup(name).higher_is_better is higher

    def test_is_better_follows_direction(self):
        cosine = lookup("cosine")
        euclidean = lookup("euclidean")

        assert cosine.is_better(0.9, 0.5)
        assert not cosine.is_better(0.5, 0.5)
        assert euclidean.is_better(0.5, 0.9)
        assert euclidean.is_worse(0.9, 0.5)

    def test_worst_score(self):
        assert lookup("cosine").worst_score == -math.inf
        assert lookup("manhattan").worst_score == math.inf


class TestCalculate:

    def test_calculate_delegates_to_routine(self):
        assert lookup("euclidean").calculate([0, 0], [3, 4]) == pytest.approx(5.0)
        assert lookup("Chebyshev").calculate([0, 0], [3, 4]) == pytest.approx(4.0)

    def test_metrics_are_immutable(self):
        metric = lookup("cosine")
        with pytest.raises(AttributeError):
            metric.name = "Other"

    def test_display_names(self):
        assert lookup("pearson").name == "Pearson Correlation"
        assert lookup("manhattan").name == "Manhattan Distance"
