"""Tests for the vector distance and similarity routines."""

import math

import numpy as np
import pytest

from lexsimplify.engine.errors import VectorLengthMismatchError
from lexsimplify.metrics import vector_math
from lexsimplify.metrics.vector_math import (
    euclidean, cosine, jaccard, manhattan, pearson, chebyshev
)

ALL_ROUTINES = [euclidean, cosine, jaccard, manhattan, pearson, chebyshev]


@pytest.fixture
def random_vectors():
    rng = np.random.default_rng(42)
    return [rng.normal(size=50) for _ in range(5)]


class TestKnownValues:
    """Hand-computed results."""

    def test_euclidean(self):
        assert euclidean([0, 0], [3, 4]) == pytest.approx(5.0)

    def test_manhattan(self):
        assert manhattan([0, 0], [3, -4]) == pytest.approx(7.0)

    def test_chebyshev(self):
        assert chebyshev([1, 5, 2], [2, 1, 2]) == pytest.approx(4.0)

    def test_cosine(self):
        assert cosine([1, 0], [0.9, 0.1]) == pytest.approx(0.9939, abs=1e-4)
        assert cosine([1, 0], [-1, 0]) == pytest.approx(-1.0)
        assert cosine([1, 0], [0, 1]) == pytest.approx(0.0)

    def test_jaccard_uses_real_components(self):
        assert jaccard([1, 2], [2, 1]) == pytest.approx(0.5)
        # Negative components are used directly, not as set membership
        assert jaccard([1, -1], [1, 1]) == pytest.approx(0.0)

    def test_pearson(self):
        assert pearson([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
        assert pearson([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)

    def test_accepts_numpy_arrays(self):
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([1.0, 2.0, 4.0])
        assert euclidean(a, b) == pytest.approx(1.0)
        assert isinstance(euclidean(a, b), float)


class TestIdentities:
    """A vector compared with itself."""

    def test_distances_are_zero(self, random_vectors):
        for v in random_vectors:
            assert euclidean(v, v) == 0.0
            assert manhattan(v, v) == 0.0
            assert chebyshev(v, v) == 0.0

    def test_cosine_is_one(self, random_vectors):
        for v in random_vectors:
            assert cosine(v, v) == pytest.approx(1.0)

    def test_pearson_is_one(self, random_vectors):
        for v in random_vectors:
            assert pearson(v, v) == pytest.approx(1.0)


class TestSymmetry:

    def test_cosine_and_pearson_symmetric(self, random_vectors):
        a, b = random_vectors[0], random_vectors[1]
        assert cosine(a, b) == pytest.approx(cosine(b, a))
        assert pearson(a, b) == pytest.approx(pearson(b, a))


class TestLengthMismatch:

    @pytest.mark.parametrize("routine", ALL_ROUTINES, ids=lambda f: f.__name__)
    def test_mismatch_raises(self, routine):
        with pytest.raises(VectorLengthMismatchError) as exc_info:
            routine([1.0, 2.0], [1.0, 2.0, 3.0])

        assert exc_info.value.left_length == 2
        assert exc_info.value.right_length == 3
        assert exc_info.value.details["right_length"] == 3

    def test_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            euclidean([1.0], [1.0, 2.0])


class TestDegenerateCases:
    """Undefined scores come back as nan instead of raising."""

    def test_cosine_zero_norm(self):
        assert math.isnan(cosine([0, 0], [1, 2]))
        assert math.isnan(cosine([1, 2], [0, 0]))

    def test_pearson_constant_vector(self):
        assert math.isnan(pearson([3, 3, 3], [1, 2, 3]))

    def test_pearson_constant_vector_with_inexact_mean(self):
        # mean([0.1] * 3) is not exactly 0.1 in floating point
        assert math.isnan(pearson([0.1] * 3, [1.0, 2.0, 3.0]))
        assert math.isnan(pearson([1.0, 2.0, 3.0], [0.1] * 3))
        assert math.isnan(pearson([0.1] * 3, [0.7] * 3))

    def test_jaccard_zero_denominator(self):
        assert math.isnan(jaccard([0, 0], [0, 0]))

    def test_empty_vectors(self):
        assert vector_math.euclidean([], []) == 0.0
        assert vector_math.chebyshev([], []) == 0.0
        assert math.isnan(vector_math.pearson([], []))
