"""Tests for the k-means primitives and loop."""

from __future__ import annotations

from pathlib import Path
import sys

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.bulk import LocalCollection
from src.clustering import (
    KMeansConfig,
    assign_closest,
    average_vectors,
    converged,
    euclidean_distance,
    find_closest,
    kmeans,
    total_distance,
)

TWO_LANGS = ("Java", "Scala")


# ---------------------------------------------------------------------------
# Distance helpers


def test_euclidean_distance_is_squared() -> None:
    assert euclidean_distance((0, 0), (3, 4)) == 25
    assert euclidean_distance((3, 4), (3, 4)) == 0


def test_total_distance_sums_pairwise() -> None:
    assert total_distance([(0, 0), (1, 1)], [(3, 4), (1, 2)]) == 26


def test_total_distance_requires_equal_lengths() -> None:
    with pytest.raises(ValueError):
        total_distance([(0, 0)], [(0, 0), (1, 1)])


def test_find_closest_prefers_lowest_index_on_ties() -> None:
    assert find_closest((0, 0), [(0, 0), (0, 0)]) == 0
    assert find_closest((5, 0), [(0, 0), (10, 0), (5, 1)]) == 2


def test_assign_closest_matches_scalar_version() -> None:
    rng = np.random.default_rng(7)
    points = rng.integers(-50, 50, size=(200, 2))
    centers = [(0, 0), (0, 0), (20, 20), (-30, 10)]

    labels = assign_closest(points, np.asarray(centers))

    expected = [find_closest((int(x), int(y)), centers) for x, y in points]
    assert labels.tolist() == expected
    assert 1 not in labels.tolist()


def test_assign_closest_handles_wide_language_spread() -> None:
    spread = 2**30
    centers = [(idx * spread, 0) for idx in range(15)]
    point = (4 * spread, 5)

    labels = assign_closest(np.asarray([point]), np.asarray(centers))

    assert find_closest(point, centers) == 4
    assert labels.tolist() == [4]


def test_average_vectors_truncates() -> None:
    assert average_vectors([(1, 2), (3, 4)]) == (2, 3)
    assert average_vectors([(0, 1), (1, 2)]) == (0, 1)
    assert average_vectors([(0, -3), (0, -4)]) == (0, -3)
    assert average_vectors(iter([(50000, 7)])) == (50000, 7)


def test_average_vectors_rejects_empty() -> None:
    with pytest.raises(ValueError):
        average_vectors([])


def test_converged_is_strict() -> None:
    assert converged(19.9, 20.0)
    assert not converged(20.0, 20.0)


# ---------------------------------------------------------------------------
# Iteration


def test_kmeans_stops_after_one_iteration_when_stable() -> None:
    config = KMeansConfig(languages=TWO_LANGS, kernels=2)
    means = [(0, 5), (50000, 10)]
    vectors = LocalCollection.from_iterable([(0, 5), (0, 5), (50000, 10)], num_partitions=2)

    result = kmeans(means, vectors, config)

    assert result.converged
    assert result.iterations == 1
    assert result.distance == 0
    assert list(result.centroids) == means


def test_kmeans_keeps_empty_cluster_centroid() -> None:
    config = KMeansConfig(languages=TWO_LANGS, kernels=4)
    means = [(0, 0), (0, 0), (50000, 100), (50000, 100)]
    vectors = LocalCollection.from_iterable([(0, 0), (0, 2), (50000, 100)], num_partitions=2)

    result = kmeans(means, vectors, config)

    # Index 1 and 3 lose every tie and never receive a vector.
    assert result.centroids == ((0, 1), (0, 0), (50000, 100), (50000, 100))
    assert result.converged


def test_kmeans_reports_iteration_cap() -> None:
    config = KMeansConfig(languages=TWO_LANGS, kernels=2, max_iterations=1)
    vectors = LocalCollection.from_iterable([(0, 0), (0, 100), (50000, 0)])

    result = kmeans([(0, 0), (50000, 0)], vectors, config)

    assert not result.converged
    assert result.hit_iteration_cap
    assert result.iterations == 1
    assert result.centroids == ((0, 50), (50000, 0))


def test_kmeans_caches_vectors_once() -> None:
    calls: list[tuple[int, int]] = []

    def track(vector: tuple[int, int]) -> tuple[int, int]:
        calls.append(vector)
        return vector

    data = [(0, score) for score in range(0, 200, 10)] + [(50000, score) for score in range(0, 400, 7)]
    vectors = LocalCollection.from_iterable(data, num_partitions=4).map(track)
    config = KMeansConfig(languages=TWO_LANGS, kernels=2, eta=0.0, max_iterations=5)

    result = kmeans([(0, 0), (50000, 0)], vectors, config)

    assert result.iterations >= 2
    assert len(calls) == len(data)


def test_kmeans_rejects_wrong_centroid_count() -> None:
    config = KMeansConfig(languages=TWO_LANGS, kernels=2)
    with pytest.raises(ValueError):
        kmeans([(0, 0)], LocalCollection.from_iterable([(0, 0)]), config)


def test_kmeans_debug_trace(capsys: pytest.CaptureFixture[str]) -> None:
    config = KMeansConfig(languages=TWO_LANGS, kernels=2, max_iterations=1)
    vectors = LocalCollection.from_iterable([(0, 0), (0, 100), (50000, 0)])

    kmeans([(0, 0), (50000, 0)], vectors, config, debug=True)

    out = capsys.readouterr().out
    assert "Iteration: 1" in out
    assert "desired distance: 20.0" in out
    assert "Reached max iterations" in out


def test_kmeans_moves_the_right_centroid_for_wide_spread() -> None:
    spread = 2**30
    config = KMeansConfig(lang_spread=spread, kernels=15)
    means = [(idx * spread, 0) for idx in range(15)]
    vectors = LocalCollection.from_iterable([(4 * spread, 5), (4 * spread, 7)], num_partitions=2)

    result = kmeans(means, vectors, config, debug=False)

    assert result.centroids[4] == (4 * spread, 6)
    assert result.centroids[1] == (spread, 0)
    assert result.converged
