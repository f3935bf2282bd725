"""Iterative k-means over integer (language, score) vectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from src.bulk import LocalCollection
from src.postings import Vector

from .config import KMeansConfig

# Rows per distance block; bounds the (rows, kernels, 2) intermediate array.
ASSIGN_CHUNK_SIZE = 65536

ClusterSums = Tuple[int, int, int]


@dataclass(frozen=True)
class KMeansResult:
    """Outcome of a k-means run."""

    centroids: Tuple[Vector, ...]
    iterations: int
    distance: float
    converged: bool

    @property
    def hit_iteration_cap(self) -> bool:
        return not self.converged


def euclidean_distance(v1: Vector, v2: Vector) -> float:
    """Squared euclidean distance between two points.

    Differences are exact integers; squares are taken in double precision so
    large language spreads cannot overflow, matching `assign_closest`.
    """
    d0 = float(v1[0] - v2[0])
    d1 = float(v1[1] - v2[1])
    return d0 * d0 + d1 * d1


def total_distance(a1: Sequence[Vector], a2: Sequence[Vector]) -> float:
    """Sum of squared distances between centroids sharing an index."""
    if len(a1) != len(a2):
        raise ValueError(f"Centroid arrays differ in length: {len(a1)} != {len(a2)}.")
    return sum(euclidean_distance(p, q) for p, q in zip(a1, a2))


def find_closest(point: Vector, centers: Sequence[Vector]) -> int:
    """Index of the nearest center; on equal distance the lowest index wins."""
    best_index = 0
    closest = float("inf")
    for idx, center in enumerate(centers):
        dist = euclidean_distance(point, center)
        if dist < closest:
            closest = dist
            best_index = idx
    return best_index


def assign_closest(points: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Vectorised `find_closest` for an `(n, 2)` integer array.

    `argmin` returns the first minimum, which keeps the lowest-index tie-break.
    """
    points = np.asarray(points, dtype=np.int64).reshape(-1, 2)
    centers = np.asarray(centers, dtype=np.int64).reshape(-1, 2)
    labels = np.empty(len(points), dtype=np.int64)
    for start in range(0, len(points), ASSIGN_CHUNK_SIZE):
        block = points[start:start + ASSIGN_CHUNK_SIZE]
        diff = (block[:, None, :] - centers[None, :, :]).astype(np.float64)
        labels[start:start + len(block)] = np.argmin((diff * diff).sum(axis=2), axis=1)
    return labels


def _truncating_div(total: int, count: int) -> int:
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


def average_vectors(points: Iterable[Vector]) -> Vector:
    """Component-wise mean, truncated toward zero."""
    count = 0
    comp1 = 0
    comp2 = 0
    for p0, p1 in points:
        comp1 += p0
        comp2 += p1
        count += 1
    if count == 0:
        raise ValueError("Cannot average an empty group of vectors.")
    return _truncating_div(comp1, count), _truncating_div(comp2, count)


def converged(distance: float, eta: float) -> bool:
    """Decide whether the k-means clustering converged."""
    return distance < eta


def _cluster_sums(vectors: LocalCollection[Vector], means: Sequence[Vector]) -> List[Tuple[int, ClusterSums]]:
    """Per-cluster `(sum_lang, sum_score, count)` for the current assignment."""
    centers = np.asarray(means, dtype=np.int64)

    def partial(part: List[Vector]) -> List[Tuple[int, ClusterSums]]:
        if not part:
            return []
        points = np.asarray(part, dtype=np.int64).reshape(-1, 2)
        labels = assign_closest(points, centers)
        sums: List[Tuple[int, ClusterSums]] = []
        for idx in np.unique(labels):
            members = points[labels == idx]
            # Object dtype sums with Python ints so the accumulator never wraps.
            totals = members.astype(object).sum(axis=0)
            sums.append((int(idx), (int(totals[0]), int(totals[1]), int(len(members)))))
        return sums

    def merge(a: ClusterSums, b: ClusterSums) -> ClusterSums:
        return a[0] + b[0], a[1] + b[1], a[2] + b[2]

    return vectors.map_partitions(partial).reduce_by_key(merge).collect()


def kmeans(
    means: Sequence[Vector],
    vectors: LocalCollection[Vector],
    config: KMeansConfig,
    debug: bool = False,
) -> KMeansResult:
    """Refine `means` until they move less than `config.eta` or the iteration cap is hit.

    Each iteration reassigns every vector, reduces the per-cluster sums and
    writes the new means into a copy of the centroid array. A centroid with no
    assigned vectors keeps its previous position.
    """
    config.validate()
    if len(means) != config.kernels:
        raise ValueError(f"Expected {config.kernels} initial centroids, received {len(means)}.")

    current: List[Vector] = [(int(m[0]), int(m[1])) for m in means]
    cached = vectors.cache()
    iteration = 0

    while True:
        iteration += 1
        new_means = list(current)
        for idx, (sum_lang, sum_score, count) in _cluster_sums(cached, current):
            new_means[idx] = (_truncating_div(sum_lang, count), _truncating_div(sum_score, count))

        distance = total_distance(current, new_means)
        if debug:
            _print_iteration(iteration, distance, config.eta, current, new_means)

        if converged(distance, config.eta):
            return KMeansResult(tuple(new_means), iteration, float(distance), True)
        if iteration >= config.max_iterations:
            if debug:
                print(f"[kmeans] Reached max iterations ({config.max_iterations}) without converging")
            return KMeansResult(tuple(new_means), iteration, float(distance), False)
        current = new_means


def _print_iteration(
    iteration: int, distance: float, eta: float, means: Sequence[Vector], new_means: Sequence[Vector]
) -> None:
    print(f"[kmeans] Iteration: {iteration}")
    print(f"  * current distance: {distance}")
    print(f"  * desired distance: {eta}")
    print("  * means:")
    for old, new in zip(means, new_means):
        print(f"   {str(old):>20} ==> {str(new):>20}    distance: {euclidean_distance(old, new):8.0f}")


__all__ = [
    "ASSIGN_CHUNK_SIZE",
    "KMeansResult",
    "assign_closest",
    "average_vectors",
    "converged",
    "euclidean_distance",
    "find_closest",
    "kmeans",
    "total_distance",
]
