"""End-to-end orchestration from raw postings to cluster summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from src.bulk import LocalCollection
from src.postings import Posting, Vector

from .config import KMeansConfig
from .grouping import grouped_postings
from .kmeans import KMeansResult, kmeans
from .sampling import sample_vectors
from .scoring import scored_postings
from .summary import ClusterSummary, cluster_results
from .vectorize import vector_postings


@dataclass(frozen=True)
class ClusterRun:
    """Everything produced by one pipeline run."""

    vector_count: int
    initial_means: Tuple[Vector, ...]
    kmeans: KMeansResult
    summaries: Sequence[ClusterSummary]


def build_vectors(postings: LocalCollection[Posting], config: KMeansConfig) -> LocalCollection[Vector]:
    """Group, score and vectorize postings; the result is cached for reuse."""
    grouped = grouped_postings(postings)
    scored = scored_postings(grouped)
    return vector_postings(scored, config).cache()


def run_pipeline(
    postings: LocalCollection[Posting],
    config: Optional[KMeansConfig] = None,
    debug: bool = False,
    expected_vectors: Optional[int] = None,
) -> ClusterRun:
    """Cluster questions by (language, best answer score).

    `expected_vectors` is an optional smoke check for a known dataset; a
    different vector count raises ValueError before clustering starts.
    """
    cfg = config or KMeansConfig()
    cfg.validate()

    vectors = build_vectors(postings, cfg)
    vector_count = vectors.count()
    if debug:
        print(f"[pipeline] {vector_count} vectors across {len(cfg.languages)} languages")
    if expected_vectors is not None and vector_count != expected_vectors:
        raise ValueError(f"Incorrect number of vectors: {vector_count}, expected {expected_vectors}.")

    initial = sample_vectors(vectors, cfg, debug=debug)
    result = kmeans(initial, vectors, cfg, debug=debug)
    summaries = cluster_results(result.centroids, vectors, cfg)
    return ClusterRun(
        vector_count=vector_count,
        initial_means=tuple(initial),
        kmeans=result,
        summaries=summaries,
    )


__all__ = ["ClusterRun", "build_vectors", "run_pipeline"]
