"""Per-cluster statistics computed from the final centroids."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Mapping, Sequence

import numpy as np
import pandas as pd

from src.bulk import LocalCollection
from src.postings import HighScore, LangIndex, Vector

from .config import DominantLanguageRule, KMeansConfig
from .kmeans import assign_closest


@dataclass(frozen=True)
class ClusterSummary:
    """Dominant language, its share, the cluster size and median score of one cluster."""

    language: str
    percent: int
    size: int
    median_score: int


def median_vectors(scores: Sequence[HighScore]) -> int:
    """Median score; for an even count the floor of the two middle values' mean."""
    if not scores:
        raise ValueError("Cannot compute the median of an empty cluster.")
    ordered = sorted(scores)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) // 2
    return ordered[mid]


def dominant_language_index(
    lang_counts: Mapping[LangIndex, int],
    rule: DominantLanguageRule = "highest-index",
) -> LangIndex:
    """Select the dominant (scaled) language index of a cluster.

    `"highest-index"` reproduces the reference output: the numerically largest
    language index present wins regardless of how often it occurs.
    `"most-frequent"` picks the most common language, ties going to the
    lowest index.
    """
    if not lang_counts:
        raise ValueError("Cannot pick a dominant language from an empty cluster.")
    if rule == "highest-index":
        return max(lang_counts)
    if rule == "most-frequent":
        return min(lang_counts, key=lambda lang: (-lang_counts[lang], lang))
    raise ValueError(f"Unknown dominant language rule '{rule}'.")


def summarize_cluster(members: Sequence[Vector], config: KMeansConfig) -> ClusterSummary:
    """Summarise the vectors assigned to a single centroid."""
    if not members:
        raise ValueError("Cannot summarise an empty cluster.")
    lang_counts = Counter(lang for lang, _ in members)
    lang_index = dominant_language_index(lang_counts, config.dominant_language)
    size = len(members)
    return ClusterSummary(
        language=config.language_label(lang_index),
        percent=lang_counts[lang_index] * 100 // size,
        size=size,
        median_score=median_vectors([score for _, score in members]),
    )


def cluster_results(
    means: Sequence[Vector],
    vectors: LocalCollection[Vector],
    config: KMeansConfig,
) -> List[ClusterSummary]:
    """Assign vectors to their closest mean and summarise every non-empty cluster.

    Results are sorted by ascending median score.
    """
    config.validate()
    centers = np.asarray(means, dtype=np.int64)

    def label(part: List[Vector]) -> List[tuple]:
        if not part:
            return []
        labels = assign_closest(np.asarray(part, dtype=np.int64), centers)
        return [(int(idx), vector) for idx, vector in zip(labels, part)]

    grouped = vectors.map_partitions(label).group_by_key().map_values(lambda vs: summarize_cluster(vs, config))
    summaries = [summary for _, summary in sorted(grouped.collect(), key=lambda item: item[0])]
    return sorted(summaries, key=lambda summary: summary.median_score)


def summaries_to_frame(summaries: Sequence[ClusterSummary]) -> pd.DataFrame:
    """Tabular view of the summaries, one row per cluster."""
    return pd.DataFrame(
        {
            "median_score": [summary.median_score for summary in summaries],
            "language": [summary.language for summary in summaries],
            "percent": [summary.percent for summary in summaries],
            "size": [summary.size for summary in summaries],
        },
        columns=["median_score", "language", "percent", "size"],
    )


__all__ = [
    "ClusterSummary",
    "cluster_results",
    "dominant_language_index",
    "median_vectors",
    "summaries_to_frame",
    "summarize_cluster",
]
