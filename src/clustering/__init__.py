"""Language/score k-means clustering of StackOverflow questions."""

from .config import DEFAULT_LANGUAGES, DominantLanguageRule, KMeansConfig
from .grouping import GroupedQuestion, grouped_postings
from .kmeans import (
    KMeansResult,
    assign_closest,
    average_vectors,
    converged,
    euclidean_distance,
    find_closest,
    kmeans,
    total_distance,
)
from .pipeline import ClusterRun, build_vectors, run_pipeline
from .report import format_results
from .sampling import reservoir_sampling, sample_vectors
from .scoring import ScoredQuestion, answer_high_score, scored_postings
from .summary import (
    ClusterSummary,
    cluster_results,
    dominant_language_index,
    median_vectors,
    summaries_to_frame,
    summarize_cluster,
)
from .vectorize import first_lang_in_tag, vector_postings

__all__ = [
    "DEFAULT_LANGUAGES",
    "ClusterRun",
    "ClusterSummary",
    "DominantLanguageRule",
    "GroupedQuestion",
    "KMeansConfig",
    "KMeansResult",
    "ScoredQuestion",
    "answer_high_score",
    "assign_closest",
    "average_vectors",
    "build_vectors",
    "cluster_results",
    "converged",
    "dominant_language_index",
    "euclidean_distance",
    "find_closest",
    "first_lang_in_tag",
    "format_results",
    "grouped_postings",
    "kmeans",
    "median_vectors",
    "reservoir_sampling",
    "run_pipeline",
    "sample_vectors",
    "scored_postings",
    "summaries_to_frame",
    "summarize_cluster",
    "total_distance",
    "vector_postings",
]
