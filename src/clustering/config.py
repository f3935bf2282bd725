"""Static configuration for the language/score k-means clustering."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Tuple, get_args

DominantLanguageRule = Literal["highest-index", "most-frequent"]

# Default dump location used by the Typer CLI; callers may override it.
DEFAULT_INPUT_PATH = Path("data/raw/stackoverflow.csv")

# Order matters: a language's position is its index on the first vector axis.
DEFAULT_LANGUAGES: Tuple[str, ...] = (
    "JavaScript",
    "Java",
    "PHP",
    "Python",
    "C#",
    "C++",
    "Ruby",
    "CSS",
    "Objective-C",
    "Perl",
    "Scala",
    "Haskell",
    "MATLAB",
    "Clojure",
    "Groovy",
)

# Below this spread languages no longer dominate the distance, so seeds are drawn globally.
STRATIFIED_SAMPLING_MIN_SPREAD = 500


@dataclass(frozen=True)
class KMeansConfig:
    """Parameters shared by every stage of the clustering pipeline.

    Attributes:
        languages: Ordered language tags; the position of a tag is its language index.
        lang_spread: Distance placed between two consecutive languages on the first axis.
        kernels: Total number of centroids, a multiple of the language count.
        eta: Convergence threshold on the summed squared centroid movement.
        max_iterations: Hard cap on k-means iterations.
        dominant_language: How a cluster's dominant language is selected.
        sample_seed: Seed for the non-stratified sampling branch.
    """

    languages: Tuple[str, ...] = DEFAULT_LANGUAGES
    lang_spread: int = 50000
    kernels: int = 45
    eta: float = 20.0
    max_iterations: int = 120
    dominant_language: DominantLanguageRule = "highest-index"
    sample_seed: int = 42

    def validate(self) -> None:
        if not self.languages:
            raise ValueError("At least one language must be configured.")
        if self.lang_spread <= 0:
            raise ValueError("lang_spread must be positive, otherwise the language cannot be recovered from a vector.")
        if self.kernels <= 0:
            raise ValueError("kernels must be positive.")
        if self.kernels % len(self.languages) != 0:
            raise ValueError(
                f"kernels ({self.kernels}) should be a multiple of the number of languages studied "
                f"({len(self.languages)})."
            )
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1.")
        if not math.isfinite(self.eta) or self.eta < 0:
            raise ValueError("eta must be a finite, non-negative number.")
        if self.dominant_language not in get_args(DominantLanguageRule):
            raise ValueError(f"Unknown dominant language rule '{self.dominant_language}'.")

    @property
    def per_language(self) -> int:
        """Number of seed centroids drawn from each language."""
        return self.kernels // len(self.languages)

    @property
    def stratified(self) -> bool:
        return self.lang_spread >= STRATIFIED_SAMPLING_MIN_SPREAD

    def language_label(self, lang_index: int) -> str:
        """Map a scaled language index back to its tag."""
        return self.languages[lang_index // self.lang_spread]


__all__ = [
    "DEFAULT_INPUT_PATH",
    "DEFAULT_LANGUAGES",
    "DominantLanguageRule",
    "KMeansConfig",
    "STRATIFIED_SAMPLING_MIN_SPREAD",
]
