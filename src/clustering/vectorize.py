"""Project scored questions onto the (language, score) plane."""

from __future__ import annotations

from typing import Optional, Sequence

from src.bulk import LocalCollection
from src.postings import Vector

from .config import KMeansConfig
from .scoring import ScoredQuestion


def first_lang_in_tag(tag: Optional[str], languages: Sequence[str]) -> Optional[int]:
    """Return the index of the first language equal to `tag`, or None."""
    if tag is None:
        return None
    for idx, language in enumerate(languages):
        if tag == language:
            return idx
    return None


def vector_postings(scored: LocalCollection[ScoredQuestion], config: KMeansConfig) -> LocalCollection[Vector]:
    """Turn scored questions into `(lang_index * lang_spread, high_score)` vectors.

    Questions whose tag is not one of the configured languages are dropped.
    """
    config.validate()
    languages = config.languages
    spread = config.lang_spread

    def to_vector(item: ScoredQuestion) -> Sequence[Vector]:
        question, high_score = item
        lang_idx = first_lang_in_tag(question.tag, languages)
        if lang_idx is None:
            return ()
        return ((lang_idx * spread, high_score),)

    return scored.cache().flat_map(to_vector)


__all__ = ["first_lang_in_tag", "vector_postings"]
