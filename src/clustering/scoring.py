"""Reduce each question bundle to the best answer score."""

from __future__ import annotations

from typing import Iterable, Tuple

from src.bulk import LocalCollection
from src.postings import Answer, HighScore, Question

from .grouping import GroupedQuestion

ScoredQuestion = Tuple[Question, HighScore]


def answer_high_score(answers: Iterable[Answer]) -> HighScore:
    """Highest answer score, not necessarily the accepted one; 0 when there are no answers."""
    return max((answer.score for answer in answers), default=0)


def _score_bundle(bundle: GroupedQuestion) -> ScoredQuestion:
    _, pairs = bundle
    if not pairs:
        raise ValueError(f"Question {bundle[0]} has an empty answer bundle.")
    # Every pair carries the same question.
    question = pairs[0][0]
    return question, answer_high_score(answer for _, answer in pairs)


def scored_postings(grouped: LocalCollection[GroupedQuestion]) -> LocalCollection[ScoredQuestion]:
    """Pair each grouped question with the score of its highest-rated answer."""
    return grouped.map(_score_bundle)


__all__ = ["ScoredQuestion", "answer_high_score", "scored_postings"]
