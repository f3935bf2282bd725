"""Posting records and the type aliases shared across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

QID = int
HighScore = int
LangIndex = int
Vector = Tuple[LangIndex, HighScore]


class PostingKind(IntEnum):
    """`postTypeId` values found in the raw dump."""

    QUESTION = 1
    ANSWER = 2


@dataclass(frozen=True)
class Posting:
    """A raw StackOverflow posting, either a question or an answer."""

    kind: PostingKind
    id: int
    accepted_answer_id: Optional[int]
    parent_id: Optional[QID]
    score: int
    tag: Optional[str]

    @property
    def is_question(self) -> bool:
        return self.kind is PostingKind.QUESTION

    @property
    def is_answer(self) -> bool:
        return self.kind is PostingKind.ANSWER


# Purely descriptive aliases; both are plain postings distinguished by `kind`.
Question = Posting
Answer = Posting

__all__ = [
    "Answer",
    "HighScore",
    "LangIndex",
    "Posting",
    "PostingKind",
    "QID",
    "Question",
    "Vector",
]
