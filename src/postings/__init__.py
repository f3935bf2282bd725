"""Posting records and the reader for the raw dump."""

from .parser import load_postings, parse_posting, read_postings
from .records import QID, Answer, HighScore, LangIndex, Posting, PostingKind, Question, Vector

__all__ = [
    "Answer",
    "HighScore",
    "LangIndex",
    "Posting",
    "PostingKind",
    "QID",
    "Question",
    "Vector",
    "load_postings",
    "parse_posting",
    "read_postings",
]
