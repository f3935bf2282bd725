"""Tests for configuration, grouping, scoring and vectorization."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.bulk import LocalCollection
from src.clustering import (
    DEFAULT_LANGUAGES,
    KMeansConfig,
    answer_high_score,
    first_lang_in_tag,
    grouped_postings,
    scored_postings,
    vector_postings,
)
from src.postings import Posting, PostingKind


def _question(qid: int, tag: Optional[str], score: int = 0) -> Posting:
    return Posting(PostingKind.QUESTION, qid, None, None, score, tag)


def _answer(aid: int, parent: Optional[int], score: int) -> Posting:
    return Posting(PostingKind.ANSWER, aid, None, parent, score, None)


# ---------------------------------------------------------------------------
# Configuration


def test_default_config_is_valid() -> None:
    config = KMeansConfig()
    config.validate()

    assert config.languages == DEFAULT_LANGUAGES
    assert len(config.languages) == 15
    assert config.per_language == 3
    assert config.stratified is True
    assert config.language_label(3 * config.lang_spread) == "Python"


@pytest.mark.parametrize(
    "overrides",
    [
        {"lang_spread": 0},
        {"lang_spread": -5},
        {"kernels": 44},
        {"kernels": 0},
        {"languages": ()},
        {"max_iterations": 0},
        {"eta": float("nan")},
        {"dominant_language": "loudest"},
    ],
)
def test_config_violations_raise(overrides: dict) -> None:
    with pytest.raises(ValueError):
        KMeansConfig(**overrides).validate()


def test_small_spread_disables_stratification() -> None:
    assert KMeansConfig(lang_spread=499).stratified is False
    assert KMeansConfig(lang_spread=500).stratified is True


# ---------------------------------------------------------------------------
# Grouping


def test_grouping_pairs_questions_with_answers() -> None:
    postings = LocalCollection.from_iterable(
        [
            _question(1, "Java"),
            _answer(2, 1, 5),
            _answer(3, 1, 9),
            _question(4, "Scala"),  # never answered
            _answer(5, 99, 7),  # parent question missing from the dump
            _answer(6, None, 1),
            _question(7, "Ruby"),
            _answer(8, 7, 2),
        ],
        num_partitions=3,
    )

    grouped = dict(grouped_postings(postings).collect())

    assert sorted(grouped) == [1, 7]
    assert sorted(answer.id for question, answer in grouped[1]) == [2, 3]
    assert all(question.id == 1 for question, _ in grouped[1])
    assert [(q.id, a.id) for q, a in grouped[7]] == [(7, 8)]


def test_grouping_honours_partition_override() -> None:
    postings = LocalCollection.from_iterable([_question(1, "Java"), _answer(2, 1, 5)], num_partitions=2)

    grouped = grouped_postings(postings, num_partitions=5)

    assert grouped.num_partitions == 5
    assert grouped.count() == 1


# ---------------------------------------------------------------------------
# Scoring


def test_answer_high_score_picks_maximum() -> None:
    answers = [_answer(1, 10, 3), _answer(2, 10, 11), _answer(3, 10, 7)]

    assert answer_high_score(answers) == 11
    assert answer_high_score(answers[:1]) == 3
    assert answer_high_score([]) == 0


def test_answer_high_score_ignores_accepted_answer() -> None:
    accepted = Posting(PostingKind.ANSWER, 1, None, 10, 2, None)
    assert answer_high_score([accepted, _answer(2, 10, 8)]) == 8


def test_scored_postings_one_entry_per_question() -> None:
    postings = LocalCollection.from_iterable(
        [
            _question(1, "Java"),
            _answer(2, 1, 5),
            _answer(3, 1, 9),
            _question(4, "PHP"),
            _answer(5, 4, -2),
        ],
        num_partitions=2,
    )

    scored = {question.id: score for question, score in scored_postings(grouped_postings(postings)).collect()}

    assert scored == {1: 9, 4: -2}


# ---------------------------------------------------------------------------
# Vectorization


def test_first_lang_in_tag_exact_first_match() -> None:
    languages = ("Java", "JavaScript", "Java")

    assert first_lang_in_tag("Java", languages) == 0
    assert first_lang_in_tag("JavaScript", languages) == 1
    assert first_lang_in_tag("java", languages) is None
    assert first_lang_in_tag("Jav", languages) is None
    assert first_lang_in_tag(None, languages) is None


def test_vector_postings_scales_known_languages() -> None:
    config = KMeansConfig()
    scored = LocalCollection.from_iterable(
        [(_question(idx, language), idx * 2) for idx, language in enumerate(config.languages)]
        + [(_question(100, "COBOL"), 4), (_question(101, None), 5)],
        num_partitions=4,
    )

    vectors = vector_postings(scored, config).collect()

    assert len(vectors) == len(config.languages)
    assert sorted(vectors) == [(idx * config.lang_spread, idx * 2) for idx in range(len(config.languages))]
    assert all(lang % config.lang_spread == 0 for lang, _ in vectors)


def test_vector_postings_validates_config() -> None:
    scored = LocalCollection.from_iterable([(_question(1, "Java"), 3)])
    with pytest.raises(ValueError):
        vector_postings(scored, KMeansConfig(lang_spread=0))
