"""Pair every question with its answers."""

from __future__ import annotations

from typing import List, Optional, Tuple

from src.bulk import LocalCollection
from src.postings import QID, Answer, Posting, Question

GroupedQuestion = Tuple[QID, List[Tuple[Question, Answer]]]


def grouped_postings(
    postings: LocalCollection[Posting],
    num_partitions: Optional[int] = None,
) -> LocalCollection[GroupedQuestion]:
    """Group questions and answers by QID.

    Questions are keyed by their own id and answers by their parent id. Both
    sides share one hash partitioner so the join and the grouping happen
    partition-locally. The join is an inner join: questions without any answer
    are absent from the result.
    """
    target = num_partitions or postings.num_partitions
    cached = postings.cache()

    questions = cached.filter(lambda post: post.is_question).key_by(lambda post: post.id).partition_by(target).cache()
    answers = (
        cached.filter(lambda post: post.is_answer and post.parent_id is not None)
        .key_by(lambda post: post.parent_id)
        .partition_by(target)
        .cache()
    )

    return questions.join(answers, num_partitions=target).group_by_key(num_partitions=target)


__all__ = ["GroupedQuestion", "grouped_postings"]
