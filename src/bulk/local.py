"""Single-process backend for the bulk-collection protocol."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")
U = TypeVar("U")

Partitions = List[List[Any]]


def _validate_partitions(num_partitions: int) -> int:
    if num_partitions < 1:
        raise ValueError(f"num_partitions must be at least 1, received {num_partitions}.")
    return num_partitions


def _hash_partition(records: Iterable[Tuple[Any, Any]], num_partitions: int) -> Partitions:
    buckets: Partitions = [[] for _ in range(num_partitions)]
    for record in records:
        buckets[hash(record[0]) % num_partitions].append(record)
    return buckets


class LocalCollection(Generic[T]):
    """Lazy, partitioned in-memory collection.

    Each instance keeps a reference to the function that computes its
    partitions from the parent lineage. Materialising a collection re-runs that
    lineage every time unless `cache()` was called on it.
    """

    def __init__(self, compute: Callable[[], Partitions], num_partitions: int) -> None:
        self._compute = compute
        self._num_partitions = _validate_partitions(num_partitions)
        self._persist = False
        self._cached: Optional[Partitions] = None

    @classmethod
    def from_iterable(cls, items: Iterable[T], num_partitions: int = 1) -> "LocalCollection[T]":
        """Split `items` into contiguous slices, one per partition."""
        _validate_partitions(num_partitions)
        data = list(items)
        bounds = np.linspace(0, len(data), num_partitions + 1).astype(int)
        partitions = [data[start:stop] for start, stop in zip(bounds[:-1], bounds[1:])]
        return cls(lambda: partitions, num_partitions)

    # ------------------------------------------------------------------
    # Materialisation

    @property
    def num_partitions(self) -> int:
        return self._num_partitions

    @property
    def is_cached(self) -> bool:
        return self._persist

    def partitions(self) -> Partitions:
        """Compute (or reuse) the partitions backing this collection."""
        if self._cached is not None:
            return self._cached
        parts = [list(part) for part in self._compute()]
        if self._persist:
            self._cached = parts
        return parts

    def cache(self) -> "LocalCollection[T]":
        """Mark the collection for memoisation on its next materialisation."""
        self._persist = True
        return self

    def unpersist(self) -> "LocalCollection[T]":
        self._persist = False
        self._cached = None
        return self

    def collect(self) -> List[T]:
        return [item for part in self.partitions() for item in part]

    def count(self) -> int:
        return sum(len(part) for part in self.partitions())

    def take_sample(self, size: int, seed: int) -> List[T]:
        """Sample `size` elements without replacement, or every element if fewer exist."""
        if size < 0:
            raise ValueError("Sample size cannot be negative.")
        items = self.collect()
        rng = np.random.default_rng(seed)
        if size >= len(items):
            order = rng.permutation(len(items))
        else:
            order = rng.choice(len(items), size=size, replace=False)
        return [items[int(idx)] for idx in order]

    # ------------------------------------------------------------------
    # Narrow transformations

    def map_partitions(self, fn: Callable[[List[T]], Iterable[U]]) -> "LocalCollection[U]":
        parent = self
        return LocalCollection(lambda: [list(fn(part)) for part in parent.partitions()], self._num_partitions)

    def map(self, fn: Callable[[T], U]) -> "LocalCollection[U]":
        return self.map_partitions(lambda part: [fn(item) for item in part])

    def filter(self, fn: Callable[[T], bool]) -> "LocalCollection[T]":
        return self.map_partitions(lambda part: [item for item in part if fn(item)])

    def flat_map(self, fn: Callable[[T], Iterable[U]]) -> "LocalCollection[U]":
        return self.map_partitions(lambda part: [out for item in part for out in fn(item)])

    def key_by(self, fn: Callable[[T], Any]) -> "LocalCollection[Tuple[Any, T]]":
        return self.map(lambda item: (fn(item), item))

    def map_values(self, fn: Callable[[Any], U]) -> "LocalCollection[Tuple[Any, U]]":
        return self.map(lambda pair: (pair[0], fn(pair[1])))  # type: ignore[index]

    def keys(self) -> "LocalCollection[Any]":
        return self.map(lambda pair: pair[0])  # type: ignore[index]

    def values(self) -> "LocalCollection[Any]":
        return self.map(lambda pair: pair[1])  # type: ignore[index]

    # ------------------------------------------------------------------
    # Shuffles

    def partition_by(self, num_partitions: int) -> "LocalCollection[T]":
        """Hash-partition a keyed collection so equal keys share a partition."""
        _validate_partitions(num_partitions)
        parent = self

        def compute() -> Partitions:
            return _hash_partition(parent.collect(), num_partitions)  # type: ignore[arg-type]

        return LocalCollection(compute, num_partitions)

    def join(
        self, other: "LocalCollection[Tuple[Any, U]]", num_partitions: Optional[int] = None
    ) -> "LocalCollection[Tuple[Any, Tuple[Any, U]]]":
        """Inner join on key; keys missing from either side are dropped."""
        target = num_partitions or max(self._num_partitions, other.num_partitions)
        left = self.partition_by(target)
        right = other.partition_by(target)

        def compute() -> Partitions:
            joined: Partitions = []
            for left_part, right_part in zip(left.partitions(), right.partitions()):
                lookup: Dict[Any, List[Any]] = defaultdict(list)
                for key, value in right_part:
                    lookup[key].append(value)
                joined.append(
                    [(key, (value, match)) for key, value in left_part for match in lookup.get(key, ())]
                )
            return joined

        return LocalCollection(compute, target)

    def group_by_key(self, num_partitions: Optional[int] = None) -> "LocalCollection[Tuple[Any, List[Any]]]":
        shuffled = self.partition_by(num_partitions or self._num_partitions)

        def group(part: List[Any]) -> List[Tuple[Any, List[Any]]]:
            groups: Dict[Any, List[Any]] = defaultdict(list)
            for key, value in part:
                groups[key].append(value)
            return list(groups.items())

        return shuffled.map_partitions(group)

    def reduce_by_key(
        self, fn: Callable[[Any, Any], Any], num_partitions: Optional[int] = None
    ) -> "LocalCollection[Tuple[Any, Any]]":
        """Merge values per key, combining inside each partition before the shuffle."""

        def combine(part: Sequence[Tuple[Any, Any]]) -> List[Tuple[Any, Any]]:
            merged: Dict[Any, Any] = {}
            for key, value in part:
                merged[key] = fn(merged[key], value) if key in merged else value
            return list(merged.items())

        return self.map_partitions(combine).partition_by(num_partitions or self._num_partitions).map_partitions(
            combine
        )


__all__ = ["LocalCollection"]
