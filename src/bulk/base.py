"""Protocol describing the partitioned bulk-collection surface used by the pipeline."""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, Optional, Protocol, Tuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
W = TypeVar("W")


class BulkCollection(Protocol[T]):
    """Minimal surface area for a lazily evaluated, partitioned collection.

    Transformations are pure and return a new collection. Nothing is computed
    until `collect`, `count` or `take_sample` materialises the result, and a
    shuffle (`partition_by`, `join`, `group_by_key`, `reduce_by_key`) is a full
    barrier over the parent collection.
    """

    @property
    def num_partitions(self) -> int: ...

    def map(self, fn: Callable[[T], U]) -> "BulkCollection[U]": ...

    def filter(self, fn: Callable[[T], bool]) -> "BulkCollection[T]": ...

    def flat_map(self, fn: Callable[[T], Iterable[U]]) -> "BulkCollection[U]": ...

    def map_partitions(self, fn: Callable[[List[T]], Iterable[U]]) -> "BulkCollection[U]": ...

    def key_by(self, fn: Callable[[T], K]) -> "BulkCollection[Tuple[K, T]]": ...

    def map_values(self, fn: Callable[[V], W]) -> "BulkCollection[Tuple[K, W]]": ...

    def keys(self) -> "BulkCollection[K]": ...

    def values(self) -> "BulkCollection[V]": ...

    def partition_by(self, num_partitions: int) -> "BulkCollection[T]": ...

    def join(
        self, other: "BulkCollection[Tuple[K, W]]", num_partitions: Optional[int] = None
    ) -> "BulkCollection[Tuple[K, Tuple[V, W]]]": ...

    def group_by_key(self, num_partitions: Optional[int] = None) -> "BulkCollection[Tuple[K, List[V]]]": ...

    def reduce_by_key(
        self, fn: Callable[[V, V], V], num_partitions: Optional[int] = None
    ) -> "BulkCollection[Tuple[K, V]]": ...

    def cache(self) -> "BulkCollection[T]": ...

    def collect(self) -> List[T]: ...

    def count(self) -> int: ...

    def take_sample(self, size: int, seed: int) -> List[T]: ...


__all__ = ["BulkCollection"]
