"""Integer-keyed bucket priority queue used by flood fills over the hex grid."""

from __future__ import annotations

import sys
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


def _search_priority(item) -> int:
    return item.search_priority


class BucketPriorityQueue(Generic[T]):
    """
    Min-priority queue keyed by small non-negative integers.

    Each priority owns a bucket; within a bucket the most recently enqueued
    item is dequeued first. The ``minimum`` cursor only advances between
    clears, so dequeue cost is amortized over a whole flood fill. Buckets stay
    allocated across ``clear()`` calls to be reused by the next fill.
    """

    def __init__(self, priority: Callable[[T], int] = _search_priority) -> None:
        self._priority = priority
        self._buckets: List[List[T]] = []
        self._count = 0
        self.minimum = sys.maxsize

    def __len__(self) -> int:
        return self._count

    def enqueue(self, item: T) -> None:
        self._count += 1
        priority = self._priority(item)
        if priority < self.minimum:
            self.minimum = priority
        while priority >= len(self._buckets):
            self._buckets.append([])
        self._buckets[priority].append(item)

    def dequeue(self) -> Optional[T]:
        """Pop the newest item of the lowest non-empty bucket, or None when empty."""
        if self._count == 0:
            return None
        self._count -= 1
        while self.minimum < len(self._buckets):
            bucket = self._buckets[self.minimum]
            if bucket:
                return bucket.pop()
            self.minimum += 1
        return None

    def change(self, item: T, old_priority: int) -> None:
        """Move ``item`` from ``old_priority`` to its current priority."""
        self._buckets[old_priority].remove(item)
        self.enqueue(item)
        self._count -= 1

    def clear(self) -> None:
        for bucket in self._buckets:
            bucket.clear()
        self._count = 0
        self.minimum = sys.maxsize


__all__ = ["BucketPriorityQueue"]
