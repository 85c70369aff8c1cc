"""
Iterator Adapters

Lazy stages that wrap a sentence iterator and expose the same
iterator protocol, so they can be chained freely:

    source -> LengthFilter -> LocalShuffle -> consumer

A read failure is an exception raised by the inner iterator's
``__next__``. Both adapters let it propagate unchanged; the adapter
(and its source) can be polled again after it.
"""

import random
from typing import Any, Callable, Iterator, Optional, TypeVar

from .random_remove_vec import RandomRemoveVec

T = TypeVar("T")


def _close_inner(inner: Any):
    close = getattr(inner, "close", None)
    if close is not None:
        close()


class LengthFilter(Iterator[T]):
    """
    Skip records longer than ``max_len``.

    Kept records come out in their original order. Failures are passed
    on as they are and never counted against ``max_len``.

    Args:
        inner: Iterator over records
        max_len: Maximum record length to keep (inclusive)
        length: Function returning the length of a record (default ``len``)
    """

    def __init__(self, inner: Iterator[T], max_len: int, length: Callable[[T], int] = len):
        if max_len < 0:
            raise ValueError(f"max_len must be non-negative, got {max_len}")

        self.inner = inner
        self.max_len = max_len
        self.length = length
        self.skipped = 0

    def __iter__(self) -> "LengthFilter[T]":
        return self

    def __next__(self) -> T:
        while True:
            record = next(self.inner)
            if self.length(record) <= self.max_len:
                return record
            self.skipped += 1

    def close(self):
        """Close the inner iterator, if it can be closed"""
        _close_inner(self.inner)


class LocalShuffle(Iterator[T]):
    """
    Approximate shuffling with a bounded buffer.

    The first pull fills a buffer with ``buffer_size`` records. Every
    later pull pushes the next incoming record into the buffer and
    returns a random occupant. Once the inner iterator is exhausted the
    buffer is drained in random order.

    At most ``buffer_size`` records are held between pulls, so memory
    use does not depend on the corpus size. A failure from the inner
    iterator is re-raised without touching the buffer; if it happens
    while filling, the next pull carries on filling.

    Args:
        inner: Iterator over records
        buffer_size: Number of records to buffer (0 disables shuffling)
        rng: Random number generator owned by this shuffler. Seeded from
            system entropy if not given.

    Example:
        >>> shuffled = LocalShuffle(iter(range(10)), 4, random.Random(1))
        >>> sorted(shuffled)
        [0, 1, 2, 3, 4, 5, 6, 7, 8, 9]
    """

    def __init__(self, inner: Iterator[T], buffer_size: int, rng: Optional[random.Random] = None):
        if buffer_size < 0:
            raise ValueError(f"buffer_size must be non-negative, got {buffer_size}")

        self.inner = inner
        self.buffer_size = buffer_size
        self._buffer: RandomRemoveVec[T] = RandomRemoveVec.with_capacity(
            buffer_size, rng if rng is not None else random.Random()
        )
        self._filled = False

    @property
    def buffered(self) -> int:
        """Number of records currently held in the buffer"""
        return len(self._buffer)

    def __iter__(self) -> "LocalShuffle[T]":
        return self

    def _fill(self):
        while len(self._buffer) < self.buffer_size:
            try:
                record = next(self.inner)
            except StopIteration:
                break
            self._buffer.push(record)
        self._filled = True

    def __next__(self) -> T:
        if self.buffer_size == 0:
            return next(self.inner)

        if not self._filled or self._buffer.is_empty():
            self._fill()

        try:
            record = next(self.inner)
        except StopIteration:
            drained = self._buffer.remove_random()
            if drained is None:
                raise
            return drained

        return self._buffer.push_and_remove_random(record)

    def close(self):
        """Close the inner iterator, if it can be closed. Buffered records are kept."""
        _close_inner(self.inner)
