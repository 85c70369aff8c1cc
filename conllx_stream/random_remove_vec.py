"""
Random Removal Buffer

Unordered container with O(1) removal of a uniformly chosen element.
This is the storage behind the local shuffle: records are pushed in
arrival order and evicted at random.
"""

import random
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class RandomRemoveVec(Generic[T]):
    """
    A list that only supports removing random elements.

    Removal swaps the chosen element with the last one and pops it,
    so the order of the remaining elements has no meaning.

    Every random removal makes exactly one ``rng.randrange(n)`` call,
    where ``n`` is the number of elements at the time of the draw.
    A second generator with the same seed therefore predicts the
    removed indices.

    Args:
        rng: Random number generator, owned by the buffer from now on

    Example:
        >>> buf = RandomRemoveVec.with_capacity(2, random.Random(42))
        >>> buf.push("a")
        >>> buf.push("b")
        >>> buf.push_and_remove_random("c") in ("a", "b", "c")
        True
    """

    def __init__(self, rng: random.Random):
        self._inner: List[T] = []
        self._rng = rng
        self._capacity = 0

    @classmethod
    def with_capacity(cls, capacity: int, rng: random.Random) -> "RandomRemoveVec[T]":
        """
        Create a buffer meant to hold ``capacity`` elements.

        Room is reserved for one extra element, the incoming one in
        ``push_and_remove_random``.
        """
        buf = cls(rng)
        buf._capacity = capacity + 1
        return buf

    @property
    def capacity(self) -> int:
        """Reserved number of slots (``capacity + 1``)"""
        return self._capacity

    def is_empty(self) -> bool:
        return not self._inner

    def push(self, value: T):
        self._inner.append(value)

    def len(self) -> int:
        return len(self._inner)

    def __len__(self) -> int:
        return len(self._inner)

    def remove_random(self) -> Optional[T]:
        """
        Remove a random element.

        Returns:
            The removed element, or None if the buffer is empty
        """
        if not self._inner:
            return None
        return self._swap_remove(self._rng.randrange(len(self._inner)))

    def push_and_remove_random(self, replacement: T) -> T:
        """
        Add ``replacement`` and remove a random element.

        ``replacement`` takes part in the draw, so it can be returned
        right away.
        """
        self._inner.append(replacement)
        return self._swap_remove(self._rng.randrange(len(self._inner)))

    def _swap_remove(self, index: int) -> T:
        last = self._inner.pop()
        if index == len(self._inner):
            return last
        value = self._inner[index]
        self._inner[index] = last
        return value

    def __repr__(self) -> str:
        return f"RandomRemoveVec({self._inner!r})"
