"""
Segment: a sliding window of a sieve of Eratosthenes over odd integers.

Slot i of the window stands for the odd value start + 2*i, so even numbers
never take up space. The marks buffer is allocated once and reset in place
each time the window slides forward, which keeps memory at O(size) however
far the sieve has travelled.
"""

from __future__ import annotations

from typing import Optional

SIZE = 64_000

PRIME = 1
COMPOSITE = 0


class Segment:
    """
    Fixed-width window [start, end] of odd integers with one mark per value.
    A slot reads 1 while its value is still a prime candidate and 0 once some
    applied prime has been found to divide it.
    """

    def __init__(self, start: int = 3, size: int = SIZE):
        if start < 3 or start % 2 == 0:
            raise ValueError(f"segment start must be odd and >= 3, got {start}")
        if size < 1:
            raise ValueError(f"segment size must be >= 1, got {size}")
        self.size: int = size
        self.origin: int = start
        self.start: int = start
        self.end: int = start + 2 * (size - 1)
        self.cursor: int = 0
        self._fresh = bytes([PRIME]) * size
        self.marks = bytearray(self._fresh)

    def __repr__(self) -> str:
        return f"Segment(start={self.start}, end={self.end}, cursor={self.cursor})"

    @property
    def initial(self) -> bool:
        """True until the window has been advanced for the first time."""
        return self.start == self.origin

    def first_multiple(self, p: int) -> int:
        """Smallest odd multiple of p that is >= start, or p*p if that is larger."""
        sq = p * p
        if sq >= self.start:
            return sq
        q = self.start // p
        m = q * p
        if q % 2 == 0:
            # m is even, m + p is the next odd multiple
            return m + p
        if m == self.start:
            return m
        return m + 2 * p

    def mark_multiples(self, p: int) -> None:
        """Mark every odd multiple of the odd prime p inside the window as composite."""
        idx = (self.first_multiple(p) - self.start) // 2
        if idx >= self.size:
            return
        count = (self.size - 1 - idx) // p + 1
        self.marks[idx::p] = bytes([COMPOSITE]) * count

    def advance(self) -> None:
        """Slide to the next window. All previous marks are discarded."""
        self.marks[:] = self._fresh
        step = 2 * self.size
        self.start += step
        self.end += step
        self.cursor = 0

    def next_unmarked(self) -> Optional[int]:
        """Return the next value still marked prime, or None once the window is used up."""
        if self.cursor >= self.size:
            return None
        i = self.marks.find(PRIME, self.cursor)
        if i < 0:
            self.cursor = self.size
            return None
        self.cursor = i + 1
        return self.start + 2 * i

    def candidates(self):
        """Values in the window currently marked prime. Walks the whole window; for inspection only."""
        return [self.start + 2 * i for i, ok in enumerate(self.marks) if ok]
