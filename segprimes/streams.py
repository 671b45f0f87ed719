"""
Pull-based prime and factorization streams on top of a sliding Segment.

Each stream is an explicit state object: step() produces the next value or
None once the stream has ended, and the iterator protocol is a thin wrapper
around it. Streams own their Segment and retained-prime list outright, so
independent streams never interact.
"""

from __future__ import annotations

import logging
import math
from math import isqrt
from typing import Iterator, List, Optional, Tuple

from .errors import check_u64, check_window
from .sieve import SIZE, Segment

logger = logging.getLogger(__name__)

SMALL_BOUND = 11


def count_bound(n: int) -> int:
    """
    Upper estimate for the nth prime: ceil(n (ln n + ln ln n)) for n > 5,
    SMALL_BOUND otherwise (the 5th prime is 11).
    """
    if n <= 5:
        return SMALL_BOUND
    ln = math.log(n)
    return math.ceil(n * (ln + math.log(ln)))


class _SegmentedPrimes:
    """Shared state for the count- and value-bounded prime streams."""

    def __init__(self, window: int = SIZE):
        window = check_window(window)
        self.primes: List[int] = [3]          # retained primes, p*p within the bound
        self.sieve = Segment(3, window)
        self.sieve.cursor = 1                 # 3 is handed out directly
        self.last: int = 1
        self.done: bool = False
        # stats
        self.produced: int = 0
        self.windows: int = 0

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        v = self.step()
        if v is None:
            raise StopIteration
        return v

    def step(self) -> Optional[int]:
        raise NotImplementedError

    def _finish(self) -> Optional[int]:
        if not self.done:
            self.done = True
            logger.debug("%s finished after %d primes, %d windows",
                         type(self).__name__, self.produced, self.windows)
        return None

    def _emit(self, v: int) -> int:
        self.last = v
        self.produced += 1
        return v

    def _small(self) -> int:
        # 1 -> 2 -> 3
        return self._emit(self.last + 1)

    def _mark_initial(self) -> None:
        # The first window is sieved incrementally, one prime per step.
        p = self.last
        if self.sieve.initial and p * p <= self.sieve.end:
            self.sieve.mark_multiples(p)

    def _slide(self) -> None:
        self.sieve.advance()
        self.windows += 1
        applied = 0
        for p in self.primes:
            if p * p > self.sieve.end:
                break
            self.sieve.mark_multiples(p)
            applied += 1
        logger.debug("window %d: [%d, %d], %d primes applied",
                     self.windows, self.sieve.start, self.sieve.end, applied)


class Primes(_SegmentedPrimes):
    """
    Count-bounded stream: exactly the first `count` primes.

    The sieve never needs to look past `bound`, an over-estimate of the
    value of the last prime, so only primes up to sqrt(bound) are retained.
    """

    def __init__(self, count: int, window: int = SIZE):
        super().__init__(window)
        self.count: int = check_u64(count, "count")
        self.bound: int = count_bound(count)

    def __repr__(self) -> str:
        return f"Primes(count={self.count}, bound={self.bound}, last={self.last})"

    def step(self) -> Optional[int]:
        if self.done or self.count == 0:
            return self._finish()
        self.count -= 1
        if self.last < 3:
            return self._small()
        self._mark_initial()
        while True:
            v = self.sieve.next_unmarked()
            if v is not None:
                if v > self.bound:
                    logger.debug("candidate %d passed bound %d", v, self.bound)
                    return self._finish()
                if v * v <= self.bound:
                    self.primes.append(v)
                return self._emit(v)
            self._slide()


class PrimesBelow(_SegmentedPrimes):
    """Value-bounded stream: every prime p <= limit, ascending."""

    def __init__(self, limit: int, window: int = SIZE):
        super().__init__(window)
        self.limit: int = check_u64(limit, "limit")

    def __repr__(self) -> str:
        return f"PrimesBelow(limit={self.limit}, last={self.last})"

    def step(self) -> Optional[int]:
        if self.done or self.last >= self.limit:
            return self._finish()
        if self.last < 3:
            return self._small()
        self._mark_initial()
        while True:
            v = self.sieve.next_unmarked()
            if v is not None:
                if v > self.limit:
                    return self._finish()
                if v * v <= self.limit:
                    self.primes.append(v)
                return self._emit(v)
            if self.sieve.end + 1 >= self.limit:
                return self._finish()
            self._slide()


class Divisors:
    """
    Prime factorization of n as a stream of (prime, exponent) pairs.

    Candidates come from a PrimesBelow(isqrt(n)) in ascending order, so by
    the time a candidate p has p*p > remaining, every smaller prime has been
    divided out and whatever remains is itself prime.
    """

    def __init__(self, n: int, window: int = SIZE):
        self.n: int = check_u64(n)
        self.remaining: int = n
        self.primes = PrimesBelow(isqrt(n), window)

    def __repr__(self) -> str:
        return f"Divisors(n={self.n}, remaining={self.remaining})"

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return self

    def __next__(self) -> Tuple[int, int]:
        d = self.step()
        if d is None:
            raise StopIteration
        return d

    def step(self) -> Optional[Tuple[int, int]]:
        while self.remaining > 1:
            p = self.primes.step()
            if p is None or p * p > self.remaining:
                prime = self.remaining
                self.remaining = 1
                return (prime, 1)
            exponent = 0
            while self.remaining % p == 0:
                self.remaining //= p
                exponent += 1
            if exponent > 0:
                return (p, exponent)
        return None
