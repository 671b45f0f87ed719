"""
segprimes: primes and factorizations from a segmented sieve of Eratosthenes.

All streams are lazy and keep memory bounded: one fixed-width window over
the odd integers plus the primes up to the square root of the bound.

    >>> list(first(10))
    [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    >>> list(below(30))
    [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    >>> nth(100)
    541
    >>> list(divisors(504))
    [(2, 3), (3, 2), (7, 1)]
    >>> is_prime(53)
    True
"""

from __future__ import annotations

from typing import Optional

from .errors import OutOfRangeError, U64_MAX
from .sieve import SIZE, Segment
from .streams import Divisors, Primes, PrimesBelow

__version__ = "0.1.0"

__all__ = [
    "first", "below", "nth", "divisors", "is_prime",
    "Primes", "PrimesBelow", "Divisors", "Segment",
    "OutOfRangeError", "SIZE", "U64_MAX",
]


def first(n: int, window: int = SIZE) -> Primes:
    """Iterator over the first n primes."""
    return Primes(n, window)


def below(n: int, window: int = SIZE) -> PrimesBelow:
    """Iterator over the primes less than or equal to n."""
    return PrimesBelow(n, window)


def nth(n: int, window: int = SIZE) -> Optional[int]:
    """The nth prime, with nth(1) == 2. Returns None for n == 0."""
    last = None
    for last in first(n, window):
        pass
    return last


def divisors(n: int, window: int = SIZE) -> Divisors:
    """
    Iterator over the prime divisors of n and their exponents, ascending.

    (2, 4) means 2**4 divides n and 2**5 does not.

        >>> list(divisors(25))
        [(5, 2)]
        >>> list(divisors(53))
        [(53, 1)]
    """
    return Divisors(n, window)


def is_prime(n: int, window: int = SIZE) -> bool:
    """True iff n is prime."""
    d = divisors(n, window).step()
    return d is not None and d[0] == n
