#!/usr/bin/env python3
"""
segprimes: command line

Lazy prime enumeration and factorization with a segmented sieve.

Usage examples:
  - The first 20 primes, one per line:
      segprimes --first 20 --print-primes

  - Primes up to 1_000_000 with gap statistics and a histogram:
      segprimes --below 1000000 --stats gaps.json --png gaps.png

  - Factor a number:
      segprimes --divisors 504          # 2^3 * 3^2 * 7

  - Check against the reference table and time nth():
      segprimes --verify --max-nth 1000000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import List, Optional, Sequence, Tuple

from . import below, divisors, first, is_prime, nth
from .errors import OutOfRangeError, check_u64
from .sieve import SIZE
from .stats import gap_summary, save_gap_png

logger = logging.getLogger(__name__)

TEN = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29)

NTH_TABLE: Tuple[Tuple[int, int], ...] = (
    (5, 11),
    (10, 29),
    (25, 97),
    (50, 229),
    (100, 541),
    (1_000, 7_919),
    (10_000, 104_729),
    (100_000, 1_299_709),
    (1_000_000, 15_485_863),
    (10_000_000, 179_424_673),
    (100_000_000, 2_038_074_743),
)


def u64(val: str) -> int:
    """argparse type for an unsigned 64-bit integer (underscores allowed)."""
    try:
        n = int(str(val).strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer: {val}")
    try:
        return check_u64(n)
    except OutOfRangeError as e:
        raise argparse.ArgumentTypeError(str(e))


def window_size(val: str) -> int:
    try:
        w = int(str(val).strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid window size: {val}")
    if w < 1:
        raise argparse.ArgumentTypeError(f"Window size must be >= 1, got {w}")
    return w


def format_factors(pairs: Sequence[Tuple[int, int]]) -> str:
    if not pairs:
        return "1"
    return " * ".join(f"{p}^{e}" if e > 1 else f"{p}" for (p, e) in pairs)


def verify(max_nth: int = 1_000_000, window: int = SIZE) -> bool:
    """
    Check first() and below() against the first ten primes, then time nth()
    for every reference entry with index <= max_nth.
    """
    for i in range(0, 11):
        got = list(first(i, window))
        if got != list(TEN[:i]):
            print(f"First {i} failed")
            print(f"Expected: {list(TEN[:i])}")
            print(f"Got: {got}")
            return False
    print("First passed")

    j = 0
    for i in range(0, 30):
        if j < len(TEN) and TEN[j] == i:
            j += 1
        got = list(below(i, window))
        if got != list(TEN[:j]):
            print(f"Below {i} failed")
            print(f"Expected: {list(TEN[:j])}")
            print(f"Got: {got}")
            return False
    print("Below passed")

    for (i, x) in NTH_TABLE:
        if i > max_nth:
            logger.info("skipping nth(%d), above --max-nth %d", i, max_nth)
            continue
        t0 = time.perf_counter()
        prime = nth(i, window)
        ms = (time.perf_counter() - t0) * 1000.0
        if prime != x:
            print(f"{i}th failed")
            print(f"Expected: {x}")
            print(f"Got: {prime}")
            return False
        print(f"{i}th succeeded in {ms:.3f}ms")
    return True


def enumerate_primes(stream, print_primes: bool, keep: bool) -> List[int]:
    out: List[int] = []
    for p in stream:
        if print_primes:
            print(p)
        if keep:
            out.append(p)
    return out


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="segprimes",
                                description="Segmented-sieve primes and factorizations.")
    action = p.add_mutually_exclusive_group(required=True)
    action.add_argument("--first", type=u64, metavar="N", help="Enumerate the first N primes.")
    action.add_argument("--below", type=u64, metavar="L", help="Enumerate primes <= L.")
    action.add_argument("--nth", type=u64, metavar="N", help="Print the Nth prime (nth 1 = 2).")
    action.add_argument("--divisors", type=u64, metavar="N", help="Print the prime factorization of N.")
    action.add_argument("--is-prime", type=u64, metavar="N", help="Print True if N is prime.")
    action.add_argument("--verify", action="store_true",
                        help="Check against known values and time nth() on the reference table.")
    p.add_argument("--window", type=window_size, default=SIZE,
                   help=f"Sieve window width in odd slots (default {SIZE}).")
    p.add_argument("--max-nth", type=u64, default=1_000_000,
                   help="(verify) Largest reference index to time (default 1000000).")
    p.add_argument("--print-primes", action="store_true", help="(first/below) Print each prime.")
    p.add_argument("--stats", type=str, default=None, help="(first/below) Optional stats JSON path.")
    p.add_argument("--png", type=str, default=None, help="(first/below) Optional gap histogram PNG path.")
    p.add_argument("--png-log", action="store_true", help="Log-scale frequencies in the PNG.")
    p.add_argument("-d", "--debug", action="store_true", help="Enable debug logging.")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    if args.first is None and args.below is None:
        used = [flag for flag, on in (("--print-primes", args.print_primes),
                                      ("--stats", args.stats),
                                      ("--png", args.png),
                                      ("--png-log", args.png_log)) if on]
        if used:
            ap.error(f"{', '.join(used)} only apply to --first or --below")

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.verify:
        return 0 if verify(args.max_nth, args.window) else 1

    if args.nth is not None:
        v = nth(args.nth, args.window)
        print("none" if v is None else v)
        return 0

    if args.divisors is not None:
        pairs = list(divisors(args.divisors, args.window))
        print(f"{args.divisors} = {format_factors(pairs)}")
        return 0

    if args.is_prime is not None:
        print(is_prime(args.is_prime, args.window))
        return 0

    if args.first is not None:
        stream = first(args.first, args.window)
    else:
        stream = below(args.below, args.window)

    keep = bool(args.stats or args.png)
    t0 = time.perf_counter()
    primes = enumerate_primes(stream, args.print_primes, keep)
    elapsed = time.perf_counter() - t0

    if not args.print_primes:
        print("--- stats ---")
        print(f"primes found   : {stream.produced}")
        print(f"largest prime  : {stream.last if stream.produced else 'none'}")
        print(f"windows        : {stream.windows}")
        print(f"retained |P|   : {len(stream.primes)}")
        print(f"elapsed        : {elapsed:.3f}s")

    if args.stats:
        stats = {
            "mode": "first" if args.first is not None else "below",
            "argument": args.first if args.first is not None else args.below,
            "window": args.window,
            "windows_advanced": stream.windows,
            "retained_primes": len(stream.primes),
            "elapsed_sec": elapsed,
            "gaps": gap_summary(primes),
        }
        with open(args.stats, "w") as jf:
            json.dump(stats, jf, indent=2)
        print(f"[saved] {args.stats}")

    if args.png:
        save_gap_png(primes, args.png, log_scale=args.png_log)
        print(f"[saved] {args.png}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
