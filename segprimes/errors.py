"""Input range checks shared by the streams and the command line."""

U64_MAX = 2**64 - 1


class OutOfRangeError(ValueError):
    """Raised when an input does not fit in an unsigned 64-bit integer."""


def check_u64(n, name: str = "n") -> int:
    """Return n unchanged if it is an int in [0, 2**64 - 1]."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"{name} must be an int, got {type(n).__name__}")
    if n < 0 or n > U64_MAX:
        raise OutOfRangeError(f"{name} must be in [0, {U64_MAX}], got {n}")
    return n


def check_window(window) -> int:
    if isinstance(window, bool) or not isinstance(window, int):
        raise TypeError(f"window must be an int, got {type(window).__name__}")
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    return window
