import pytest


def trial_primes(limit):
    """Reference primes <= limit by trial division."""
    out = []
    for n in range(2, limit + 1):
        if all(n % p for p in out if p * p <= n):
            out.append(n)
    return out


@pytest.fixture(scope="session")
def ref_primes():
    return trial_primes(20_000)
