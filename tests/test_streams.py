import pytest

from segprimes.errors import OutOfRangeError
from segprimes.streams import SMALL_BOUND, Divisors, Primes, PrimesBelow, count_bound


def test_count_bound_small():
    for n in range(0, 6):
        assert count_bound(n) == SMALL_BOUND


def test_count_bound_never_underestimates(ref_primes):
    for n in range(1, 2000):
        assert count_bound(n) >= ref_primes[n - 1], n


@pytest.mark.parametrize("window", [1, 2, 16, 1000])
def test_primes_matches_reference_for_any_window(window, ref_primes):
    assert list(Primes(300, window)) == ref_primes[:300]


@pytest.mark.parametrize("window", [1, 3, 8, 64])
def test_primes_below_matches_reference_for_any_window(window, ref_primes):
    for limit in (0, 1, 2, 3, 4, 9, 10, 25, 49, 50, 127, 128, 129, 997, 2000):
        assert list(PrimesBelow(limit, window)) == [p for p in ref_primes if p <= limit], limit


def test_window_advances_are_counted(ref_primes):
    stream = PrimesBelow(2000, 16)
    assert list(stream) == [p for p in ref_primes if p <= 2000]
    assert stream.windows >= 3
    assert stream.produced == 303


def test_retained_primes_stop_at_square_root(ref_primes):
    stream = PrimesBelow(10_000, 64)
    for _ in stream:
        pass
    assert stream.primes == [p for p in ref_primes if 3 <= p <= 100]


def test_retained_primes_use_count_bound(ref_primes):
    stream = Primes(1000, 128)
    values = list(stream)
    assert values[-1] == 7919
    assert all(p * p <= stream.bound for p in stream.primes)
    assert stream.primes == [p for p in ref_primes if p >= 3 and p * p <= stream.bound]


def test_step_stays_ended():
    stream = Primes(2)
    assert [stream.step(), stream.step()] == [2, 3]
    assert stream.step() is None
    assert stream.step() is None
    assert stream.done

    below = PrimesBelow(10)
    assert list(below) == [2, 3, 5, 7]
    assert below.step() is None


def test_count_stream_stops_past_bound():
    stream = Primes(10, 4)
    stream.bound = 20
    assert list(stream) == [2, 3, 5, 7, 11, 13, 17, 19]
    assert stream.done
    assert stream.count > 0
    assert stream.step() is None


def test_iterator_protocol():
    stream = Primes(3)
    assert iter(stream) is stream
    assert next(stream) == 2
    assert list(stream) == [3, 5]
    with pytest.raises(StopIteration):
        next(stream)


def test_interleaved_streams_are_independent(ref_primes):
    a = PrimesBelow(5000, 32)
    b = Primes(400, 16)
    c = PrimesBelow(5000, 32)
    out_a, out_b, out_c = [], [], []
    for y, x, z in zip(b, a, c):
        out_a.append(x)
        out_b.append(y)
        out_c.append(z)
    out_a.extend(a)
    out_c.extend(c)
    assert out_b == ref_primes[:400]
    assert out_a == out_c == [p for p in ref_primes if p <= 5000]


def test_divisors_step_protocol():
    d = Divisors(504)
    assert d.step() == (2, 3)
    assert d.remaining == 63
    assert d.step() == (3, 2)
    assert d.step() == (7, 1)
    assert d.remaining == 1
    assert d.step() is None


def test_divisors_of_prime_square_and_prime_power():
    assert list(Divisors(49, 1)) == [(7, 2)]
    assert list(Divisors(2 ** 10)) == [(2, 10)]
    assert list(Divisors(3 ** 7 * 5, 2)) == [(3, 7), (5, 1)]


def test_divisors_large_cofactor():
    # 2**64 - 1 = 3 * 5 * 17 * 257 * 641 * 65537 * 6700417
    assert list(Divisors(2 ** 64 - 1)) == [
        (3, 1), (5, 1), (17, 1), (257, 1), (641, 1), (65537, 1), (6700417, 1),
    ]


@pytest.mark.parametrize("cls", [Primes, PrimesBelow, Divisors])
def test_input_validation(cls):
    with pytest.raises(OutOfRangeError):
        cls(-1)
    with pytest.raises(ValueError):
        cls(2 ** 64)
    with pytest.raises(TypeError):
        cls(2.5)
    with pytest.raises(TypeError):
        cls(True)
    with pytest.raises(ValueError):
        cls(10, 0)
