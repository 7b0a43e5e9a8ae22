import numpy as np
import pytest

from conftest import random_complex
from recursive_dft import RecursiveDFT
from twiddle import INVERSE


@pytest.mark.parametrize("n", [1, 2, 4, 8, 16, 64, 256])
def test_forward_matches_numpy(rng, n):
    a = random_complex(rng, n)
    np.testing.assert_allclose(RecursiveDFT().dft(a), np.fft.fft(a), atol=1e-9)


@pytest.mark.parametrize("n", [1, 2, 8, 32])
def test_inverse_matches_numpy(rng, n):
    y = random_complex(rng, n)
    np.testing.assert_allclose(RecursiveDFT().idft(y), np.fft.ifft(y), atol=1e-9)


def test_unnormalised_inverse_transform(rng):
    y = random_complex(rng, 16)
    np.testing.assert_allclose(RecursiveDFT().transform(y, INVERSE), 16 * np.fft.ifft(y), atol=1e-9)


@pytest.mark.parametrize("n", [2, 16, 128])
def test_round_trip(rng, n):
    a = random_complex(rng, n)
    dft = RecursiveDFT()
    np.testing.assert_allclose(dft.idft(dft.dft(a)), a, atol=1e-4)


def test_integer_input_and_length():
    out = RecursiveDFT().dft([1, 2, 3, 4])
    assert len(out) == 4
    assert out.dtype == np.complex128
    np.testing.assert_allclose(out, [10, -2 + 2j, -2, -2 - 2j], atol=1e-12)


def test_input_not_mutated(rng):
    a = random_complex(rng, 8)
    original = a.copy()
    RecursiveDFT().dft(a)
    np.testing.assert_array_equal(a, original)


def test_single_precision(rng):
    a = random_complex(rng, 32)
    out = RecursiveDFT(dtype=np.complex64).dft(a)
    assert out.dtype == np.complex64
    np.testing.assert_allclose(out, np.fft.fft(a), rtol=1e-4, atol=1e-3)


@pytest.mark.parametrize("n", [0, 3, 6, 12])
def test_rejects_non_power_of_two(n):
    with pytest.raises(ValueError):
        RecursiveDFT().dft(np.ones(n))


def test_rejects_bad_arguments():
    with pytest.raises(ValueError):
        RecursiveDFT().dft(np.ones((2, 2)))
    with pytest.raises(ValueError):
        RecursiveDFT(dtype=np.float64)
    with pytest.raises(ValueError):
        RecursiveDFT().transform([1, 2], direction=0)


def test_verbose_output(capsys):
    RecursiveDFT(verbose=True).dft([1, 2, 3, 4])
    out = capsys.readouterr().out
    assert "[recursive] forward transform, n=4" in out
