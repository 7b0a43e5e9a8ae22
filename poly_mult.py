"""
Exact integer polynomial multiplication through the DFT.

Both operands are zero-padded to the smallest power of two n that holds the
full product (so the cyclic convolution computed in the frequency domain
equals the linear one), transformed, multiplied pointwise, transformed back
and rounded to integers. Squaring and powers are built on top.
"""

import numpy as np

from transforms import DEFAULT_BACKEND, get_backend


class PrecisionError(ArithmeticError):
    """The rounded result cannot be trusted at the floating-point precision in use."""

    def __init__(self, message: str, max_error: float = None):
        super().__init__(message)
        self.max_error = max_error


def next_power_of_two(m: int) -> int:
    """Smallest power of two >= m (m >= 1)."""
    if m < 1:
        raise ValueError(f"m must be >= 1, got {m}")
    return 1 << (m - 1).bit_length()


def pad_coefficients(coeffs, n: int, dtype=None) -> np.ndarray:
    """
    Zero-extend a copy of `coeffs` to length n.

    Existing coefficients keep their values and order; padding to the current
    length returns an equal copy.
    """
    a = np.asarray(coeffs)
    if n < len(a):
        raise ValueError(f"Cannot pad a sequence of length {len(a)} to shorter length {n}")
    padded = np.zeros(n, dtype=dtype if dtype is not None else a.dtype)
    padded[:len(a)] = a
    return padded


def _as_int_coefficients(coeffs, name: str) -> np.ndarray:
    a = np.asarray(coeffs)
    if a.ndim != 1 or len(a) == 0:
        raise ValueError(f"{name} must be a non-empty one-dimensional coefficient sequence")
    if a.dtype == object:
        # Python ints too wide for int64
        if not all(isinstance(c, (int, np.integer)) for c in a):
            raise ValueError(f"{name} must contain integer coefficients")
    elif a.dtype.kind not in "biu":
        raise ValueError(f"{name} must contain integer coefficients, got dtype {a.dtype}")
    return a


def _check_magnitude(a: np.ndarray, dtype, name: str) -> None:
    """Reject coefficients the transform dtype cannot hold as exact integers."""
    ceiling = 2 ** (np.finfo(dtype).nmant + 1)
    largest = max(abs(int(c)) for c in a)
    if largest >= ceiling:
        raise PrecisionError(f"{name} has a coefficient of magnitude {largest}, at or above {ceiling}, "
                             f"the exact-integer limit of {np.dtype(dtype)}")


def naive_poly_mult(p1, p2) -> list:
    """Schoolbook O(n^2) product over Python integers."""
    p1 = [int(c) for c in _as_int_coefficients(p1, "p1")]
    p2 = [int(c) for c in _as_int_coefficients(p2, "p2")]
    result = [0] * (len(p1) + len(p2) - 1)
    for i in range(len(p1)):
        for j in range(len(p2)):
            result[i + j] += p1[i] * p2[j]
    return result


def check_rounding(values: np.ndarray, tolerance: float = 0.25) -> np.ndarray:
    """
    Round the real parts of `values`, raising PrecisionError if the result is suspect.

    A coefficient is suspect when its real part sits `tolerance` or more away
    from the nearest integer, when the imaginary part has not cancelled to
    below `tolerance`, or when the magnitude reaches the float mantissa
    ceiling, where consecutive integers are no longer representable.
    """
    real = values.real
    rounded = np.rint(real)
    if len(values) == 0:
        return rounded

    max_error = float(np.max(np.abs(real - rounded)))
    max_imag = float(np.max(np.abs(values.imag)))
    if max_error >= tolerance:
        raise PrecisionError(f"Rounding error {max_error:.3g} reached tolerance {tolerance}", max_error)
    if max_imag >= tolerance:
        raise PrecisionError(f"Imaginary residue {max_imag:.3g} reached tolerance {tolerance}", max_imag)

    ceiling = 2.0 ** (np.finfo(real.dtype).nmant + 1)
    if float(np.max(np.abs(rounded))) >= ceiling:
        raise PrecisionError(f"Coefficient magnitude exceeds {ceiling:.0f}, the exact-integer limit of {real.dtype}",
                             max_error)
    return rounded


def _convolve(a: np.ndarray, b, backend, dtype, check_precision: bool, tolerance: float, verbose: bool) -> list:
    """Shared body of multiply and square; b is None when squaring."""
    b_len = len(a) if b is None else len(b)
    final_length = len(a) + b_len - 1
    n = next_power_of_two(final_length)

    dft_handler = get_backend(backend, dtype=dtype, verbose=verbose)
    if verbose:
        print(f"Multiplying degree {len(a) - 1} by degree {b_len - 1}: n={n}, backend={dft_handler.name}")

    _check_magnitude(a, dft_handler.dtype, "p")
    if b is not None:
        _check_magnitude(b, dft_handler.dtype, "q")

    # 1. Forward transforms of the padded copies
    y1 = dft_handler.dft(pad_coefficients(a, n, dft_handler.dtype))
    y2 = y1 if b is None else dft_handler.dft(pad_coefficients(b, n, dft_handler.dtype))

    # 2. Point-wise product and inverse transform
    product = dft_handler.idft(y1 * y2)

    # 3. Anything past final_length is padding noise
    product = product[:final_length]
    if check_precision:
        rounded = check_rounding(product, tolerance)
        if verbose:
            print(f"Max rounding error: {float(np.max(np.abs(product.real - rounded))):.2e}")
    else:
        rounded = np.rint(product.real)
        _check_magnitude(rounded, dft_handler.dtype, "product")
    return [int(c) for c in rounded]


def multiply(p, q, backend=DEFAULT_BACKEND, dtype=np.complex128, check_precision: bool = False,
             tolerance: float = 0.25, verbose: bool = False) -> list:
    """
    Multiply two integer polynomials via the DFT.

    Args:
        p, q: Coefficient sequences, constant term first.
        backend: Transform backend ("recursive", "iterative", "accelerator" or an instance).
        dtype: Complex dtype of the transform state.
        check_precision: Raise PrecisionError instead of returning a result whose
            rounding cannot be trusted.
        tolerance: Largest accepted distance from an integer when check_precision is set.
        verbose: Print diagnostics.

    Returns:
        The len(p) + len(q) - 1 product coefficients as Python ints.
    """
    a = _as_int_coefficients(p, "p")
    b = _as_int_coefficients(q, "q")
    return _convolve(a, b, backend, dtype, check_precision, tolerance, verbose)


def square(p, backend=DEFAULT_BACKEND, dtype=np.complex128, check_precision: bool = False,
           tolerance: float = 0.25, verbose: bool = False) -> list:
    """p * p, transforming p only once."""
    a = _as_int_coefficients(p, "p")
    return _convolve(a, None, backend, dtype, check_precision, tolerance, verbose)


def power(p, k: int, backend=DEFAULT_BACKEND, dtype=np.complex128, check_precision: bool = False,
          tolerance: float = 0.25, verbose: bool = False) -> list:
    """
    p^k for an integer k >= 1 by binary exponentiation.

    Scans k from the least significant bit: whenever the bit is set the
    accumulator is multiplied by the current power, and the power is squared
    before moving to the next bit.
    """
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise ValueError(f"Exponent must be an integer, got {k!r}")
    k = int(k)
    if k < 1:
        raise ValueError(f"Exponent must be >= 1, got {k}")

    options = dict(backend=backend, dtype=dtype, check_precision=check_precision,
                   tolerance=tolerance, verbose=verbose)
    base = [int(c) for c in _as_int_coefficients(p, "p")]
    result = None
    while True:
        if k & 1:
            result = base if result is None else multiply(result, base, **options)
        k >>= 1
        if k == 0:
            break
        base = square(base, **options)
    return result
