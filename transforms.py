from enum import Enum

import numpy as np

from dft_base import DFTBackend
from iterative_dft import IterativeDFT
from recursive_dft import RecursiveDFT


class Backend(str, Enum):
    RECURSIVE = "recursive"
    ITERATIVE = "iterative"
    ACCELERATOR = "accelerator"


DEFAULT_BACKEND = Backend.ITERATIVE


def _accelerator_class():
    # numba is imported on first use so CPU-only callers never load it
    from accelerator_dft import AcceleratorDFT
    return AcceleratorDFT


def get_backend(backend=DEFAULT_BACKEND, dtype=np.complex128, verbose: bool = False, **options) -> DFTBackend:
    """
    Build the transform backend named by `backend`.

    Args:
        backend: A `Backend` member, its string value, or a ready `DFTBackend`
            instance (returned unchanged).
        dtype: Complex dtype of the transform state.
        verbose: Print diagnostics from the backend.
        **options: Extra constructor arguments (e.g. threads_per_block for the accelerator).

    Returns:
        A `DFTBackend` instance.
    """
    if isinstance(backend, DFTBackend):
        return backend

    try:
        kind = Backend(backend)
    except ValueError:
        choices = ", ".join(b.value for b in Backend)
        raise ValueError(f"Unknown backend {backend!r}; expected one of: {choices}") from None

    if kind is Backend.RECURSIVE:
        cls = RecursiveDFT
    elif kind is Backend.ITERATIVE:
        cls = IterativeDFT
    else:
        cls = _accelerator_class()
    return cls(dtype=dtype, verbose=verbose, **options)


def forward_transform(a, backend=DEFAULT_BACKEND, **kwargs) -> np.ndarray:
    """DFT of a power-of-two length sequence with the chosen backend."""
    return get_backend(backend, **kwargs).dft(a)


def inverse_transform(y, backend=DEFAULT_BACKEND, **kwargs) -> np.ndarray:
    """Inverse DFT, already normalised by 1/n."""
    return get_backend(backend, **kwargs).idft(y)


def _random_complex_vector(rng, n):
    return rng.uniform(-10, 10, n) + 1j * rng.uniform(-10, 10, n)


def check_round_trip(n: int, num_tests: int = 3, backend=DEFAULT_BACKEND, tolerance: float = 1e-4,
                     seed: int = 42, verbose: bool = False) -> bool:
    """Run random vectors through dft then idft and report the reconstruction error."""
    dft_handler = get_backend(backend)
    rng = np.random.default_rng(seed)

    print(f"Round trip, {dft_handler.name} backend, {num_tests} random vectors (n={n})")
    all_passed = True
    max_error = 0.0
    for i in range(num_tests):
        coeffs = _random_complex_vector(rng, n)
        recovered = dft_handler.idft(dft_handler.dft(coeffs))
        error = float(np.max(np.abs(coeffs - recovered)))
        max_error = max(max_error, error)

        if error < tolerance:
            status = "PASS"
        else:
            status = "FAIL"
            all_passed = False
        print(f"Test {i+1}: {status}")
        if verbose or status == "FAIL":
            print(f"  Roundtrip error: {error:.2e}")

    print(f"Summary: {num_tests} tests, max error: {max_error:.2e}")
    return all_passed


def check_backend_agreement(n: int, num_tests: int = 3, backends=tuple(Backend), tolerance: float = 1e-4,
                            seed: int = 42, verbose: bool = False) -> bool:
    """
    Compare forward and inverse transforms of every backend against the first one.

    Returns:
        True if all backends agree within `tolerance` on every vector.
    """
    handlers = [get_backend(b) for b in backends]
    reference = handlers[0]
    rng = np.random.default_rng(seed)

    print(f"Backend agreement ({', '.join(h.name for h in handlers)}), {num_tests} random vectors (n={n})")
    all_passed = True
    for i in range(num_tests):
        coeffs = _random_complex_vector(rng, n)
        expected_fwd = reference.dft(coeffs)
        expected_inv = reference.idft(coeffs)

        for handler in handlers[1:]:
            fwd_error = float(np.max(np.abs(handler.dft(coeffs) - expected_fwd)))
            inv_error = float(np.max(np.abs(handler.idft(coeffs) - expected_inv)))
            ok = fwd_error < tolerance and inv_error < tolerance
            all_passed = all_passed and ok
            status = "PASS" if ok else "FAIL"
            print(f"Test {i+1}: {reference.name} vs {handler.name}: {status}")
            if verbose or not ok:
                print(f"  forward error: {fwd_error:.2e}, inverse error: {inv_error:.2e}")

    return all_passed
