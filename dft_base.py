import numpy as np

from twiddle import FORWARD, INVERSE, validate_direction


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


class AcceleratorUnavailableError(RuntimeError):
    """No CUDA device (or simulator) is available for the accelerator backend."""


class DFTBackend:
    """
    Common interface of the DFT backends.

    Subclasses implement `_transform(a, direction)` on an already validated
    private copy of the input. Everything else (argument checks, the forward
    and inverse entry points, the 1/n normalisation) lives here so every
    backend behaves the same at the boundary.
    """

    name = "base"

    def __init__(self, dtype=np.complex128, verbose: bool = False):
        """
        Args:
            dtype: Complex dtype used for the transform state (complex64 or complex128).
            verbose: Print diagnostics for every call.
        """
        self.dtype = np.dtype(dtype)
        if self.dtype.kind != 'c':
            raise ValueError(f"dtype must be a complex type, got {self.dtype}")
        self.verbose = verbose

    def __repr__(self):
        return f"{type(self).__name__}(dtype={self.dtype.name})"

    def _as_input(self, coeffs) -> np.ndarray:
        a = np.array(coeffs, dtype=self.dtype)
        if a.ndim != 1:
            raise ValueError(f"Transform input must be one-dimensional, got shape {a.shape}")
        n = len(a)
        if not is_power_of_two(n):
            raise ValueError(f"Transform length {n} is not a power of two; pad the input first")
        return a

    def _transform(self, a: np.ndarray, direction: int) -> np.ndarray:
        raise NotImplementedError

    def transform(self, coeffs, direction: int = FORWARD) -> np.ndarray:
        """
        Unnormalised transform of `coeffs` in the given direction.

        The input is never modified and the output has the same length.
        """
        validate_direction(direction)
        a = self._as_input(coeffs)
        if self.verbose:
            kind = "forward" if direction == FORWARD else "inverse"
            print(f"[{self.name}] {kind} transform, n={len(a)}, dtype={self.dtype.name}")
        return self._transform(a, direction)

    def dft(self, coeffs) -> np.ndarray:
        """Evaluate the coefficient sequence at the n-th roots of unity."""
        return self.transform(coeffs, FORWARD)

    def idft(self, values) -> np.ndarray:
        """Recover coefficients from root-of-unity evaluations (normalised by 1/n)."""
        result = self.transform(values, INVERSE)
        return result / len(result)
