import numpy as np

from dft_base import DFTBackend
from twiddle import half_twiddle_table


class RecursiveDFT(DFTBackend):
    """
    Divide-and-conquer (Cooley-Tukey, radix-2) DFT.

    Uses p(x) = p_even(x^2) + x * p_odd(x^2). The even and odd halves are
    strided views of the caller's array and every level writes its result
    into its own slice of a single output buffer, so the recursion does not
    allocate a fresh sub-sequence per call.
    """

    name = "recursive"

    def _transform(self, a: np.ndarray, direction: int) -> np.ndarray:
        n = len(a)
        theta = half_twiddle_table(n, direction, self.dtype)
        out = np.empty(n, dtype=self.dtype)
        self._fft(a, out, theta, 0)
        if self.verbose:
            print(f"[{self.name}] recursion depth {n.bit_length() - 1}, twiddle table size {len(theta)}")
        return out

    def _fft(self, a: np.ndarray, out: np.ndarray, theta: np.ndarray, depth: int) -> None:
        """
        Transform `a` into `out` (both length n at this depth).

        Args:
            a: Input view, stride 2^depth over the original sequence.
            out: Destination slice of the shared output buffer.
            theta: Twiddle table of the top-level transform.
            depth: Recursion depth, 0 at the top.
        """
        n = len(a)
        if n == 1:
            out[0] = a[0]
            return

        half = n // 2
        self._fft(a[0::2], out[:half], theta, depth + 1)
        self._fft(a[1::2], out[half:], theta, depth + 1)

        # theta holds the top-level roots; at this depth only every 2^depth-th one is needed
        stride = 1 << depth
        t = theta[::stride][:half] * out[half:]
        out[half:] = out[:half] - t
        out[:half] += t
