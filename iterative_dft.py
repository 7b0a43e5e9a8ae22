import numpy as np

from dft_base import DFTBackend
from twiddle import running_twiddles


def bit_reverse(x: int, log2n: int) -> int:
    """Reverse the lowest `log2n` bits of x."""
    result = 0
    for _ in range(log2n):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


def bit_reverse_permutation(n: int) -> np.ndarray:
    """perm[i] = bit_reverse(i, log2(n)) for a power-of-two n."""
    log2n = n.bit_length() - 1
    return np.array([bit_reverse(i, log2n) for i in range(n)], dtype=np.int64)


class IterativeDFT(DFTBackend):
    """
    In-place radix-2 DFT: bit-reversal permutation followed by log2(n)
    butterfly stages.

    The permutation puts every element where the recursive version's leaf
    would sit, so the stages can combine bottom-up without recursion. Inside a
    stage each phase offset j uses one running twiddle, and the walk over
    k = j, j+m, j+2m, ... is done on strided slices.
    """

    name = "iterative"

    def _transform(self, a: np.ndarray, direction: int) -> np.ndarray:
        n = len(a)
        log2n = n.bit_length() - 1

        data = np.empty_like(a)
        data[bit_reverse_permutation(n)] = a

        for s in range(1, log2n + 1):
            m = 1 << s
            m2 = m >> 1
            for j, theta in enumerate(running_twiddles(m2, direction)):
                t = theta * data[j + m2::m]
                u = data[j::m].copy()
                data[j::m] = u + t
                data[j + m2::m] = u - t

        if self.verbose:
            print(f"[{self.name}] {log2n} butterfly stages")
        return data
