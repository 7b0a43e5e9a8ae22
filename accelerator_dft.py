"""
Data-parallel DFT on a CUDA device through numba.

Instead of mapping the butterfly network onto the device, every output
element gets its own execution lane that evaluates the DFT sum directly:

    out[idx] = sum_k data[k] * twiddle[(idx * k) mod n]

That is O(n^2) work, but each lane is independent, so a single flat launch
needs no cross-lane synchronisation. Two kernels run per transform: one
writes the length-n twiddle table (one lane per entry), the other does the
per-index reduction. A device-wide synchronize separates them so the second
kernel never reads a partially written table.

Set NUMBA_ENABLE_CUDASIM=1 before numba is imported to run the kernels on
numba's CUDA simulator.
"""

import math

import numpy as np
from numba import cuda

from dft_base import AcceleratorUnavailableError, DFTBackend


@cuda.jit
def twiddle_kernel(twiddle, n, direction):
    idx = cuda.grid(1)
    if idx < n:
        angle = direction * 2.0 * math.pi * idx / n
        twiddle[idx] = math.cos(angle) + 1j * math.sin(angle)


@cuda.jit
def direct_dft_kernel(data, twiddle, out, n):
    idx = cuda.grid(1)
    if idx < n:
        acc = 0j
        for k in range(n):
            acc += data[k] * twiddle[(idx * k) % n]
        out[idx] = acc


def launch_config(n: int, threads_per_block: int):
    """Return (blocks, threads) covering n lanes."""
    threads = min(threads_per_block, n)
    blocks = (n + threads - 1) // threads
    return blocks, threads


class AcceleratorDFT(DFTBackend):
    name = "accelerator"

    def __init__(self, dtype=np.complex128, verbose: bool = False, threads_per_block: int = 128):
        super().__init__(dtype=dtype, verbose=verbose)
        if threads_per_block < 1:
            raise ValueError(f"threads_per_block must be positive, got {threads_per_block}")
        self.threads_per_block = threads_per_block

    def _transform(self, a: np.ndarray, direction: int) -> np.ndarray:
        if not cuda.is_available():
            raise AcceleratorUnavailableError("CUDA is not available; the accelerator backend cannot run")

        n = len(a)
        blocks, threads = launch_config(n, self.threads_per_block)
        if self.verbose:
            print(f"[{self.name}] launching {blocks} block(s) x {threads} thread(s) per kernel")

        # Host-to-device copy happens before any launch
        d_data = cuda.to_device(a)
        d_twiddle = cuda.device_array(n, dtype=self.dtype)
        d_out = cuda.device_array(n, dtype=self.dtype)

        twiddle_kernel[blocks, threads](d_twiddle, n, direction)
        cuda.synchronize()

        direct_dft_kernel[blocks, threads](d_data, d_twiddle, d_out, n)
        cuda.synchronize()

        return d_out.copy_to_host()
