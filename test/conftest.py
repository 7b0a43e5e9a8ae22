import os

# Accelerator kernels run on numba's CUDA simulator unless NUMBA_ENABLE_CUDASIM=0
# is exported to use a real device. Must be set before numba is imported.
os.environ.setdefault("NUMBA_ENABLE_CUDASIM", "1")

import numpy as np
import pytest


def random_complex(rng, n):
    return rng.uniform(-10, 10, n) + 1j * rng.uniform(-10, 10, n)


@pytest.fixture
def rng():
    return np.random.default_rng(42)
