import numpy as np

# Exponent sign of the twiddle factors: forward evaluates at e^{-2*pi*i*k/n},
# inverse at e^{+2*pi*i*k/n}.
FORWARD = -1
INVERSE = 1


def validate_direction(direction: int) -> int:
    if direction not in (FORWARD, INVERSE):
        raise ValueError(f"direction must be {FORWARD} (forward) or {INVERSE} (inverse), got {direction}")
    return direction


def half_twiddle_table(n: int, direction: int = FORWARD, dtype=np.complex128) -> np.ndarray:
    """
    Twiddle table theta[i] = e^{direction * 2*pi*i * i / n} for i in [0, n/2).

    The recursive transform builds this once for the top-level length and
    reads it with a stride of 2^depth at every recursion depth.
    """
    k = np.arange(n // 2)
    return np.exp(direction * 2j * np.pi * k / n).astype(dtype)


def full_twiddle_table(n: int, direction: int = FORWARD, dtype=np.complex128) -> np.ndarray:
    """Twiddle table e^{direction * 2*pi*i * k / n} for k in [0, n), as written by the accelerator kernel."""
    k = np.arange(n)
    return np.exp(direction * 2j * np.pi * k / n).astype(dtype)


def stage_twiddle_step(m2: int, direction: int = FORWARD) -> complex:
    """Step theta_m = e^{direction * pi*i / m2} between phase offsets of a butterfly stage."""
    return complex(np.exp(direction * 1j * np.pi / m2))


def running_twiddles(m2: int, direction: int = FORWARD):
    """
    Yield the m2 twiddles of one butterfly stage by repeated multiplication.

    Starts at 1 and multiplies by theta_m once per phase offset, which gives
    theta_m^j without calling exp for every j.
    """
    theta_m = stage_twiddle_step(m2, direction)
    theta = complex(1, 0)
    for _ in range(m2):
        yield theta
        theta *= theta_m
