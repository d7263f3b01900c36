import math

import numpy as np


def bin_indices(values: np.ndarray, lo: float, hi: float, n: int) -> np.ndarray:
    """Map values to bins floor((v - lo) / (hi - lo) * n), clamped to [0, n-1].

    ``v == hi`` and anything beyond the range end up in a boundary bin, never
    outside the buffer.
    """
    pos = np.floor((np.asarray(values, dtype=float) - lo) / (hi - lo) * n)
    return np.clip(pos, 0, n - 1).astype(np.intp)


def square_side(length: int) -> int:
    """Side of a square lattice with ``length`` cells, or -1 if not square."""
    side = math.isqrt(length)
    return side if side * side == length else -1
