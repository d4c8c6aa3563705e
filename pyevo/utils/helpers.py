import math
import numpy as np
from numpy.typing import NDArray


def norm(x: NDArray[np.float64]) -> float:
    """Euclidean norm of a vector."""
    return float(np.sqrt(np.sum(x**2)))


def expected_normal_norm(n: int) -> float:
    """Approximation of E||N(0, I)|| for an n-dimensional standard normal vector."""
    return math.sqrt(n) * (1 - 1 / (4 * n) + 1 / (21 * n * n))


def delete_inf_nan(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Replace non-finite values with the largest finite value in the array."""
    x = np.asarray(x, dtype=float).copy()
    finite = np.isfinite(x)
    if not np.all(finite):
        fill = np.max(x[finite]) if np.any(finite) else np.finfo(float).max
        x[~finite] = fill
    return x
