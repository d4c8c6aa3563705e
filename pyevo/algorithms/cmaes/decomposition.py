from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray

from pyevo.core.exceptions import NumericDegeneracyError

# Eigenvalues below -DRIFT_RTOL * max(1, |largest eigenvalue|) mean C is no
# longer positive semi-definite; anything above is rounding and is clamped.
DRIFT_RTOL = 1e-8


@dataclass(frozen=True)
class EigenDecomposition:
    """C = B diag(D)² Bᵀ with orthonormal B."""

    B: NDArray[np.float64]
    """Eigenvectors, one per column"""

    D: NDArray[np.float64]
    """Square roots of the (clamped) eigenvalues"""

    @property
    def eigenvalues(self) -> NDArray[np.float64]:
        return self.D**2

    def transform(self, z: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map a standard normal vector to N(0, C): B D z."""
        return self.B @ (self.D * z)


def decompose(C: NDArray[np.float64]) -> EigenDecomposition | NumericDegeneracyError:
    """
    Eigendecomposition of the covariance matrix.

    Only the upper triangle of ``C`` is read. Failure is returned as a
    ``NumericDegeneracyError`` value holding a copy of ``C``.
    """
    if not np.all(np.isfinite(C)):
        return NumericDegeneracyError("covariance has non-finite entries", C)
    try:
        values, vectors = np.linalg.eigh(C, UPLO="U")
    except np.linalg.LinAlgError as ex:
        return NumericDegeneracyError(str(ex), C)

    tol = DRIFT_RTOL * max(1.0, float(np.max(np.abs(values))))
    if values[0] < -tol:
        return NumericDegeneracyError(
            f"covariance is not positive semi-definite (min eigenvalue {values[0]:.3e})", C
        )

    return EigenDecomposition(B=vectors, D=np.sqrt(np.maximum(0.0, values)))
