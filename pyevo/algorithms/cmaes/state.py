from dataclasses import dataclass, replace
import numpy as np
from numpy.typing import NDArray


@dataclass
class CMAESState:
    """
    Mutable per-run data of the CMA-ES strategy.

    ``parent`` and ``fittest`` are kept as flat vectors of length ``N``;
    ``shape`` is only used to hand individuals back in their original form.
    """

    N: int
    """Problem dimension"""

    mu_eff: float
    """Variance effectiveness of the sum of weighted updates"""

    c_1: float
    c_c: float
    c_mu: float
    c_sigma: float

    fitpop: NDArray[np.float64]
    """Fitness of the current survivors, best first"""

    C: NDArray[np.float64]
    """Covariance matrix"""

    s: NDArray[np.float64]
    """Evolution path for the covariance matrix"""

    s_sigma: NDArray[np.float64]
    """Evolution path for the step size"""

    sigma: float
    """Step size"""

    weights: NDArray[np.float64]
    """Resolved recombination weights for all λ ranks"""

    d_sigma: float
    """Damping parameter for step-size"""

    parent: NDArray[np.float64]
    """Mean of the search distribution"""

    fittest: NDArray[np.float64]
    """Best survivor of the latest generation"""

    shape: tuple[int, ...]
    """Shape of an individual outside the strategy"""

    dtype: type = np.float64
    """Numeric type of the objective value"""

    @property
    def value(self) -> float:
        return float(self.fitpop[0])

    def minimizer(self) -> NDArray[np.float64]:
        return self.fittest.reshape(self.shape)

    def mean(self) -> NDArray[np.float64]:
        return self.parent.reshape(self.shape)

    def snapshot(self) -> "CMAESState":
        """Independent copy of the state, arrays included."""
        return replace(self, **{
            name: getattr(self, name).copy()
            for name in ("fitpop", "C", "s", "s_sigma", "weights", "parent", "fittest")
        })
