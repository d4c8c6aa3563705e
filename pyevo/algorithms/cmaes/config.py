from dataclasses import dataclass
import math
import numpy as np
from numpy.typing import NDArray

from pyevo.core.exceptions import ConfigurationError


def default_lambda(mu: int) -> int:
    """Default number of offspring based on number of parents."""
    return 2 * mu


def is_unset(value: float) -> bool:
    """A learning rate left as NaN is derived at initialization."""
    return math.isnan(value)


@dataclass(frozen=True, eq=False)
class CMAESConfig:
    """
    Parameters of the (μ/μ_W,λ)-CMA-ES strategy.

    Learning rates left at NaN and weights left at their all-zero default are
    derived from the problem dimension by ``initial_state``. Instances are
    immutable; invalid parameters raise ``ConfigurationError`` and no object
    is produced.
    """

    mu: int = 15
    """Number of parents"""

    lambda_: int | None = None
    """Number of offspring (None means 2 * mu)"""

    weights: NDArray[np.float64] | None = None
    """Recombination weights, best rank first (None means all zeros)"""

    c_1: float = math.nan
    """Learning rate for the rank-one update of the covariance matrix"""

    c_c: float = math.nan
    """Learning rate for cumulation for the rank-one update"""

    c_mu: float = math.nan
    """Learning rate for the rank-μ update of the covariance matrix"""

    c_sigma: float = math.nan
    """Learning rate for cumulation for the step-size control"""

    sigma0: float = 1.0
    """Initial step size"""

    c_m: float = 1.0
    """Learning rate for the mean update, c_m <= 1"""

    def __post_init__(self) -> None:
        if self.lambda_ is None:
            object.__setattr__(self, "lambda_", default_lambda(self.mu))
        self._validate_population()
        if self.weights is None:
            weights = np.zeros(self.lambda_)
        else:
            weights = np.array(self.weights, dtype=np.float64).ravel()
        weights.flags.writeable = False
        object.__setattr__(self, "weights", weights)

        self.validate()

    def _validate_population(self) -> None:
        if self.mu < 1:
            raise ConfigurationError(f"Number of parents must be positive, got μ={self.mu}")
        if not self.mu < self.lambda_:
            raise ConfigurationError(
                "Offspring population must be larger then parent population: "
                f"μ={self.mu}, λ={self.lambda_}"
            )

    def validate(self) -> None:
        self._validate_population()
        if len(self.weights) != self.lambda_:
            raise ConfigurationError(
                f"Number of weights must be {self.lambda_}, got {len(self.weights)}"
            )
        if not self.c_m <= 1:
            raise ConfigurationError(f"cₘ > 1: c_m={self.c_m}")
        if not self.sigma0 > 0:
            raise ConfigurationError(f"Initial step size must be positive, got {self.sigma0}")

    @property
    def population_size(self) -> int:
        """Size of the survivor population the driver must allocate."""
        return self.mu

    def default_options(self) -> dict[str, float]:
        return {"iterations": 1500, "abstol": 1e-15}

    def __str__(self) -> str:
        return (
            f"CMAESConfig(mu={self.mu}, lambda={self.lambda_}, "
            f"sigma0={self.sigma0}, c_m={self.c_m})"
        )
