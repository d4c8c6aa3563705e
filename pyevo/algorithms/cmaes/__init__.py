"""CMA-ES (Covariance Matrix Adaptation Evolution Strategy) algorithm module."""

from pyevo.algorithms.cmaes.config import CMAESConfig
from pyevo.algorithms.cmaes.initializer import initial_state
from pyevo.algorithms.cmaes.state import CMAESState
from pyevo.algorithms.cmaes.update import StepOutcome, update_state

__all__ = [
    "CMAESConfig",
    "CMAESState",
    "StepOutcome",
    "initial_state",
    "update_state",
]
