"""
Python Evolutionary Optimization Package: (μ/μ_W,λ)-CMA-ES
"""

from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.algorithms.cmaes.cmaes_optimizer import CMAESOptimizer
from pyevo.algorithms.cmaes.config import CMAESConfig
from pyevo.algorithms.cmaes.initializer import initial_state
from pyevo.algorithms.cmaes.state import CMAESState
from pyevo.algorithms.cmaes.update import StepOutcome, update_state
from pyevo.core.algorithm_factory import AlgorithmFactory
from pyevo.core.base_optimizer import BaseOptimizer, OptimizationResult
from pyevo.core.config_base import BaseConfig
from pyevo.core.constraints import Constraints, NoConstraints
from pyevo.core.exceptions import ConfigurationError, NumericDegeneracyError
from pyevo.core.objective import FunctionObjective, Objective
from loguru import logger

# Library default: silent until the application calls logger.enable("pyevo").
logger.disable("pyevo")


def _register_algorithms():
    """Register all available algorithms with the factory."""
    AlgorithmFactory.register_algorithm(AlgorithmChoice.CMAES, CMAESOptimizer, CMAESConfig)


_register_algorithms()

__all__ = [
    "AlgorithmChoice",
    "AlgorithmFactory",
    "BaseConfig",
    "BaseOptimizer",
    "CMAESConfig",
    "CMAESOptimizer",
    "CMAESState",
    "ConfigurationError",
    "Constraints",
    "FunctionObjective",
    "NoConstraints",
    "NumericDegeneracyError",
    "Objective",
    "OptimizationResult",
    "StepOutcome",
    "initial_state",
    "update_state",
]
