from abc import ABC, abstractmethod
import numpy as np
from numpy.typing import NDArray

from pyevo.core.objective import Objective


class Constraints(ABC):
    """
    Constraint handling seen by the update step.

    ``repair`` maps a sampled candidate to the point the strategy keeps;
    ``evaluate`` computes the (possibly penalized) fitness of that point.
    """

    @abstractmethod
    def repair(self, individual: NDArray[np.float64]) -> NDArray[np.float64]:
        pass

    @abstractmethod
    def evaluate(self, objective: Objective, individual: NDArray[np.float64]) -> float:
        pass


class NoConstraints(Constraints):
    """Unconstrained search space."""

    def repair(self, individual: NDArray[np.float64]) -> NDArray[np.float64]:
        return individual

    def evaluate(self, objective: Objective, individual: NDArray[np.float64]) -> float:
        return objective.evaluate(individual)
