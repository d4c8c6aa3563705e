from enum import Enum
import numpy as np
from numpy.typing import NDArray

from pyevo.core.constraints import Constraints
from pyevo.core.objective import Objective
from pyevo.utils.boundary_handlers import BoundaryHandler


class RepairStrategyType(Enum):
    LAMARCKIAN = "lamarckian"
    NON_LAMARCKIAN = "non_lamarckian"


class RepairStrategy(Constraints):
    """
    Box constraints with a choice of repair strategy.

    Lamarckian: the repaired point replaces the sampled one, so the strategy
    only ever sees feasible individuals.
    Non-Lamarckian: the sampled point is kept as is; its fitness is the
    objective at the repaired point plus a penalty equal to the squared
    repair distance.
    """

    def __init__(
        self,
        strategy_type: RepairStrategyType,
        boundary_handler: BoundaryHandler,
        penalty_factor: float = 1.0,
    ) -> None:
        self.strategy_type = strategy_type
        self.boundary_handler = boundary_handler
        self.penalty_factor = penalty_factor
        self.repair_count = 0

    def is_lamarckian(self) -> bool:
        return self.strategy_type == RepairStrategyType.LAMARCKIAN

    def repair(self, individual: NDArray[np.float64]) -> NDArray[np.float64]:
        if not self.is_lamarckian():
            return individual
        repaired = self.boundary_handler.repair(individual)
        if not np.array_equal(repaired, individual):
            self.repair_count += 1
        return repaired

    def evaluate(self, objective: Objective, individual: NDArray[np.float64]) -> float:
        if self.is_lamarckian():
            return objective.evaluate(individual)
        return self._apply_penalty(objective, individual)

    def _apply_penalty(self, objective: Objective, individual: NDArray[np.float64]) -> float:
        """Evaluate at the projected point and add the squared distance to it."""
        repaired = self.boundary_handler.repair(individual)
        fitness = objective.evaluate(repaired)
        if np.array_equal(repaired, individual):
            return fitness
        self.repair_count += 1
        sq_distance = float(np.sum((np.asarray(individual) - repaired) ** 2))
        return fitness + self.penalty_factor * sq_distance
