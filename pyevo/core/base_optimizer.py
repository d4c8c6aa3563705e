from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union
import numpy as np
from numpy.typing import NDArray

from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.core.config_base import BaseConfig
from pyevo.core.constraints import Constraints, NoConstraints
from pyevo.core.exceptions import NumericDegeneracyError
from pyevo.core.objective import Objective, as_objective
from pyevo.logging.base_logger import BaseLogData, BaseLogger
from pyevo.logging.logger_factory import LoggerFactory
from pyevo.utils.boundary_handlers import (
    BoundaryHandler,
    BoundaryHandlerType,
    create_boundary_handler,
)
from pyevo.utils.repair_strategy import RepairStrategy, RepairStrategyType

LogDataT = TypeVar("LogDataT", bound=BaseLogData)
ConfigT = TypeVar("ConfigT")


@dataclass
class OptimizationResult(Generic[LogDataT]):
    """Outcome of a full optimization run."""

    best_solution: NDArray[np.float64]
    best_fitness: float
    evaluations: int
    iterations: int
    message: str
    diagnostic: LogDataT
    algorithm: AlgorithmChoice
    converged: bool = False
    degeneracy: NumericDegeneracyError | None = None


class BaseOptimizer(ABC, Generic[LogDataT, ConfigT]):
    """
    Common driver plumbing: objective wrapping, constraint selection, run
    options and the diagnostic logger.

    Constraints are taken from ``constraints`` if given; otherwise a
    ``boundary_handler`` or ``boundary_strategy`` enables Lamarckian box
    repair; otherwise the search is unconstrained.
    """

    def __init__(
        self,
        func: Callable[[NDArray[np.float64]], float] | Objective,
        initial_point: NDArray[np.float64],
        config: ConfigT,
        algorithm: AlgorithmChoice,
        options: BaseConfig | None = None,
        constraints: Constraints | None = None,
        boundary_handler: BoundaryHandler | None = None,
        boundary_strategy: BoundaryHandlerType | None = None,
        lower_bounds: Union[float, NDArray[np.float64], list[float]] = -100.0,
        upper_bounds: Union[float, NDArray[np.float64], list[float]] = 100.0,
    ) -> None:
        self.objective = as_objective(func)
        self.initial_point = np.array(initial_point, dtype=np.float64)
        self.config = config
        self.algorithm = algorithm
        self.options = options if options is not None else BaseConfig()
        self.evaluations = 0

        if boundary_handler is None and boundary_strategy is not None:
            boundary_handler = create_boundary_handler(
                boundary_strategy, lower_bounds, upper_bounds
            )
        self.boundary_handler = boundary_handler

        if constraints is not None:
            self.constraints = constraints
        elif boundary_handler is not None:
            self.constraints = RepairStrategy(RepairStrategyType.LAMARCKIAN, boundary_handler)
        else:
            self.constraints = NoConstraints()

        self.logger: BaseLogger[LogDataT] = LoggerFactory.create_logger(algorithm, self.options)

    @property
    def dimensions(self) -> int:
        return self.initial_point.size

    def get_logs(self) -> LogDataT:
        return self.logger.get_logs()

    @abstractmethod
    def optimize(self) -> OptimizationResult[LogDataT]:
        pass
