from typing import Callable, final, Union, TYPE_CHECKING
import numpy as np
from loguru import logger
from numpy.typing import NDArray

from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.algorithms.cmaes.config import CMAESConfig
from pyevo.algorithms.cmaes.initializer import initial_state
from pyevo.algorithms.cmaes.state import CMAESState
from pyevo.algorithms.cmaes.update import update_state
from pyevo.core.base_optimizer import BaseOptimizer, OptimizationResult
from pyevo.core.config_base import BaseConfig
from pyevo.core.constraints import Constraints
from pyevo.core.objective import Objective
from pyevo.utils.boundary_handlers import BoundaryHandler, BoundaryHandlerType

if TYPE_CHECKING:
    from pyevo.logging.cmaes_logger import CMAESLogData


@final
class CMAESOptimizer(BaseOptimizer["CMAESLogData", CMAESConfig]):
    """
    Generation loop around the CMA-ES state and update step.

    Stops when the update step reports numeric degeneracy, after
    ``options.iterations`` generations, or once the best fitness reaches
    ``options.abstol``.
    """

    def __init__(
        self,
        func: Callable[[NDArray[np.float64]], float] | Objective,
        initial_point: NDArray[np.float64],
        config: CMAESConfig | None = None,
        options: BaseConfig | None = None,
        constraints: Constraints | None = None,
        boundary_handler: BoundaryHandler | None = None,
        boundary_strategy: BoundaryHandlerType | None = None,
        lower_bounds: Union[float, NDArray[np.float64], list[float]] = -100.0,
        upper_bounds: Union[float, NDArray[np.float64], list[float]] = 100.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        if config is None:
            config = CMAESConfig()
        if options is None:
            options = BaseConfig.from_defaults(config)

        super().__init__(
            func=func,
            initial_point=initial_point,
            config=config,
            algorithm=AlgorithmChoice.CMAES,
            options=options,
            constraints=constraints,
            boundary_handler=boundary_handler,
            boundary_strategy=boundary_strategy,
            lower_bounds=lower_bounds,
            upper_bounds=upper_bounds,
        )

        self.rng = rng if rng is not None else np.random.default_rng(self.options.seed)
        self.state: CMAESState = initial_state(
            self.config, self.initial_point, self.objective.value_type
        )
        # survivor buffer owned by the driver, best first after every generation
        self.population: list[NDArray[np.float64]] = [
            self.initial_point.copy() for _ in range(self.config.population_size)
        ]

    def optimize(self) -> OptimizationResult["CMAESLogData"]:
        """Run CMA-ES until one of the stopping conditions triggers."""

        self.evaluations = 0
        best_fitness = float("inf")
        best_solution = self.initial_point.copy()
        message = "Maximum number of iterations reached."
        converged = False
        degeneracy = None
        iteration = 0

        for itr in range(self.options.iterations):
            outcome = update_state(
                self.objective,
                self.constraints,
                self.state,
                self.population,
                self.config,
                itr,
                self.rng,
            )
            if outcome.stop:
                degeneracy = outcome.error
                message = f"Numeric degeneracy: {degeneracy.reason}"
                break

            iteration = itr + 1
            self.evaluations += self.config.lambda_

            if self.state.value < best_fitness:
                best_fitness = self.state.value
                best_solution = self.state.minimizer().copy()

            self.logger.log_iteration(
                iteration=iteration,
                evaluations=self.evaluations,
                sigma=self.state.sigma,
                fitness=self.state.fitpop,
                population=np.array(self.population),
                best_fitness=best_fitness,
                best_solution=best_solution,
                s=self.state.s,
                s_sigma=self.state.s_sigma,
                mean_vector=self.state.parent,
                covariance_matrix=self.state.C,
            )

            if best_fitness <= self.options.abstol:
                message = "Absolute fitness tolerance reached."
                converged = True
                break

        logger.info(
            "[CMAESOptimizer] {} after {} iterations, best={:.6e}",
            message, iteration, best_fitness,
        )

        result: OptimizationResult["CMAESLogData"] = OptimizationResult(
            best_solution=best_solution,
            best_fitness=best_fitness,
            evaluations=self.evaluations,
            iterations=iteration,
            message=message,
            diagnostic=self.get_logs(),
            algorithm=AlgorithmChoice.CMAES,
            converged=converged,
            degeneracy=degeneracy,
        )

        return result
