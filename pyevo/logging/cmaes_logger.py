from typing import Any
import numpy as np
from numpy.typing import NDArray
from dataclasses import dataclass, field

from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.core.config_base import BaseConfig
from pyevo.logging.base_logger import BaseLogger, BaseLogData


@dataclass
class CMAESLogData(BaseLogData):
    """CMA-ES-specific log data container."""

    # Basic fitness statistics
    mean_fitness: list[float] = field(default_factory=list)
    """Mean survivor fitness per generation"""

    median_fitness: list[float] = field(default_factory=list)
    """Median survivor fitness per generation"""

    # Step-size and adaptation
    sigma: list[float] = field(default_factory=list)
    """Step size values"""

    # Evolution paths
    s: list[NDArray[np.float64]] = field(default_factory=list)
    """Evolution path for covariance matrix"""

    s_sigma: list[NDArray[np.float64]] = field(default_factory=list)
    """Evolution path for step size"""

    s_norm: list[float] = field(default_factory=list)
    """Norm of covariance evolution path"""

    s_sigma_norm: list[float] = field(default_factory=list)
    """Norm of step-size evolution path"""

    # Mean vector properties
    mean_vector: list[NDArray[np.float64]] = field(default_factory=list)
    """Mean vector (center of distribution)"""

    mean_vector_norm: list[float] = field(default_factory=list)
    """Norm of mean vector"""

    # Covariance matrix properties
    covariance_determinant: list[float] = field(default_factory=list)
    """Determinant of covariance matrix"""

    max_eigenvalue: list[float] = field(default_factory=list)
    """Maximum eigenvalue"""

    min_eigenvalue: list[float] = field(default_factory=list)
    """Minimum eigenvalue"""

    coordinate_std: list[NDArray[np.float64]] = field(default_factory=list)
    """Standard deviation in each coordinate"""

    def clear(self) -> None:
        """Reset all log data including CMA-ES-specific."""
        self.clear_common()
        self.mean_fitness.clear()
        self.median_fitness.clear()
        self.sigma.clear()
        self.s.clear()
        self.s_sigma.clear()
        self.s_norm.clear()
        self.s_sigma_norm.clear()
        self.mean_vector.clear()
        self.mean_vector_norm.clear()
        self.covariance_determinant.clear()
        self.max_eigenvalue.clear()
        self.min_eigenvalue.clear()
        self.coordinate_std.clear()

    def to_dict(self) -> dict[str, list[Any]]:
        """Convert all log data to dictionary format."""
        result = self.to_dict_common()
        result.update(
            {
                "mean_fitness": self.mean_fitness,
                "median_fitness": self.median_fitness,
                "sigma": self.sigma,
                "s": self.s,
                "s_sigma": self.s_sigma,
                "s_norm": self.s_norm,
                "s_sigma_norm": self.s_sigma_norm,
                "mean_vector": self.mean_vector,
                "mean_vector_norm": self.mean_vector_norm,
                "covariance_determinant": self.covariance_determinant,
                "max_eigenvalue": self.max_eigenvalue,
                "min_eigenvalue": self.min_eigenvalue,
                "coordinate_std": self.coordinate_std,
            }
        )
        return result


class CMAESLogger(BaseLogger[CMAESLogData]):
    """Logger for CMA-ES algorithm."""

    def __init__(self, config: BaseConfig):
        super().__init__(config, AlgorithmChoice.CMAES)

    def _create_log_data(self) -> CMAESLogData:
        """Create CMA-ES-specific log data container."""
        return CMAESLogData()

    def log_iteration(
        self,
        iteration: int,
        evaluations: int,
        sigma: float = 0.0,
        fitness: NDArray[np.float64] | None = None,
        population: NDArray[np.float64] | None = None,
        best_fitness: float = float("inf"),
        best_solution: NDArray[np.float64] | None = None,
        s: NDArray[np.float64] | None = None,
        s_sigma: NDArray[np.float64] | None = None,
        mean_vector: NDArray[np.float64] | None = None,
        covariance_matrix: NDArray[np.float64] | None = None,
        **kwargs,
    ) -> None:
        """Log CMA-ES iteration data."""

        self.logs.iteration.append(iteration)
        self.logs.evaluations.append(evaluations)
        self.logs.best_fitness.append(best_fitness)

        if fitness is not None and len(fitness) > 0:
            finite = fitness[np.isfinite(fitness)]
            if finite.size > 0:
                self.logs.worst_fitness.append(float(np.max(finite)))
                self.logs.mean_fitness.append(float(np.mean(finite)))
                self.logs.median_fitness.append(float(np.median(finite)))
                self.logs.std_fitness.append(float(np.std(finite)))
            else:
                self.logs.worst_fitness.append(float("inf"))
                self.logs.mean_fitness.append(float("inf"))
                self.logs.median_fitness.append(float("inf"))
                self.logs.std_fitness.append(0.0)

        if population is not None and self.config.diag_pop:
            self.logs.population.append(np.array(population, copy=True))

        if best_solution is not None:
            self.logs.best_solution.append(best_solution.copy())

        # Step-size
        if self.config.diag_sigma:
            self.logs.sigma.append(sigma)

        # Evolution paths
        if self.config.diag_paths:
            if s is not None:
                self.logs.s.append(s.copy())
                self.logs.s_norm.append(float(np.linalg.norm(s)))
            if s_sigma is not None:
                self.logs.s_sigma.append(s_sigma.copy())
                self.logs.s_sigma_norm.append(float(np.linalg.norm(s_sigma)))

        # Mean vector
        if mean_vector is not None:
            self.logs.mean_vector.append(mean_vector.copy())
            self.logs.mean_vector_norm.append(float(np.linalg.norm(mean_vector)))

        # Covariance matrix properties
        if covariance_matrix is not None and self.config.diag_eigen:
            eigenvalues = np.sort(np.linalg.eigvalsh(covariance_matrix))
            self.logs.eigenvalues.append(eigenvalues)
            self.logs.max_eigenvalue.append(float(eigenvalues[-1]))
            self.logs.min_eigenvalue.append(float(eigenvalues[0]))
            if eigenvalues[0] > 0:
                self.logs.condition_number.append(float(eigenvalues[-1] / eigenvalues[0]))
            else:
                self.logs.condition_number.append(float("inf"))

            self.logs.covariance_determinant.append(float(np.linalg.det(covariance_matrix)))

            # Coordinate-wise standard deviation
            self.logs.coordinate_std.append(np.sqrt(np.maximum(0.0, np.diag(covariance_matrix))))
