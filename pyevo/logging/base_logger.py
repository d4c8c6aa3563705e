from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
import numpy as np
from numpy.typing import NDArray

from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.core.config_base import BaseConfig


@dataclass
class BaseLogData(ABC):
    """Per-generation diagnostics shared by all algorithms."""

    iteration: list[int] = field(default_factory=list)
    evaluations: list[int] = field(default_factory=list)
    best_fitness: list[float] = field(default_factory=list)
    worst_fitness: list[float] = field(default_factory=list)
    std_fitness: list[float] = field(default_factory=list)
    best_solution: list[NDArray[np.float64]] = field(default_factory=list)
    population: list[NDArray[np.float64]] = field(default_factory=list)
    eigenvalues: list[NDArray[np.float64]] = field(default_factory=list)
    condition_number: list[float] = field(default_factory=list)

    def clear_common(self) -> None:
        self.iteration.clear()
        self.evaluations.clear()
        self.best_fitness.clear()
        self.worst_fitness.clear()
        self.std_fitness.clear()
        self.best_solution.clear()
        self.population.clear()
        self.eigenvalues.clear()
        self.condition_number.clear()

    def to_dict_common(self) -> dict[str, list[Any]]:
        return {
            "iteration": self.iteration,
            "evaluations": self.evaluations,
            "best_fitness": self.best_fitness,
            "worst_fitness": self.worst_fitness,
            "std_fitness": self.std_fitness,
            "best_solution": self.best_solution,
            "population": self.population,
            "eigenvalues": self.eigenvalues,
            "condition_number": self.condition_number,
        }

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def to_dict(self) -> dict[str, list[Any]]:
        pass


LogDataT = TypeVar("LogDataT", bound=BaseLogData)


class BaseLogger(ABC, Generic[LogDataT]):
    """Collects per-generation diagnostics into an algorithm specific container."""

    def __init__(self, config: BaseConfig, algorithm: AlgorithmChoice):
        self.config = config
        self.algorithm = algorithm
        self.logs: LogDataT = self._create_log_data()

    @abstractmethod
    def _create_log_data(self) -> LogDataT:
        pass

    @abstractmethod
    def log_iteration(self, iteration: int, evaluations: int, **kwargs) -> None:
        pass

    def get_logs(self) -> LogDataT:
        return self.logs

    def reset(self) -> None:
        self.logs.clear()
