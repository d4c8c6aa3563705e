"""
Benchmark objectives for exercising the optimizers.

Every function accepts an individual of any shape; it is flattened before
evaluation. All of them are minimization problems.
"""

import numpy as np
from numpy.typing import NDArray

from opfunu.cec_based import cec2017


class BenchmarkFunction:
    """Base class for benchmark functions, usable directly as an Objective."""

    value_type: type = np.float64

    def __init__(self, dimensions: int):
        self.dimensions = dimensions
        self.f_calls = 0

    def _value(self, x: NDArray[np.float64]) -> float:
        raise NotImplementedError("Subclasses must implement this method")

    def __call__(self, x: NDArray[np.float64]) -> float:
        return self.evaluate(x)

    def evaluate(self, x: NDArray[np.float64]) -> float:
        self.f_calls += 1
        return float(self._value(np.ravel(np.asarray(x, dtype=np.float64))))

    @property
    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """(lower_bounds, upper_bounds) of the usual search domain."""
        raise NotImplementedError("Subclasses must implement this method")

    @property
    def global_minimum(self) -> tuple[NDArray[np.float64], float]:
        """(optimal_solution, optimal_value)."""
        raise NotImplementedError("Subclasses must implement this method")

    def _box(self, low: float, high: float) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        return low * np.ones(self.dimensions), high * np.ones(self.dimensions)


class Sphere(BenchmarkFunction):
    """f(x) = sum(x_i^2), minimum 0 at the origin."""

    def _value(self, x: NDArray[np.float64]) -> float:
        return np.sum(x**2)

    @property
    def bounds(self):
        return self._box(-100.0, 100.0)

    @property
    def global_minimum(self):
        return np.zeros(self.dimensions), 0.0


class Ellipsoid(BenchmarkFunction):
    """
    Ill-conditioned ellipsoid.
    f(x) = sum(condition^((i-1)/(d-1)) * x_i^2), minimum 0 at the origin.
    Needs covariance adaptation to be solved efficiently.
    """

    def __init__(self, dimensions: int, condition: float = 1e6):
        super().__init__(dimensions)
        exponents = np.arange(dimensions) / max(1, dimensions - 1)
        self.scales = condition**exponents

    def _value(self, x: NDArray[np.float64]) -> float:
        return np.sum(self.scales * x**2)

    @property
    def bounds(self):
        return self._box(-100.0, 100.0)

    @property
    def global_minimum(self):
        return np.zeros(self.dimensions), 0.0


class Rosenbrock(BenchmarkFunction):
    """f(x) = sum(100 * (x_{i+1} - x_i^2)^2 + (1 - x_i)^2), minimum 0 at (1, ..., 1)."""

    def _value(self, x: NDArray[np.float64]) -> float:
        return np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1 - x[:-1]) ** 2)

    @property
    def bounds(self):
        return self._box(-5.0, 10.0)

    @property
    def global_minimum(self):
        return np.ones(self.dimensions), 0.0


class Rastrigin(BenchmarkFunction):
    """f(x) = 10*d + sum(x_i^2 - 10*cos(2*pi*x_i)), minimum 0 at the origin."""

    def _value(self, x: NDArray[np.float64]) -> float:
        return 10 * self.dimensions + np.sum(x**2 - 10 * np.cos(2 * np.pi * x))

    @property
    def bounds(self):
        return self._box(-5.12, 5.12)

    @property
    def global_minimum(self):
        return np.zeros(self.dimensions), 0.0


class Ackley(BenchmarkFunction):
    """Ackley function, minimum 0 at the origin."""

    def _value(self, x: NDArray[np.float64]) -> float:
        term1 = -20.0 * np.exp(-0.2 * np.sqrt(np.mean(x**2)))
        term2 = -np.exp(np.mean(np.cos(2 * np.pi * x)))
        return term1 + term2 + 20.0 + np.e

    @property
    def bounds(self):
        return self._box(-32.768, 32.768)

    @property
    def global_minimum(self):
        return np.zeros(self.dimensions), 0.0


class CEC17Function(BenchmarkFunction):
    """Function ``function_id`` of the CEC 2017 suite, as provided by opfunu."""

    def __init__(self, dimensions: int, function_id: int):
        super().__init__(dimensions)

        if function_id < 1 or function_id > 30:
            raise ValueError("Function ID must be between 1 and 30.")

        self.function_id = function_id
        self.func = getattr(cec2017, f"F{function_id}2017")(dimensions)

    def _value(self, x: NDArray[np.float64]) -> float:
        return self.func.evaluate(x)

    @property
    def bounds(self):
        return self.func.lb, self.func.ub

    @property
    def global_minimum(self):
        return self.func.x_global, self.func.f_global
