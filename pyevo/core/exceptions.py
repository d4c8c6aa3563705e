"""Error types raised or returned by the optimizer package."""

import numpy as np
from numpy.typing import NDArray


class PyEvoError(Exception):
    """Base class for all package errors."""


class ConfigurationError(PyEvoError, ValueError):
    """Invalid strategy parameters, detected at construction or initialization."""


class NumericDegeneracyError(PyEvoError, ArithmeticError):
    """
    The covariance matrix could not be decomposed.

    Instances are returned as values by the decomposition and update steps
    rather than raised, so the caller decides whether to abort or restart.
    """

    def __init__(self, reason: str, covariance: NDArray[np.float64]) -> None:
        self.reason = reason
        self.covariance = np.array(covariance, copy=True)
        super().__init__(f"Break on eigen decomposition: {reason}")

    def __str__(self) -> str:
        return f"Break on eigen decomposition: {self.reason}: {self.covariance.tolist()}"
