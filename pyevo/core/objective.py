from typing import Callable, Protocol, runtime_checkable
import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class Objective(Protocol):
    """A function to minimize; lower fitness is better."""

    value_type: type

    def evaluate(self, individual: NDArray[np.float64]) -> float: ...


class FunctionObjective:
    """Adapts a plain callable to the ``Objective`` interface and counts calls."""

    def __init__(
        self,
        func: Callable[[NDArray[np.float64]], float],
        value_type: type = np.float64,
    ) -> None:
        self.func = func
        self.value_type = value_type
        self.f_calls = 0

    def evaluate(self, individual: NDArray[np.float64]) -> float:
        self.f_calls += 1
        return self.value_type(self.func(individual))

    def __call__(self, individual: NDArray[np.float64]) -> float:
        return self.evaluate(individual)


def as_objective(func: Callable[[NDArray[np.float64]], float] | Objective) -> Objective:
    """Wrap ``func`` unless it already implements ``Objective``."""
    if isinstance(func, Objective):
        return func
    return FunctionObjective(func)
