from abc import ABC, abstractmethod
from enum import Enum
from typing import Union
import numpy as np
from numpy.typing import NDArray


class BoundaryHandlerType(Enum):
    CLAMP = "clamp"
    REFLECT = "reflect"


Bounds = Union[float, NDArray[np.float64], list[float]]


class BoundaryHandler(ABC):
    """Projects points that left the box [lower_bounds, upper_bounds] back inside."""

    def __init__(self, lower_bounds: Bounds, upper_bounds: Bounds) -> None:
        self.lower_bounds = np.asarray(lower_bounds, dtype=np.float64)
        self.upper_bounds = np.asarray(upper_bounds, dtype=np.float64)
        if np.any(self.lower_bounds > self.upper_bounds):
            raise ValueError("Lower bounds must not exceed upper bounds")

    def is_feasible(self, x: NDArray[np.float64]) -> bool:
        return bool(np.all(x >= self.lower_bounds) and np.all(x <= self.upper_bounds))

    @abstractmethod
    def repair(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        pass


class ClampBoundaryHandler(BoundaryHandler):
    """Moves each violating coordinate onto the nearest bound."""

    def repair(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.clip(x, self.lower_bounds, self.upper_bounds)


class ReflectBoundaryHandler(BoundaryHandler):
    """Mirrors violating coordinates back into the box."""

    def repair(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        lower = np.broadcast_to(self.lower_bounds, np.shape(x))
        width = np.broadcast_to(self.upper_bounds, np.shape(x)) - lower
        # fold onto [0, 2 * width) then mirror the upper half
        period = np.where(width > 0, 2 * width, 1.0)
        offset = np.mod(np.asarray(x, dtype=np.float64) - lower, period)
        offset = np.where(offset > width, period - offset, offset)
        return np.where(width > 0, lower + offset, lower)


def create_boundary_handler(
    strategy: BoundaryHandlerType, lower_bounds: Bounds, upper_bounds: Bounds
) -> BoundaryHandler:
    if strategy == BoundaryHandlerType.CLAMP:
        return ClampBoundaryHandler(lower_bounds, upper_bounds)
    if strategy == BoundaryHandlerType.REFLECT:
        return ReflectBoundaryHandler(lower_bounds, upper_bounds)
    raise ValueError(f"Unknown boundary strategy: {strategy}")
