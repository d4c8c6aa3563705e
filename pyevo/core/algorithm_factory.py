from typing import Any, Callable, Type
import numpy as np
from numpy.typing import NDArray

from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.core.base_optimizer import BaseOptimizer


class AlgorithmFactory:
    """Registry mapping an AlgorithmChoice to its optimizer and config classes."""

    _algorithms: dict[AlgorithmChoice, Type[BaseOptimizer]] = {}
    _configs: dict[AlgorithmChoice, Type[Any]] = {}

    @classmethod
    def register_algorithm(
        cls,
        name: AlgorithmChoice,
        optimizer_class: Type[BaseOptimizer],
        config_class: Type[Any],
    ) -> None:
        """Register a new optimization algorithm."""
        cls._algorithms[name] = optimizer_class
        cls._configs[name] = config_class

    @classmethod
    def create_optimizer(
        cls,
        algorithm: AlgorithmChoice,
        func: Callable[[NDArray[np.float64]], float],
        initial_point: NDArray[np.float64],
        config: Any | None = None,
        **kwargs,
    ) -> BaseOptimizer:
        """Create an optimizer instance; extra keyword arguments go to its constructor."""
        if algorithm not in cls._algorithms:
            available = ", ".join(str(k) for k in cls._algorithms.keys())
            raise ValueError(f"Unknown algorithm '{algorithm}'. Available: {available}")

        optimizer_class = cls._algorithms[algorithm]

        if config is None:
            config = cls._configs[algorithm]()

        return optimizer_class(
            func=func,
            initial_point=initial_point,
            config=config,
            **kwargs,
        )

    @classmethod
    def get_available_algorithms(cls) -> list[AlgorithmChoice]:
        """Get list of available algorithm names."""
        return list(cls._algorithms.keys())

    @classmethod
    def create_config(cls, algorithm: AlgorithmChoice, **kwargs) -> Any:
        """Create a configuration object for the specified algorithm."""
        if algorithm not in cls._configs:
            available = ", ".join(str(k) for k in cls._configs.keys())
            raise ValueError(f"Unknown algorithm '{algorithm}'. Available: {available}")

        return cls._configs[algorithm](**kwargs)
