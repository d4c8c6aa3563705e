from typing import Type
from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.core.config_base import BaseConfig
from pyevo.logging.base_logger import BaseLogger
from pyevo.logging.cmaes_logger import CMAESLogger


class LoggerFactory:
    """Factory for creating algorithm-specific loggers."""

    _loggers: dict[AlgorithmChoice, Type[BaseLogger]] = {}

    @classmethod
    def register_logger(
        cls, algorithm: AlgorithmChoice, logger_class: Type[BaseLogger]
    ):
        """Register a logger for an algorithm."""
        cls._loggers[algorithm] = logger_class

    @classmethod
    def create_logger(cls, algorithm: AlgorithmChoice, config: BaseConfig) -> BaseLogger:
        """Create a logger for the specified algorithm."""
        if algorithm in cls._loggers:
            return cls._loggers[algorithm](config)
        raise NotImplementedError(f"No logger registered for {algorithm}")


LoggerFactory.register_logger(AlgorithmChoice.CMAES, CMAESLogger)
