from enum import Enum


class AlgorithmChoice(Enum):
    """Algorithms registered with the factories."""

    CMAES = "CMA-ES"
