import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from pyevo.algorithms.cmaes.config import CMAESConfig
from pyevo.core.objective import FunctionObjective


def sphere(x):
    return float(np.sum(np.asarray(x) ** 2))


class RecordingObjective:
    """Objective that remembers every individual it was asked to evaluate."""

    value_type = np.float64

    def __init__(self, func=sphere):
        self.func = func
        self.seen = []

    def evaluate(self, individual):
        self.seen.append(np.array(individual, copy=True))
        return self.func(individual)


@pytest.fixture
def sphere_objective():
    return FunctionObjective(sphere)


@pytest.fixture
def recording_objective():
    return RecordingObjective()


@pytest.fixture
def small_config():
    return CMAESConfig(mu=3, lambda_=6)


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
