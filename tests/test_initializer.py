import math

import numpy as np
import pytest

from pyevo.algorithms.cmaes.config import CMAESConfig
from pyevo.algorithms.cmaes.initializer import (
    effective_selection_mass,
    initial_state,
    log_weights,
)
from pyevo.core.exceptions import ConfigurationError


def test_initial_state_layout():
    config = CMAESConfig(mu=3, lambda_=6, sigma0=0.5)
    x0 = np.array([1.0, -2.0, 3.0])

    state = initial_state(config, x0)

    assert state.N == 3
    assert state.sigma == 0.5
    np.testing.assert_array_equal(state.C, np.eye(3))
    np.testing.assert_array_equal(state.s, np.zeros(3))
    np.testing.assert_array_equal(state.s_sigma, np.zeros(3))
    np.testing.assert_array_equal(state.parent, x0)
    np.testing.assert_array_equal(state.fittest, x0)
    assert state.fitpop.shape == (3,)
    assert np.all(np.isinf(state.fitpop))
    assert state.value == math.inf


def test_initial_state_copies_individual():
    x0 = np.array([1.0, 2.0])
    state = initial_state(CMAESConfig(mu=2, lambda_=4), x0)
    x0[0] = 100.0

    assert state.parent[0] == 1.0
    assert state.fittest[0] == 1.0
    assert state.parent is not state.fittest


def test_matrix_individual_is_flattened():
    x0 = np.arange(6, dtype=float).reshape(2, 3)

    state = initial_state(CMAESConfig(mu=2, lambda_=4), x0)

    assert state.N == 6
    assert state.shape == (2, 3)
    assert state.parent.shape == (6,)
    np.testing.assert_array_equal(state.minimizer(), x0)
    np.testing.assert_array_equal(state.mean(), x0)


def test_objective_value_type_is_used_for_fitness():
    state = initial_state(CMAESConfig(mu=2, lambda_=4), np.zeros(2), dtype=np.float32)

    assert state.fitpop.dtype == np.float32


def test_empty_individual_is_rejected():
    with pytest.raises(ConfigurationError):
        initial_state(CMAESConfig(mu=2, lambda_=4), np.array([]))


def test_default_weights_derivation():
    mu, lam, n = 3, 6, 2
    state = initial_state(CMAESConfig(mu=mu, lambda_=lam), np.zeros(n))

    raw = np.log((lam + 1) / 2) - np.log(np.arange(1, lam + 1))
    expected_mu_eff = np.sum(raw[:mu]) ** 2 / np.sum(raw[:mu] ** 2)
    assert state.mu_eff == pytest.approx(expected_mu_eff)

    positive = state.weights[state.weights >= 0]
    negative = state.weights[state.weights < 0]
    assert np.sum(positive) == pytest.approx(1.0)
    assert len(positive) == 3
    assert len(negative) == 3
    # rank order is preserved: best first
    assert np.all(np.diff(state.weights) < 0)

    assert state.c_1 == pytest.approx(2 / ((n + 1.3) ** 2 + expected_mu_eff))
    assert state.c_sigma == pytest.approx((expected_mu_eff + 2) / (n + expected_mu_eff + 5))
    assert state.c_c == pytest.approx(
        (4 + expected_mu_eff / n) / (n + 4 + 2 * expected_mu_eff / n)
    )


def test_negative_weights_are_scaled_by_tightest_bound():
    mu, lam, n = 3, 6, 2
    state = initial_state(CMAESConfig(mu=mu, lambda_=lam), np.zeros(n))

    raw = log_weights(lam)
    tail = raw[mu:]
    alpha_neg = -np.sum(raw[raw < 0])
    mu_eff_neg = np.sum(tail) ** 2 / np.sum(tail**2)
    alpha_neg_eff = 1 + 2 * mu_eff_neg / (state.mu_eff + 2)
    alpha_neg_pd = (1 - state.c_1 - state.c_mu) / (n * state.c_mu)
    scale = min(alpha_neg, alpha_neg_eff, alpha_neg_pd) / alpha_neg

    np.testing.assert_allclose(state.weights[raw < 0], scale * raw[raw < 0])


def test_single_parent_has_no_rank_mu_update():
    state = initial_state(CMAESConfig(mu=1, lambda_=2), np.zeros(3))

    assert state.mu_eff == pytest.approx(1.0)
    assert state.c_mu == pytest.approx(0.0)
    assert np.all(np.isfinite(state.weights))


def test_supplied_rates_are_kept():
    config = CMAESConfig(mu=3, lambda_=6, c_1=0.1, c_c=0.2, c_mu=0.3, c_sigma=0.4)

    state = initial_state(config, np.zeros(4))

    assert (state.c_1, state.c_c, state.c_mu, state.c_sigma) == (0.1, 0.2, 0.3, 0.4)


def test_invalid_supplied_weights_fall_back_to_defaults():
    # μ_eff = 1 / 4 is outside [1, μ]
    weights = np.array([2.0, 0.0, 0.0, 0.0, 0.0, 0.0])

    state = initial_state(CMAESConfig(mu=3, lambda_=6, weights=weights), np.zeros(2))

    assert not np.array_equal(state.weights, weights)
    assert 1 <= state.mu_eff <= 3


@pytest.mark.parametrize(
    "weights, mu_eff",
    [
        ([1.0, 0.0, 0.0, 0.0, 0.0, 0.0], 1.0),
        ([1 / 3, 1 / 3, 1 / 3, 0.0, 0.0, 0.0], 3.0),
    ],
)
def test_supplied_weights_on_range_boundary_are_accepted(weights, mu_eff):
    config = CMAESConfig(mu=3, lambda_=6, weights=np.array(weights))

    state = initial_state(config, np.zeros(2))

    np.testing.assert_array_equal(state.weights, weights)
    assert state.mu_eff == pytest.approx(mu_eff)
    assert 1 <= state.mu_eff <= 3


def test_supplied_weights_rates():
    n = 4
    weights = np.array([0.5, 0.5, 0.0, 0.0, 0.0])
    state = initial_state(CMAESConfig(mu=2, lambda_=5, weights=weights), np.zeros(n))

    assert state.mu_eff == pytest.approx(2.0)
    assert state.c_c == pytest.approx(1 / math.sqrt(n))
    assert state.c_sigma == pytest.approx(1 / math.sqrt(n))
    # c_1 resolved first, then c_mu against it
    assert state.c_1 == pytest.approx(2 / n**2)
    assert state.c_mu == pytest.approx(min(2.0 / n**2, 1 - 2 / n**2))


def test_supplied_weights_with_only_c_mu_set():
    weights = np.array([1.0, 0.0, 0.0, 0.0])
    config = CMAESConfig(mu=2, lambda_=4, weights=weights, c_mu=0.8)

    state = initial_state(config, np.zeros(2))

    assert state.c_mu == 0.8
    assert state.c_1 == pytest.approx(0.2)
    assert state.c_1 + state.c_mu <= 1


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"c_c": 1.5}, "c_c > 1"),
        ({"c_sigma": 1.0}, "c_σ ≥ 1"),
        ({"c_1": 0.6, "c_mu": 0.5}, "c_1 \\+ c_μ > 1"),
        ({"c_sigma": -0.5}, "c_σ ≤ 0"),
        ({"c_sigma": 0.0}, "c_σ ≤ 0"),
        ({"c_c": 0.0}, "c_c ≤ 0"),
        ({"c_mu": -0.3}, "c_μ < 0"),
        ({"c_1": -0.2}, "c_1 < 0"),
    ],
)
def test_invalid_derived_parameters(kwargs, match):
    with pytest.raises(ConfigurationError, match=match):
        initial_state(CMAESConfig(mu=3, lambda_=6, **kwargs), np.zeros(3))


def test_one_dimensional_supplied_weights_give_unit_c_sigma():
    weights = np.array([1.0, 0.0, 0.0])

    with pytest.raises(ConfigurationError, match="c_σ ≥ 1"):
        initial_state(CMAESConfig(mu=1, lambda_=3, weights=weights), np.zeros(1))


def test_default_weights_with_too_many_parents_fail():
    # for λ=4 the third rank already has a negative raw weight, pushing μ_eff below 1
    with pytest.raises(ConfigurationError, match="μ_eff"):
        initial_state(CMAESConfig(mu=3, lambda_=4), np.zeros(2))


@pytest.mark.parametrize("n", [1, 2, 3, 5, 10])
@pytest.mark.parametrize("mu", [1, 2, 3, 5])
@pytest.mark.parametrize("extra", [0, 1, 4])
def test_initialization_invariants(n, mu, extra):
    config = CMAESConfig(mu=mu, lambda_=2 * mu + extra)

    state = initial_state(config, np.ones(n))

    assert 1 <= state.mu_eff <= mu
    assert state.c_1 + state.c_mu <= 1
    assert 0 < state.c_sigma < 1
    assert 0 < state.c_c <= 1
    assert state.d_sigma > 0
    assert state.weights.shape == (config.lambda_,)


def test_effective_selection_mass():
    assert effective_selection_mass(np.zeros(3)) == math.inf
    assert effective_selection_mass(np.array([0.25] * 4)) == pytest.approx(4.0)
