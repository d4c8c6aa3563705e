from dataclasses import dataclass
from typing import MutableSequence
import numpy as np
from numpy.typing import NDArray
from loguru import logger

from pyevo.algorithms.cmaes.config import CMAESConfig
from pyevo.algorithms.cmaes.decomposition import EigenDecomposition, decompose
from pyevo.algorithms.cmaes.state import CMAESState
from pyevo.core.constraints import Constraints
from pyevo.core.exceptions import NumericDegeneracyError
from pyevo.core.objective import Objective
from pyevo.utils.helpers import expected_normal_norm, norm


@dataclass(frozen=True)
class StepOutcome:
    """Result of one generation: keep going, or stop on a fatal numeric condition."""

    stop: bool = False
    error: NumericDegeneracyError | None = None


CONTINUE = StepOutcome()


def update_state(
    objective: Objective,
    constraints: Constraints,
    state: CMAESState,
    population: MutableSequence[NDArray[np.float64]],
    config: CMAESConfig,
    itr: int,
    rng: np.random.Generator,
) -> StepOutcome:
    """
    Advance the strategy by one generation.

    Samples λ offspring around the mean, writes the μ best into
    ``population`` (best first) and adapts mean, step size, evolution paths
    and covariance. ``state`` is only modified once all offspring have been
    evaluated; if the covariance cannot be decomposed nothing is modified
    and a stop outcome carrying the error is returned.

    Args:
        objective: Function to minimize
        constraints: Repair and evaluation of candidates
        state: Strategy state, updated in place
        population: Buffer of μ individuals, overwritten in place
        config: Strategy parameters
        itr: Zero-based generation index
        rng: Source of the N·λ standard normal draws of this generation

    Returns:
        StepOutcome with ``stop`` set on numeric degeneracy
    """
    mu, lambda_, c_m = config.mu, config.lambda_, config.c_m
    N, mu_eff, sigma, w, d_sigma = state.N, state.mu_eff, state.sigma, state.weights, state.d_sigma
    c_c, c_sigma = state.c_c, state.c_sigma
    E_NormN = expected_normal_norm(N)
    parent = state.parent

    decomposition = decompose(state.C)
    if isinstance(decomposition, NumericDegeneracyError):
        logger.error("[CMAES] generation {}: {}", itr, decomposition)
        return StepOutcome(stop=True, error=decomposition)
    B = decomposition.B

    z = np.zeros((N, lambda_))
    offspring = np.zeros((lambda_, N))
    fitoff = np.full(lambda_, np.inf)
    for i in range(lambda_):
        # offspring are generated by transforming standard normal vectors
        z[:, i] = rng.standard_normal(N)
        candidate = constraints.repair(parent + sigma * decomposition.transform(z[:, i]))
        offspring[i] = np.asarray(candidate, dtype=np.float64).reshape(N)
        fitoff[i] = constraints.evaluate(objective, offspring[i].reshape(state.shape).copy())

    # Select new parent population; ties keep sampling order
    idx = np.argsort(fitoff, kind="stable")
    selected = offspring[idx[:mu]]
    y_mean = ((selected - parent) / sigma).T @ w[:mu]
    fitpop = fitoff[idx[:mu]].astype(state.dtype)

    z_ranked = z[:, idx]
    z_mean = z_ranked[:, :mu] @ w[:mu]

    new_parent = parent + (c_m * sigma) * y_mean
    s_sigma = (1 - c_sigma) * state.s_sigma + np.sqrt(mu_eff * c_sigma * (2 - c_sigma)) * (B @ z_mean)
    ps_norm = norm(s_sigma)
    new_sigma = sigma * np.exp((c_sigma / d_sigma) * (ps_norm / E_NormN - 1))

    h_sigma = ps_norm / np.sqrt(1 - (1 - c_sigma) ** (2 * (itr + 1))) < (1.4 + 2 / (N + 1)) * E_NormN
    s = (1 - c_c) * state.s + (h_sigma * np.sqrt(mu_eff * c_c * (2 - c_c))) * y_mean

    C = _adapt_covariance(state, decomposition, z_ranked, s, h_sigma)

    for i in range(mu):
        population[i] = selected[i].reshape(state.shape).copy()

    state.parent = new_parent
    state.sigma = float(new_sigma)
    state.s_sigma = s_sigma
    state.s = s
    state.C = C
    state.fitpop = fitpop
    # best of this generation, not necessarily the best ever seen
    state.fittest = selected[0].copy()

    logger.debug(
        "[CMAES] generation {}: best={:.6e} sigma={:.4e} h_sigma={}",
        itr, fitpop[0], state.sigma, bool(h_sigma),
    )
    return CONTINUE


def _adapt_covariance(
    state: CMAESState,
    decomposition: EigenDecomposition,
    z_ranked: NDArray[np.float64],
    s: NDArray[np.float64],
    h_sigma: bool,
) -> NDArray[np.float64]:
    """Rank-one plus active rank-μ update over all λ ranked draws."""
    N, w = state.N, state.weights
    c_1, c_c, c_mu = state.c_1, state.c_c, state.c_mu

    rank_1 = c_1 * np.outer(s, s)
    if not h_sigma:  # correction for the stalled path
        rank_1 += (c_1 * c_c * (2 - c_c)) * state.C

    rank_mu = np.zeros((N, N))
    for w_i, z_i in zip(w, z_ranked.T):
        # negative weights are scaled by the Mahalanobis norm to keep C positive definite
        m_i = 1.0 if w_i >= 0 else N / norm(decomposition.B @ z_i) ** 2
        rank_mu += (m_i * w_i) * np.outer(z_i, z_i)
    rank_mu *= c_mu

    return (1 - c_1 - c_mu * np.sum(w)) * state.C + rank_1 + rank_mu
