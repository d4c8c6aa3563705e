import math
import numpy as np
from numpy.typing import ArrayLike, NDArray
from loguru import logger

from pyevo.algorithms.cmaes.config import CMAESConfig, is_unset
from pyevo.algorithms.cmaes.state import CMAESState
from pyevo.core.exceptions import ConfigurationError

ALPHA_COV = 2.0

# Relative slack on the μ_eff range check so weights giving exactly 1 or μ
# survive rounding.
MU_EFF_RTOL = 1e-12


def effective_selection_mass(weights: NDArray[np.float64]) -> float:
    """μ_eff = 1 / Σ w_i² over the given weights (inf for all-zero weights)."""
    sq = float(np.sum(weights**2))
    return math.inf if sq == 0.0 else 1.0 / sq


def mu_eff_in_range(mu_eff: float, mu: int) -> bool:
    return (1.0 - MU_EFF_RTOL) <= mu_eff <= mu * (1.0 + MU_EFF_RTOL)


def log_weights(lambda_: int) -> NDArray[np.float64]:
    """Raw weights w'_i = log((λ+1)/2) - log(i) for ranks i = 1..λ."""
    return np.array([math.log((lambda_ + 1) / 2) - math.log(i) for i in range(1, lambda_ + 1)])


def _default_parameters(
    config: CMAESConfig, n: int
) -> tuple[NDArray[np.float64], float, float, float, float, float]:
    """
    Default weighted recombination with negative weights (active CMA-ES).
    Returns: (weights, mu_eff, c_1, c_c, c_mu, c_sigma)
    """
    mu, lambda_ = config.mu, config.lambda_
    w_prime = log_weights(lambda_)

    w_pos_sum = np.sum(w_prime[w_prime >= 0])
    head, tail = w_prime[:mu], w_prime[mu:]
    mu_eff = float(np.sum(head) ** 2 / np.sum(head**2))
    mu_eff_neg = float(np.sum(tail) ** 2 / np.sum(tail**2))
    alpha_neg = -float(np.sum(w_prime[w_prime < 0]))
    alpha_neg_eff = 1 + (2 * mu_eff_neg) / (mu_eff + 2)

    c_1 = ALPHA_COV / ((n + 1.3) ** 2 + mu_eff) if is_unset(config.c_1) else config.c_1
    c_mu = (
        min(1 - c_1, ALPHA_COV * (mu_eff - 2 + 1 / mu_eff) / ((n + 2) ** 2 + ALPHA_COV * mu_eff / 2))
        if is_unset(config.c_mu)
        else config.c_mu
    )
    c_c = (4 + mu_eff / n) / (n + 4 + 2 * mu_eff / n) if is_unset(config.c_c) else config.c_c
    c_sigma = (mu_eff + 2) / (n + mu_eff + 5) if is_unset(config.c_sigma) else config.c_sigma
    alpha_neg_pd = math.inf if c_mu == 0 else (1 - c_1 - c_mu) / (n * c_mu)

    neg_scale = min(alpha_neg, alpha_neg_eff, alpha_neg_pd) / alpha_neg
    weights = np.where(w_prime >= 0, w_prime / w_pos_sum, neg_scale * w_prime)

    return weights, mu_eff, c_1, c_c, c_mu, c_sigma


def _supplied_parameters(
    config: CMAESConfig, n: int, mu_eff: float
) -> tuple[float, float, float, float]:
    """
    Learning rates for user supplied weights.
    c_1 is resolved before c_mu so neither default reads an unset value.
    Returns: (c_1, c_c, c_mu, c_sigma)
    """
    c_c = 1 / math.sqrt(n) if is_unset(config.c_c) else config.c_c
    c_sigma = 1 / math.sqrt(n) if is_unset(config.c_sigma) else config.c_sigma
    supplied_c_mu = 0.0 if is_unset(config.c_mu) else config.c_mu
    c_1 = min(2 / n**2, 1 - supplied_c_mu) if is_unset(config.c_1) else config.c_1
    c_mu = min(mu_eff / n**2, 1 - c_1) if is_unset(config.c_mu) else config.c_mu
    return c_1, c_c, c_mu, c_sigma


def _check_parameters(mu_eff: float, mu: int, c_1: float, c_c: float, c_mu: float, c_sigma: float) -> None:
    if not mu_eff_in_range(mu_eff, mu):
        raise ConfigurationError(f"μ_eff ∉ [1, μ]: μ_eff={mu_eff}, μ={mu}")
    if not c_1 >= 0:
        raise ConfigurationError(f"c_1 < 0: c_1={c_1}")
    if not c_mu >= 0:
        raise ConfigurationError(f"c_μ < 0: c_μ={c_mu}")
    if not c_1 + c_mu <= 1:
        raise ConfigurationError(f"c_1 + c_μ > 1: c_1={c_1}, c_μ={c_mu}")
    if not c_sigma < 1:
        raise ConfigurationError(f"c_σ ≥ 1: c_σ={c_sigma}")
    if not c_sigma > 0:
        raise ConfigurationError(f"c_σ ≤ 0: c_σ={c_sigma}")
    if not c_c <= 1:
        raise ConfigurationError(f"c_c > 1: c_c={c_c}")
    if not c_c > 0:
        raise ConfigurationError(f"c_c ≤ 0: c_c={c_c}")


def initial_state(
    config: CMAESConfig, individual: ArrayLike, dtype: type = np.float64
) -> CMAESState:
    """
    Initialization of the CMA-ES state.

    Args:
        config: Strategy parameters
        individual: One sample individual, supplies the dimension, the shape
            and the starting mean
        dtype: Numeric type of the objective value

    Returns:
        A fresh state with identity covariance and zero evolution paths

    Raises:
        ConfigurationError: if a derived parameter violates its invariant
    """
    x0 = np.array(individual, dtype=np.float64)
    shape = x0.shape
    n = x0.size
    if n == 0:
        raise ConfigurationError("Individual must have at least one coordinate")
    mu = config.mu

    mu_eff = effective_selection_mass(config.weights[:mu])
    if not mu_eff_in_range(mu_eff, mu):
        weights, mu_eff, c_1, c_c, c_mu, c_sigma = _default_parameters(config, n)
    else:
        mu_eff = min(max(mu_eff, 1.0), float(mu))
        weights = config.weights.copy()
        c_1, c_c, c_mu, c_sigma = _supplied_parameters(config, n, mu_eff)

    _check_parameters(mu_eff, mu, c_1, c_c, c_mu, c_sigma)

    d_sigma = 1 + 2 * max(0.0, math.sqrt(max(0.0, (mu_eff - 1) / (n + 1))) - 1) + c_sigma

    logger.debug(
        "[CMAES] init N={} mu_eff={:.4f} c_1={:.3g} c_c={:.3g} c_mu={:.3g} c_sigma={:.3g} d_sigma={:.3g}",
        n, mu_eff, c_1, c_c, c_mu, c_sigma, d_sigma,
    )

    parent = x0.reshape(n)
    return CMAESState(
        N=n,
        mu_eff=mu_eff,
        c_1=c_1,
        c_c=c_c,
        c_mu=c_mu,
        c_sigma=c_sigma,
        fitpop=np.full(mu, np.inf, dtype=dtype),
        C=np.eye(n),
        s=np.zeros(n),
        s_sigma=np.zeros(n),
        sigma=float(config.sigma0),
        weights=weights,
        d_sigma=d_sigma,
        parent=parent.copy(),
        fittest=parent.copy(),
        shape=shape,
        dtype=dtype,
    )
