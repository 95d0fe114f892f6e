"""
Heston stochastic-volatility Monte Carlo (Euler, full truncation).

Model:
    dS = r S dt + sqrt(v) S dW_S
    dv = kappa (theta - v) dt + xi sqrt(v) dW_v
    corr(dW_S, dW_v) = rho

Discretization per step, for every path:

    z_S = Z1
    z_v = rho Z1 + sqrt(1 - rho^2) Z2
    S  <- S * exp((r - v/2) dt + sqrt(v dt) z_S)
    v  <- max(v + kappa (theta - v) dt + xi sqrt(v dt) z_v, 0)

Both updates use the variance from the start of the step. Flooring v at
zero keeps sqrt(v dt) real; a path whose variance hits zero simply
stops diffusing until the drift pulls it back up.

Cost is paths x steps x 2 normal draws, the most expensive model in
the engine. Parameters are user-supplied; nothing here calibrates.

References:
    Heston, S. (1993). A Closed-Form Solution for Options with Stochastic Volatility.
    Lord, R., Koekkoek, R. & van Dijk, D. (2010). A comparison of biased
    simulation schemes for stochastic volatility models.
"""

from typing import Tuple

import numpy as np

from . import config
from .inputs import HestonParams
from .monte_carlo import iter_batches, raise_if_cancelled
from .random_source import make_sampler
from .validation import require_count, require_finite_prices, validate_heston


def simulate_terminal_levels(
    level: float,
    maturity: float,
    rate: float,
    params: HestonParams,
    steps: int,
    n_paths: int,
    sampler,
) -> np.ndarray:
    """
    Simulate n_paths Heston paths and return the terminal levels only.

    Intermediate states are not stored; memory is O(n_paths).
    """
    dt = maturity / steps
    kappa = params.mean_reversion
    theta = params.long_run_variance
    xi = params.vol_of_vol
    rho = params.correlation
    rho_bar = np.sqrt(1.0 - rho**2)

    S = np.full(n_paths, float(level))
    v = np.full(n_paths, float(params.initial_variance))

    for _ in range(steps):
        z_S = sampler.standard_normal(n_paths)
        z_v = rho * z_S + rho_bar * sampler.standard_normal(n_paths)

        sqrt_v_dt = np.sqrt(v * dt)
        S = S * np.exp((rate - 0.5 * v) * dt + sqrt_v_dt * z_S)
        v = np.maximum(v + kappa * (theta - v) * dt + xi * sqrt_v_dt * z_v, 0.0)

    return S


def price_heston(
    level: float,
    strike: float,
    maturity: float,
    rate: float,
    params: HestonParams,
    steps: int = None,
    paths: int = None,
    sampler=None,
    batch_size: int = None,
    cancel=None,
) -> Tuple[float, float]:
    """
    Heston Monte Carlo estimate of European call and put prices.

    Parameters
    ----------
    level, strike, maturity, rate : as for price_closed_form
    params : HestonParams (v0, kappa, theta, xi, rho)
    steps : Euler steps per path (default: config.HESTON_STEPS)
    paths : number of paths (default: config.HESTON_PATHS)
    sampler : normal source, int seed, or None for OS entropy
    batch_size : paths per vectorized batch (default: config.PATH_BATCH_SIZE)
    cancel : optional event checked between batches

    Returns
    -------
    (call, put)
    """
    validate_heston(params)
    steps = require_count("steps", config.HESTON_STEPS if steps is None else steps)
    paths = require_count("paths", config.HESTON_PATHS if paths is None else paths)
    batch_size = require_count(
        "batch_size", config.PATH_BATCH_SIZE if batch_size is None else batch_size
    )
    sampler = make_sampler(sampler)

    call_sum = 0.0
    put_sum = 0.0
    for n in iter_batches(paths, batch_size):
        raise_if_cancelled(cancel)
        level_T = simulate_terminal_levels(level, maturity, rate, params, steps, n, sampler)
        call_sum += np.maximum(level_T - strike, 0.0).sum()
        put_sum += np.maximum(strike - level_T, 0.0).sum()

    discount = np.exp(-rate * maturity)
    call = discount * call_sum / paths
    put = discount * put_sum / paths
    return require_finite_prices("heston", call, put)
