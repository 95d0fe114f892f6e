"""
Closed-form European pricing (Black-Scholes family).

The normal CDF here is the Zelen-Severo polynomial approximation
(Abramowitz & Stegun 26.2.17) rather than an exact erf-based CDF.
Absolute error is below ~2e-7, far inside the two-decimal quoting
precision of the sweep.

The same formula prices equity options (level = spot) and FX options
(level = exchange rate); there is no separate foreign-rate term.

References:
    Black, F. & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Abramowitz, M. & Stegun, I. (1964). Handbook of Mathematical Functions, 26.2.17.
"""

from typing import Tuple

import numpy as np

from .errors import NumericDegeneracy
from .validation import require_finite_prices


# ════════════════════════════════════════════════════════════════════════
#  NORMAL CDF
# ════════════════════════════════════════════════════════════════════════

_ZS_P = 0.2316419
_ZS_B = (0.3193815, -0.3565638, 1.781478, -1.821256, 1.330274)
_INV_SQRT_2PI = 0.3989423


def normal_cdf(x):
    """
    Standard normal CDF, Zelen-Severo approximation.

    Works on scalars (returns float) and numpy arrays (returns array).
    The left tail is d * t * poly(t); for x > 0 the result is reflected
    as 1 - tail.
    """
    x = np.asarray(x, dtype=float)
    t = 1.0 / (1.0 + _ZS_P * np.abs(x))
    d = _INV_SQRT_2PI * np.exp(-x * x / 2.0)
    b1, b2, b3, b4, b5 = _ZS_B
    poly = b1 + t * (b2 + t * (b3 + t * (b4 + t * b5)))
    tail = d * t * poly
    prob = np.where(x > 0, 1.0 - tail, tail)
    if prob.ndim == 0:
        return float(prob)
    return prob


# ════════════════════════════════════════════════════════════════════════
#  PRICING
# ════════════════════════════════════════════════════════════════════════

def d1(level: float, strike: float, maturity: float, rate: float, sigma: float) -> float:
    """
    Compute d1 in the Black-Scholes formula.

    Parameters
    ----------
    level : spot price or exchange rate
    strike : strike price
    maturity : time to expiry in years
    rate : risk-free rate (annualized, continuous compounding)
    sigma : volatility (annualized)

    Raises
    ------
    NumericDegeneracy : sigma or maturity is zero (d1 would divide by zero),
        or level / strike is not a positive ratio
    """
    if level <= 0 or strike <= 0:
        raise NumericDegeneracy(
            f"Closed-form price undefined for level={level!r}, strike={strike!r}."
        )
    vol_sqrt_t = sigma * np.sqrt(maturity)
    if vol_sqrt_t == 0:
        raise NumericDegeneracy(
            f"Closed-form price undefined for sigma={sigma!r}, maturity={maturity!r} "
            "(zero volatility or zero maturity)."
        )
    return (np.log(level / strike) + (rate + 0.5 * sigma**2) * maturity) / vol_sqrt_t


def d2(level: float, strike: float, maturity: float, rate: float, sigma: float) -> float:
    """Compute d2 = d1 - sigma * sqrt(T)."""
    return d1(level, strike, maturity, rate, sigma) - sigma * np.sqrt(maturity)


def price_closed_form(
    level: float,
    strike: float,
    maturity: float,
    rate: float,
    sigma: float,
) -> Tuple[float, float]:
    """
    European call and put under Black-Scholes.

        C = S * N(d1) - K * e^{-rT} * N(d2)
        P = K * e^{-rT} * N(-d2) - S * N(-d1)

    Both legs share d1/d2, so put-call parity C - P = S - K e^{-rT}
    holds to within the CDF approximation error.

    Returns
    -------
    (call, put)
    """
    _d1 = d1(level, strike, maturity, rate, sigma)
    _d2 = _d1 - sigma * np.sqrt(maturity)
    discounted_strike = strike * np.exp(-rate * maturity)

    call = level * normal_cdf(_d1) - discounted_strike * normal_cdf(_d2)
    put = discounted_strike * normal_cdf(-_d2) - level * normal_cdf(-_d1)
    return require_finite_prices("closed-form", call, put)
