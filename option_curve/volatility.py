"""
Range-based volatility estimate.

Treats the observed low/high pair as the bounds of a single excursion
over the horizon and backs out

    sigma = ln(high / low) / (2 * sqrt(T))

This is a deterministic proxy, not a calibrated annualized range
estimator. It does not reject high < low: the result is then negative,
and it is up to the caller to decide whether that is acceptable
(sweep() rejects it).
"""

import math

from .validation import require_positive


def estimate_volatility(low: float, high: float, level: float, maturity: float) -> float:
    """
    Volatility from an observed low/high range.

    Parameters
    ----------
    low : lowest observed price / rate (> 0)
    high : highest observed price / rate (> 0)
    level : current spot price or exchange rate (> 0); only checked
    maturity : horizon in years (> 0)

    Returns
    -------
    float : sigma, possibly negative when high < low

    Raises
    ------
    InvalidInput : if any of the four values is non-numeric or <= 0
    """
    low = require_positive("low", low)
    high = require_positive("high", high)
    require_positive("level", level)
    maturity = require_positive("maturity", maturity)
    return math.log(high / low) / (2.0 * math.sqrt(maturity))
