"""
Cox-Ross-Rubinstein binomial lattice, European exercise only.

    dt = T / N,  u = e^{sigma sqrt(dt)},  d = 1/u
    p  = (e^{r dt} - d) / (u - d)

Terminal node i (0 = highest) sits at S u^{N-i} d^i. Backward induction
discounts p * up + (1 - p) * down one level at a time until only the
root remains. Interior nodes are never compared with intrinsic value,
so there is no early exercise. Converges to the closed-form price as N
grows, oscillating with an O(1/N) envelope.
"""

from typing import Tuple

import numpy as np

from . import config
from .errors import NumericDegeneracy
from .validation import require_count, require_finite_prices


def price_binomial(
    level: float,
    strike: float,
    maturity: float,
    rate: float,
    sigma: float,
    steps: int = None,
) -> Tuple[float, float]:
    """
    European call and put prices on a CRR lattice.

    Parameters
    ----------
    level, strike, maturity, rate, sigma : as for price_closed_form
    steps : lattice depth N (default: config.BINOMIAL_STEPS)

    Raises
    ------
    NumericDegeneracy : u == d (zero sigma or zero maturity), which
        makes the risk-neutral probability 0/0
    """
    steps = require_count("steps", config.BINOMIAL_STEPS if steps is None else steps)

    dt = maturity / steps
    u = np.exp(sigma * np.sqrt(dt))
    d = 1.0 / u
    if u == d:
        raise NumericDegeneracy(
            f"Binomial lattice collapses for sigma={sigma!r}, maturity={maturity!r} (u == d)."
        )
    p = (np.exp(rate * dt) - d) / (u - d)
    discount = np.exp(-rate * dt)

    idx = np.arange(steps + 1)

    # huge sigma overflows u**N; the inf/nan is caught by the finite check below
    with np.errstate(over="ignore", invalid="ignore"):
        terminal = level * u ** (steps - idx) * d ** idx

        calls = np.maximum(terminal - strike, 0.0)
        puts = np.maximum(strike - terminal, 0.0)

        # each pass shortens the vectors by one: node i at step k has children i, i+1
        for _ in range(steps):
            calls = discount * (p * calls[:-1] + (1.0 - p) * calls[1:])
            puts = discount * (p * puts[:-1] + (1.0 - p) * puts[1:])

    return require_finite_prices("binomial", calls[0], puts[0])
