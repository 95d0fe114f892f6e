"""
option-price-curve
==================
European call/put price curves across a strike range, under four
pricing models, from a volatility estimated off an observed high/low range.

Modules:
    volatility       - Range-based sigma estimate
    black_scholes    - Normal CDF approximation and closed-form pricing
    monte_carlo      - Terminal-value Monte Carlo
    binomial         - Cox-Ross-Rubinstein lattice
    heston           - Heston stochastic-volatility Monte Carlo
    models           - Model selector and dispatch
    sweep            - Strike sweep orchestration
    random_source    - Seedable Box-Muller normal sampler
    inputs           - Request/result value types
    validation       - Input checks
    errors           - Exception hierarchy
    visualization    - Curve charts (matplotlib + plotly)
    config           - Global constants and defaults
"""

from .errors import InvalidInput, InvalidModel, NumericDegeneracy, PricingError, SweepCancelled
from .inputs import HestonParams, PriceCurve, PriceQuote, PricingInputs, SweepResult
from .models import ModelSettings, PricingModel, price_option
from .sweep import price_at_strike, sweep
from .volatility import estimate_volatility

__version__ = "0.1.0"
__author__ = "Leo"
