"""
Input checks run before any model does numeric work.

The presentation layer owns text-to-number parsing; by the time values
arrive here they should already be numbers. Anything that is not a
finite real number, or a strictly-positive field that is <= 0, raises
InvalidInput naming the offending field.
"""

import math
import numbers

from .errors import InvalidInput, NumericDegeneracy


def require_number(name: str, value) -> float:
    """Return value as float, or raise InvalidInput if it is not a finite real."""
    # bool is an Integral subclass but never a meaningful price input
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(name, f"{name} must be a number, got {value!r}.")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInput(name, f"{name} must be finite, got {value!r}.")
    return value


def require_positive(name: str, value) -> float:
    value = require_number(name, value)
    if value <= 0:
        raise InvalidInput(name, f"{name} must be positive, got {value!r}.")
    return value


def require_non_negative(name: str, value) -> float:
    value = require_number(name, value)
    if value < 0:
        raise InvalidInput(name, f"{name} must be non-negative, got {value!r}.")
    return value


def require_count(name: str, value) -> int:
    """Path/step/worker counts: positive integers only."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
        raise InvalidInput(name, f"{name} must be a positive integer, got {value!r}.")
    return int(value)


def validate_inputs(inputs) -> None:
    """
    Check the scalar fields of a PricingInputs.

    level, strike, maturity, low and high must be > 0. The rate only
    has to be numeric; negative rates are legitimate.
    """
    require_positive("level", inputs.level)
    require_positive("strike", inputs.strike)
    require_positive("maturity", inputs.maturity)
    require_number("rate", inputs.rate)
    require_positive("low", inputs.low)
    require_positive("high", inputs.high)


def validate_heston(params) -> None:
    """Check a HestonParams block; None is rejected since the caller needs one."""
    if params is None:
        raise InvalidInput("heston", "The Heston model requires Heston parameters.")
    require_non_negative("initial_variance", params.initial_variance)
    require_number("mean_reversion", params.mean_reversion)
    require_non_negative("long_run_variance", params.long_run_variance)
    require_non_negative("vol_of_vol", params.vol_of_vol)
    rho = require_number("correlation", params.correlation)
    if not -1.0 <= rho <= 1.0:
        raise InvalidInput("correlation", f"correlation must lie in [-1, 1], got {rho!r}.")


def require_finite_prices(model: str, call: float, put: float) -> tuple:
    """Surface NaN/inf from a model as NumericDegeneracy instead of letting it reach the curve."""
    if not (math.isfinite(call) and math.isfinite(put)):
        raise NumericDegeneracy(
            f"{model} produced a non-finite price (call={call!r}, put={put!r})."
        )
    return float(call), float(put)
