"""
Strike sweep: one volatility estimate, one model, 21 strikes.

The pipeline:
    1. Resolve the model selector (fails fast, before any numeric work)
    2. Validate the scalar inputs (and the Heston block if needed)
    3. Estimate sigma once from the observed low/high range
    4. Build the strike grid 0.5L, 0.55L, ..., 1.5L
    5. Price every strike with the selected model, sequentially or on
       a thread pool
    6. Round strike, call and put to two decimals and return the curve

Either the whole curve comes back or a single PricingError is raised;
a failure on one strike discards the rest.

Stochastic models get one independent random stream per strike (spawned
from the caller's sampler), so a seeded sweep gives the same curve
whether it runs on one worker or eight.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

import numpy as np

from . import config
from .errors import InvalidInput
from .inputs import PriceCurve, PriceQuote, PricingInputs, SweepResult
from .models import ModelSettings, PricingModel, price_option
from .monte_carlo import raise_if_cancelled
from .random_source import make_sampler
from .validation import require_count, validate_heston, validate_inputs
from .volatility import estimate_volatility

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════
#  GRID + ROUNDING
# ════════════════════════════════════════════════════════════════════════

def strike_grid(level: float) -> np.ndarray:
    """
    Raw (unrounded) strikes from STRIKE_LOW_MULT x level to
    STRIKE_HIGH_MULT x level in steps of STRIKE_STEP_MULT x level.

    Each strike is computed from its index rather than by repeated
    addition, so float drift can never drop the last point.
    """
    n = int(round((config.STRIKE_HIGH_MULT - config.STRIKE_LOW_MULT) / config.STRIKE_STEP_MULT)) + 1
    return level * (config.STRIKE_LOW_MULT + config.STRIKE_STEP_MULT * np.arange(n))


def round_half_away(value: float, decimals: int = None) -> float:
    """
    Round to a fixed number of decimals, halves away from zero.

    Python's round() is banker's rounding (2.5 -> 2); quotes here use
    the schoolbook rule instead: 0.125 -> 0.13, -0.125 -> -0.13.
    The decimal expansion used is the shortest repr of the float.
    """
    if decimals is None:
        decimals = config.PRICE_DECIMALS
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


# ════════════════════════════════════════════════════════════════════════
#  SWEEP
# ════════════════════════════════════════════════════════════════════════

def _prepare(inputs: PricingInputs, model) -> tuple:
    """Steps 1-3 of the pipeline, shared by sweep() and price_at_strike()."""
    model = PricingModel.parse(model)
    validate_inputs(inputs)
    if model is PricingModel.HESTON:
        validate_heston(inputs.heston)

    sigma = estimate_volatility(inputs.low, inputs.high, inputs.level, inputs.maturity)
    if sigma < 0:
        raise InvalidInput(
            "high",
            f"Observed high ({inputs.high}) is below observed low ({inputs.low}); "
            "volatility would be negative.",
        )
    return model, sigma


def _check_grid(strikes: List[float], level: float) -> None:
    """
    Rounded strikes must stay positive and strictly ascending. A very
    small level collapses neighbouring strikes onto the same cent, or
    the lowest ones onto zero.
    """
    if strikes[0] <= 0 or any(b <= a for a, b in zip(strikes, strikes[1:])):
        raise InvalidInput(
            "level",
            f"level={level!r} is too small for a strike grid quoted to "
            f"{config.PRICE_DECIMALS} decimals (strikes would be {strikes[0]}..{strikes[-1]}).",
        )


def _strike_samplers(model: PricingModel, sampler, n: int) -> tuple:
    """
    One sampler per strike, plus whether they are independent.

    Deterministic models get None everywhere. A sampler without spawn()
    is shared across strikes, which forces a sequential sweep.
    """
    if not model.is_stochastic:
        return [None] * n, True
    sampler = make_sampler(sampler)
    if hasattr(sampler, "spawn"):
        return list(sampler.spawn(n)), True
    return [sampler] * n, False


def sweep(
    inputs: PricingInputs,
    model=PricingModel.CLOSED_FORM,
    settings: Optional[ModelSettings] = None,
    sampler=None,
    workers: int = None,
    cancel=None,
) -> SweepResult:
    """
    Price calls and puts across the strike grid around inputs.level.

    Parameters
    ----------
    inputs : PricingInputs (inputs.strike is not used here, the grid replaces it)
    model : PricingModel or a name/alias such as "black_scholes"
    settings : simulation sizes (default: config values)
    sampler : normal source, int seed, or None for OS entropy
    workers : threads for pricing strikes (default: config.SWEEP_WORKERS)
    cancel : optional event (is_set()) checked before each strike and
             between path batches

    Returns
    -------
    SweepResult with sigma, the resolved model name, and a 21-point
    strike-ascending PriceCurve

    Raises
    ------
    InvalidModel, InvalidInput, NumericDegeneracy, SweepCancelled
    """
    t0 = time.perf_counter()
    model, sigma = _prepare(inputs, model)
    workers = require_count("workers", config.SWEEP_WORKERS if workers is None else workers)

    strikes = [round_half_away(k) for k in strike_grid(inputs.level)]
    _check_grid(strikes, inputs.level)
    samplers, independent = _strike_samplers(model, sampler, len(strikes))
    if workers > 1 and not independent:
        logger.warning("sampler has no spawn(); pricing %d strikes sequentially", len(strikes))
        workers = 1

    logger.debug("sweep model=%s sigma=%.6f strikes=%d workers=%d",
                 model.value, sigma, len(strikes), workers)

    def price_one(i: int) -> PriceQuote:
        raise_if_cancelled(cancel)
        call, put = price_option(
            model, inputs.level, strikes[i], inputs.maturity, inputs.rate, sigma,
            heston=inputs.heston, settings=settings, sampler=samplers[i], cancel=cancel,
        )
        return PriceQuote(strikes[i], round_half_away(call), round_half_away(put))

    quotes: List[Optional[PriceQuote]] = [None] * len(strikes)
    if workers == 1:
        for i in range(len(strikes)):
            quotes[i] = price_one(i)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(price_one, i): i for i in range(len(strikes))}
            try:
                for future in as_completed(futures):
                    quotes[futures[future]] = future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    logger.debug("sweep finished in %.3fs", time.perf_counter() - t0)
    return SweepResult(sigma=sigma, model=model.value, curve=PriceCurve(tuple(quotes)))


def price_at_strike(
    inputs: PricingInputs,
    model=PricingModel.CLOSED_FORM,
    settings: Optional[ModelSettings] = None,
    sampler=None,
    cancel=None,
) -> PriceQuote:
    """
    Price the single strike in inputs.strike, with the same sigma a
    sweep would use. The strike is priced as entered; the returned quote
    is rounded like a curve point.
    """
    model, sigma = _prepare(inputs, model)
    call, put = price_option(
        model, inputs.level, inputs.strike, inputs.maturity, inputs.rate, sigma,
        heston=inputs.heston, settings=settings,
        sampler=make_sampler(sampler) if model.is_stochastic else None, cancel=cancel,
    )
    return PriceQuote(round_half_away(inputs.strike), round_half_away(call), round_half_away(put))
