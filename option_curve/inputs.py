"""
Value types passed into and returned from the engine.

All of them are frozen: a pricing request is immutable once built, and
a returned curve is never modified in place. A new sweep builds a new
curve.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np
import pandas as pd

from . import config


@dataclass(frozen=True)
class HestonParams:
    """
    Stochastic-volatility block, supplied by the user (never fitted).

    initial_variance  : v0, variance at t=0
    mean_reversion    : kappa, speed of reversion towards long_run_variance
    long_run_variance : theta
    vol_of_vol        : xi, volatility of the variance process
    correlation       : rho between the level and variance shocks
    """

    initial_variance: float = config.DEFAULT_V0
    mean_reversion: float = config.DEFAULT_KAPPA
    long_run_variance: float = config.DEFAULT_THETA
    vol_of_vol: float = config.DEFAULT_XI
    correlation: float = config.DEFAULT_RHO


@dataclass(frozen=True)
class PricingInputs:
    """
    One pricing request.

    level is the spot price (equity) or the exchange rate (fx); the
    asset field is a display label only and never changes the math.
    low/high are the observed range that drives the volatility estimate.
    """

    level: float
    strike: float
    maturity: float
    rate: float
    low: float
    high: float
    heston: Optional[HestonParams] = None
    asset: str = config.DEFAULT_ASSET


@dataclass(frozen=True)
class PriceQuote:
    strike: float
    call: float
    put: float


@dataclass(frozen=True)
class PriceCurve:
    """Strike-ascending sequence of quotes from one sweep."""

    quotes: Tuple[PriceQuote, ...]

    def __len__(self) -> int:
        return len(self.quotes)

    def __iter__(self) -> Iterator[PriceQuote]:
        return iter(self.quotes)

    def __getitem__(self, index) -> PriceQuote:
        return self.quotes[index]

    @property
    def strikes(self) -> np.ndarray:
        return np.array([q.strike for q in self.quotes], dtype=float)

    @property
    def calls(self) -> np.ndarray:
        return np.array([q.call for q in self.quotes], dtype=float)

    @property
    def puts(self) -> np.ndarray:
        return np.array([q.put for q in self.quotes], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """Curve as a DataFrame with columns [strike, call, put]."""
        return pd.DataFrame(
            {"strike": self.strikes, "call": self.calls, "put": self.puts}
        )


@dataclass(frozen=True)
class SweepResult:
    """What a sweep hands back: the curve plus the sigma that produced it."""

    sigma: float
    model: str
    curve: PriceCurve
