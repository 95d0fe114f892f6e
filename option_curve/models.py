"""
Model selection and dispatch.

Four interchangeable pricers share one capability: given a level,
strike, maturity, rate and the model's volatility inputs, return a
(call, put) pair. PricingModel names them; price_option routes a
request to the right one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from . import config
from .binomial import price_binomial
from .black_scholes import price_closed_form
from .errors import InvalidModel
from .heston import price_heston
from .inputs import HestonParams
from .monte_carlo import price_monte_carlo


class PricingModel(str, Enum):
    CLOSED_FORM = "closed_form"
    MONTE_CARLO = "monte_carlo"
    BINOMIAL = "binomial"
    HESTON = "heston"

    @property
    def is_stochastic(self) -> bool:
        """True for the models that consume random draws."""
        return self in (PricingModel.MONTE_CARLO, PricingModel.HESTON)

    @property
    def label(self) -> str:
        return config.MODEL_LABELS[self.value]

    @classmethod
    def parse(cls, selector) -> "PricingModel":
        """
        Resolve an enum member or a name/alias to a PricingModel.

        Matching ignores case, dashes and underscores, so "blackScholes",
        "black-scholes" and "BLACK_SCHOLES" all resolve to CLOSED_FORM.

        Raises
        ------
        InvalidModel : for anything that is not a known model
        """
        if isinstance(selector, cls):
            return selector
        if not isinstance(selector, str):
            raise InvalidModel(selector)
        key = selector.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        try:
            return _ALIASES[key]
        except KeyError:
            raise InvalidModel(selector) from None


_ALIASES = {
    "closedform": PricingModel.CLOSED_FORM,
    "blackscholes": PricingModel.CLOSED_FORM,
    "bs": PricingModel.CLOSED_FORM,
    "montecarlo": PricingModel.MONTE_CARLO,
    "mc": PricingModel.MONTE_CARLO,
    "binomial": PricingModel.BINOMIAL,
    "crr": PricingModel.BINOMIAL,
    "lattice": PricingModel.BINOMIAL,
    "heston": PricingModel.HESTON,
}


@dataclass(frozen=True)
class ModelSettings:
    """Simulation sizes. None means "use the config default"."""

    mc_paths: Optional[int] = None
    binomial_steps: Optional[int] = None
    heston_steps: Optional[int] = None
    heston_paths: Optional[int] = None
    batch_size: Optional[int] = None


def price_option(
    model,
    level: float,
    strike: float,
    maturity: float,
    rate: float,
    sigma: float,
    heston: Optional[HestonParams] = None,
    settings: Optional[ModelSettings] = None,
    sampler=None,
    cancel=None,
) -> Tuple[float, float]:
    """
    Price one strike with the selected model.

    sigma feeds closed-form, Monte Carlo and binomial; Heston ignores it
    and runs on its own variance process instead. Raw (unrounded) prices
    are returned.
    """
    model = PricingModel.parse(model)
    settings = settings or ModelSettings()

    if model is PricingModel.CLOSED_FORM:
        return price_closed_form(level, strike, maturity, rate, sigma)
    elif model is PricingModel.MONTE_CARLO:
        return price_monte_carlo(
            level, strike, maturity, rate, sigma,
            paths=settings.mc_paths, sampler=sampler,
            batch_size=settings.batch_size, cancel=cancel,
        )
    elif model is PricingModel.BINOMIAL:
        return price_binomial(level, strike, maturity, rate, sigma, steps=settings.binomial_steps)
    else:
        return price_heston(
            level, strike, maturity, rate, heston,
            steps=settings.heston_steps, paths=settings.heston_paths,
            sampler=sampler, batch_size=settings.batch_size, cancel=cancel,
        )
