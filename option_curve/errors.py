"""
Exception hierarchy for the pricing engine.

Every failure a sweep can produce is a PricingError, so callers can
catch one type and show the message. No partial curve is ever returned
alongside an error.
"""


class PricingError(Exception):
    """Base class for all engine failures."""


class InvalidInput(PricingError, ValueError):
    """A required scalar is missing, non-numeric, or out of range."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class InvalidModel(PricingError, ValueError):
    """The model selector does not name a known pricing model."""

    def __init__(self, selector):
        super().__init__(
            f"Unknown pricing model: {selector!r}. "
            "Use 'closed_form', 'monte_carlo', 'binomial' or 'heston'."
        )
        self.selector = selector


class NumericDegeneracy(PricingError, ArithmeticError):
    """A model hit a zero denominator or produced a non-finite price."""


class SweepCancelled(PricingError, RuntimeError):
    """The caller's cancellation event was set mid-computation."""
