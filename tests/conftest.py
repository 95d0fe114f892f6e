"""
Shared test fixtures and pytest configuration.
"""

import pytest

from option_curve.inputs import HestonParams, PricingInputs
from option_curve.random_source import BoxMullerSampler


@pytest.fixture
def sampler():
    """Seeded normal source so simulation tests are reproducible."""
    return BoxMullerSampler(seed=42)


@pytest.fixture
def reference_inputs():
    """The input form's defaults: S=K=100, T=1, r=5%, range 90-110."""
    return PricingInputs(
        level=100.0, strike=100.0, maturity=1.0, rate=0.05,
        low=90.0, high=110.0, heston=HestonParams(),
    )
