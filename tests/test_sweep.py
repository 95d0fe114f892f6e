"""
Tests for the strike sweep orchestration.
"""

import threading

import numpy as np
import pandas as pd
import pytest

from option_curve.errors import InvalidInput, InvalidModel, NumericDegeneracy, SweepCancelled
from option_curve.inputs import HestonParams, PricingInputs
from option_curve.models import ModelSettings
from option_curve.random_source import BoxMullerSampler
from option_curve.sweep import price_at_strike, round_half_away, strike_grid, sweep


FAST = ModelSettings(mc_paths=2000, binomial_steps=50, heston_steps=10, heston_paths=1000)


class TestStrikeGrid:

    def test_count_and_bounds(self):
        grid = strike_grid(100.0)
        assert len(grid) == 21
        assert grid[0] == pytest.approx(50.0)
        assert grid[-1] == pytest.approx(150.0)

    def test_awkward_level_keeps_last_point(self):
        """Repeated addition of 0.05 * 110 would overshoot 165 and drop it."""
        grid = strike_grid(110.0)
        assert len(grid) == 21
        assert grid[-1] == pytest.approx(165.0)

    def test_ascending(self):
        assert np.all(np.diff(strike_grid(123.45)) > 0)


class TestRounding:

    @pytest.mark.parametrize("value, expected", [
        (0.125, 0.13),
        (-0.125, -0.13),
        (2.675, 2.68),
        (1.005, 1.01),
        (6.816467, 6.82),
        (1.939410, 1.94),
        (0.0, 0.0),
    ])
    def test_half_away_from_zero(self, value, expected):
        assert round_half_away(value) == expected

    def test_other_precision(self):
        assert round_half_away(0.5, 0) == 1.0
        assert round_half_away(2.5, 0) == 3.0


class TestSweep:

    def test_shape(self, reference_inputs):
        result = sweep(reference_inputs)
        curve = result.curve
        assert len(curve) == 21
        assert np.all(np.diff(curve.strikes) > 0)
        assert curve.strikes.min() >= 0.5 * reference_inputs.level
        assert curve.strikes.max() <= 1.5 * reference_inputs.level

    def test_sigma_returned(self, reference_inputs):
        result = sweep(reference_inputs)
        assert result.sigma == pytest.approx(np.log(110 / 90) / 2)
        assert result.model == "closed_form"

    def test_reference_point(self, reference_inputs):
        """ATM point of the reference sweep, closed form."""
        atm = [q for q in sweep(reference_inputs).curve if q.strike == 100.0][0]
        assert atm.call == pytest.approx(6.82)
        assert atm.put == pytest.approx(1.94)

    def test_values_rounded(self, reference_inputs):
        for q in sweep(reference_inputs).curve:
            for v in (q.strike, q.call, q.put):
                assert round(v, 2) == v

    def test_closed_form_curve_shape(self, reference_inputs):
        """Calls fall and puts rise with strike."""
        curve = sweep(reference_inputs).curve
        assert np.all(np.diff(curve.calls) <= 0)
        assert np.all(np.diff(curve.puts) >= 0)
        assert curve.calls.min() >= 0
        assert curve.puts.min() >= 0

    def test_fx_level(self):
        inputs = PricingInputs(110.0, 110.0, 1.0, 0.05, 105.0, 115.0, asset="fx")
        curve = sweep(inputs).curve
        assert len(curve) == 21
        assert curve[0].strike == 55.0
        assert curve[-1].strike == 165.0

    @pytest.mark.parametrize("model", ["monte_carlo", "binomial", "heston"])
    def test_every_model_runs(self, reference_inputs, model):
        result = sweep(reference_inputs, model, settings=FAST, sampler=1)
        assert len(result.curve) == 21
        assert result.model == model

    def test_binomial_tracks_closed_form(self, reference_inputs):
        bs = sweep(reference_inputs).curve
        crr = sweep(reference_inputs, "binomial").curve
        np.testing.assert_allclose(crr.calls, bs.calls, atol=0.1)
        np.testing.assert_allclose(crr.puts, bs.puts, atol=0.1)

    def test_seeded_monte_carlo_reproducible(self, reference_inputs):
        a = sweep(reference_inputs, "monte_carlo", settings=FAST, sampler=99)
        b = sweep(reference_inputs, "monte_carlo", settings=FAST, sampler=99)
        assert a.curve == b.curve

    def test_workers_do_not_change_seeded_curve(self, reference_inputs):
        seq = sweep(reference_inputs, "heston", settings=FAST, sampler=5, workers=1)
        par = sweep(reference_inputs, "heston", settings=FAST, sampler=5, workers=4)
        assert seq.curve == par.curve

    def test_plain_generator_sampler(self, reference_inputs):
        rng = np.random.default_rng(0)
        result = sweep(reference_inputs, "mc", settings=FAST, sampler=rng, workers=2)
        assert len(result.curve) == 21

    def test_to_frame(self, reference_inputs):
        df = sweep(reference_inputs).curve.to_frame()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["strike", "call", "put"]
        assert len(df) == 21


class TestSweepErrors:

    def test_unknown_model_before_numeric_work(self):
        """Model is checked first: bad inputs are never looked at."""
        bad = PricingInputs(100.0, 100.0, 1.0, 0.05, 0.0, 110.0)
        with pytest.raises(InvalidModel):
            sweep(bad, "arbitrage")

    def test_zero_low(self):
        bad = PricingInputs(100.0, 100.0, 1.0, 0.05, 0.0, 110.0)
        with pytest.raises(InvalidInput) as exc:
            sweep(bad)
        assert exc.value.field == "low"

    def test_inverted_range_rejected(self):
        bad = PricingInputs(100.0, 100.0, 1.0, 0.05, 110.0, 90.0)
        with pytest.raises(InvalidInput) as exc:
            sweep(bad)
        assert exc.value.field == "high"

    @pytest.mark.parametrize("model", ["closed_form", "binomial"])
    def test_flat_range_degenerate(self, model):
        flat = PricingInputs(100.0, 100.0, 1.0, 0.05, 100.0, 100.0)
        with pytest.raises(NumericDegeneracy):
            sweep(flat, model)

    def test_flat_range_monte_carlo_ok(self):
        """Zero sigma is well defined for Monte Carlo: the forward is certain."""
        flat = PricingInputs(100.0, 100.0, 1.0, 0.05, 100.0, 100.0)
        curve = sweep(flat, "monte_carlo", settings=FAST, sampler=1).curve
        atm = [q for q in curve if q.strike == 100.0][0]
        assert atm.call == pytest.approx(round(100.0 - 100.0 * np.exp(-0.05), 2))
        assert atm.put == 0.0

    def test_heston_requires_params(self):
        inputs = PricingInputs(100.0, 100.0, 1.0, 0.05, 90.0, 110.0, heston=None)
        with pytest.raises(InvalidInput):
            sweep(inputs, "heston")

    def test_non_numeric_input(self):
        inputs = PricingInputs("100", 100.0, 1.0, 0.05, 90.0, 110.0)
        with pytest.raises(InvalidInput):
            sweep(inputs)

    def test_cancelled(self, reference_inputs):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(SweepCancelled):
            sweep(reference_inputs, cancel=cancel)

    def test_cancelled_parallel(self, reference_inputs):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(SweepCancelled):
            sweep(reference_inputs, "heston", settings=FAST, sampler=1, workers=3, cancel=cancel)

    def test_bad_workers(self, reference_inputs):
        with pytest.raises(InvalidInput):
            sweep(reference_inputs, workers=0)

    def test_tiny_level_strikes_round_to_zero(self):
        """A JPY->USD style rate: the lowest strikes would quote as 0.00."""
        tiny = PricingInputs(0.0067, 0.0067, 1.0, 0.01, 0.0060, 0.0072, asset="fx")
        with pytest.raises(InvalidInput) as exc:
            sweep(tiny)
        assert exc.value.field == "level"

    def test_small_level_duplicate_strikes(self):
        """At level 0.05 neighbouring strikes collapse onto the same cent."""
        small = PricingInputs(0.05, 0.05, 1.0, 0.01, 0.045, 0.055)
        with pytest.raises(InvalidInput) as exc:
            sweep(small, "binomial")
        assert exc.value.field == "level"

    def test_overflowing_sigma(self):
        """A 1 to 1e87 range gives sigma near 100; the lattice overflows."""
        wild = PricingInputs(100.0, 100.0, 1.0, 0.05, 1.0, 1e87)
        with pytest.raises(NumericDegeneracy):
            sweep(wild, "binomial")


class CancelOnFirstDraw:
    """Normal source that sets the event the first time it is used."""

    def __init__(self, cancel, seed=0):
        self.cancel = cancel
        self.calls = 0
        self._inner = BoxMullerSampler(seed=seed)

    def standard_normal(self, size=None):
        self.calls += 1
        self.cancel.set()
        return self._inner.standard_normal(size)


class TestCancellation:

    def test_cancelled_after_first_strike(self, reference_inputs):
        """Strike 0 completes, the check before strike 1 stops the sweep."""
        cancel = threading.Event()
        source = CancelOnFirstDraw(cancel)
        settings = ModelSettings(mc_paths=2000, batch_size=5000)
        result = None
        with pytest.raises(SweepCancelled):
            result = sweep(reference_inputs, "monte_carlo", settings=settings,
                           sampler=source, cancel=cancel)
        assert result is None
        assert source.calls == 1


class TestPriceAtStrike:

    def test_matches_sweep_point(self, reference_inputs):
        quote = price_at_strike(reference_inputs)
        assert quote.strike == 100.0
        assert quote.call == pytest.approx(6.82)
        assert quote.put == pytest.approx(1.94)

    def test_off_grid_strike(self):
        inputs = PricingInputs(100.0, 97.3, 1.0, 0.05, 90.0, 110.0)
        quote = price_at_strike(inputs, "binomial")
        assert quote.strike == 97.3
        assert quote.call > 6.82

    def test_heston_quote(self, reference_inputs):
        quote = price_at_strike(reference_inputs, "heston", settings=FAST, sampler=2)
        assert quote.call > 0 and quote.put > 0
