"""
Tests for the Box-Muller normal sampler.
"""

import numpy as np
import pytest

from option_curve.random_source import BoxMullerSampler, make_sampler


class TestBoxMuller:

    def test_moments(self, sampler):
        z = sampler.standard_normal(200_000)
        assert abs(z.mean()) < 0.01
        assert abs(z.std() - 1.0) < 0.01

    def test_tail_frequency(self, sampler):
        """About 5% of draws fall outside +/-1.96."""
        z = sampler.standard_normal(200_000)
        assert abs(np.mean(np.abs(z) > 1.96) - 0.05) < 0.003

    def test_uniforms_exclude_zero(self, sampler):
        u = sampler.uniforms(100_000)
        assert u.min() > 0.0
        assert u.max() <= 1.0

    def test_seed_reproducible(self):
        a = BoxMullerSampler(seed=7).standard_normal(1000)
        b = BoxMullerSampler(seed=7).standard_normal(1000)
        np.testing.assert_array_equal(a, b)

    def test_different_seeds_differ(self):
        a = BoxMullerSampler(seed=1).standard_normal(1000)
        b = BoxMullerSampler(seed=2).standard_normal(1000)
        assert not np.allclose(a, b)

    def test_scalar_draw(self, sampler):
        assert np.isfinite(sampler.standard_normal())

    def test_spawn_independent_streams(self, sampler):
        children = sampler.spawn(3)
        assert len(children) == 3
        draws = [c.standard_normal(1000) for c in children]
        assert not np.allclose(draws[0], draws[1])
        assert not np.allclose(draws[1], draws[2])

    def test_spawn_reproducible(self):
        a = BoxMullerSampler(seed=3).spawn(2)[1].standard_normal(100)
        b = BoxMullerSampler(seed=3).spawn(2)[1].standard_normal(100)
        np.testing.assert_array_equal(a, b)


class TestMakeSampler:

    def test_none_gives_box_muller(self):
        assert isinstance(make_sampler(None), BoxMullerSampler)

    def test_int_seed(self):
        a = make_sampler(11).standard_normal(10)
        b = BoxMullerSampler(seed=11).standard_normal(10)
        np.testing.assert_array_equal(a, b)

    def test_passthrough_generator(self):
        rng = np.random.default_rng(0)
        assert make_sampler(rng) is rng

    def test_rejects_non_sampler(self):
        with pytest.raises(TypeError):
            make_sampler("not a sampler")
