"""
Standard-normal draws for the simulation models.

The sampler uses the Box-Muller transform: two independent uniforms
u1, u2 map to one standard normal

    z = sqrt(-2 ln u1) * cos(2 pi u2)

Only the cosine branch is used; the sine partner is discarded, so each
normal costs two uniforms. This is a forward transform of uniforms, not
an inverse-CDF (quantile) sampler.

Any object with a ``standard_normal(size)`` method can stand in for the
sampler (a plain numpy Generator works), which is how tests inject
seeded sources. Production code leaves the seed as None and draws from
OS entropy.
"""

from typing import List, Optional, Union

import numpy as np


class BoxMullerSampler:
    """Seedable standard-normal source built on numpy's default Generator."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def uniforms(self, size=None) -> np.ndarray:
        """Uniform draws on (0, 1], safe to pass to log()."""
        return 1.0 - self._rng.random(size)

    def standard_normal(self, size=None):
        u1 = self.uniforms(size)
        u2 = self._rng.random(size)
        return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)

    def spawn(self, n: int) -> List["BoxMullerSampler"]:
        """n statistically independent child samplers (one per worker / strike)."""
        return [BoxMullerSampler(rng=child) for child in self._rng.spawn(n)]


def make_sampler(source: Union[None, int, object] = None):
    """
    Normalise a sampler argument.

    None -> fresh unseeded BoxMullerSampler
    int  -> BoxMullerSampler seeded with that int
    anything else is assumed to expose standard_normal(size) and is returned as-is
    """
    if source is None:
        return BoxMullerSampler()
    if isinstance(source, (int, np.integer)) and not isinstance(source, bool):
        return BoxMullerSampler(seed=int(source))
    if not hasattr(source, "standard_normal"):
        raise TypeError(f"Sampler must provide standard_normal(size), got {type(source).__name__}")
    return source
