"""Pixel reconstruction filters that can be importance sampled."""

import math
from dataclasses import dataclass

import numpy as np

from lajolla.mathutil import PI


@dataclass(frozen=True)
class Box:
    """Box filter of the given total width."""

    width: float

    def sample(self, rnd_param):
        """Warp [0, 1]^2 to [-width/2, width/2]^2."""
        u = np.asarray(rnd_param, dtype=float)
        return (2.0 * u - 1.0) * (self.width / 2.0)


@dataclass(frozen=True)
class Tent:
    """Separable tent filter of the given total width."""

    width: float

    def sample(self, rnd_param):
        """Warp [0, 1]^2 to a point distributed like the tent kernel."""
        h = self.width / 2.0

        def warp(u):
            if u < 0.5:
                return h * (math.sqrt(2.0 * u) - 1.0)
            return h * (1.0 - math.sqrt(1.0 - 2.0 * (u - 0.5)))

        return np.array([warp(rnd_param[0]), warp(rnd_param[1])])


@dataclass(frozen=True)
class Gaussian:
    """Isotropic Gaussian filter with the given standard deviation."""

    stddev: float

    def sample(self, rnd_param):
        """Box-Muller transform of [0, 1]^2 into a Gaussian sample."""
        r = self.stddev * math.sqrt(-2.0 * math.log(max(rnd_param[0], 1e-8)))
        angle = 2.0 * PI * rnd_param[1]
        return np.array([r * math.cos(angle), r * math.sin(angle)])