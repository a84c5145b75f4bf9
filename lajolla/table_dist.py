"""Tabulated discrete and piecewise-constant distributions for sampling."""

from bisect import bisect_right
from dataclasses import dataclass

import numpy as np


def _clamp(v, lo, hi):
    return max(lo, min(v, hi))


@dataclass(eq=False)
class TableDist1D:
    """A discrete distribution over table entries."""

    pmf: list
    cdf: list

    @classmethod
    def from_weights(cls, f):
        """Build the distribution from positive weights."""
        weights = [float(w) for w in f]
        if any(not w > 0 for w in weights):
            raise ValueError("table weights must be positive")
        cdf = [0.0]
        for w in weights:
            cdf.append(cdf[-1] + w)
        total = cdf[-1]
        if total > 0:
            pmf = [w / total for w in weights]
            cdf = [c / total for c in cdf]
        else:
            count = len(weights)
            pmf = [1.0 / count for _ in weights]
            cdf = [i / count for i in range(count)] + [1.0]
        return cls(pmf, cdf)

    def sample(self, rnd_param):
        """Pick an entry given a uniform number in [0, 1]."""
        size = len(self.pmf)
        if size == 0:
            raise ValueError("cannot sample from an empty table")
        return _clamp(bisect_right(self.cdf, rnd_param, 0, size + 1) - 1, 0, size - 1)

    def probability(self, index):
        """Probability of sampling entry ``index``."""
        if not 0 <= index < len(self.pmf):
            raise IndexError(f"table index {index} out of range")
        return self.pmf[index]


@dataclass(eq=False)
class TableDist2D:
    """A piecewise-constant distribution over the unit square."""

    cdf_rows: np.ndarray
    pdf_rows: np.ndarray
    cdf_marginals: np.ndarray
    pdf_marginals: np.ndarray
    total_values: float
    width: int
    height: int

    @classmethod
    def from_values(cls, f, width, height):
        """Build the distribution from ``width * height`` row-major values."""
        values = np.asarray(f, dtype=float).reshape(height, width)
        cdf_rows = np.zeros((height, width + 1))
        cdf_rows[:, 1:] = np.cumsum(values, axis=1)
        pdf_rows = np.empty((height, width))
        for y, row in enumerate(values):
            integral = cdf_rows[y, width]
            if integral > 0:
                cdf_rows[y, :width] /= integral
                pdf_rows[y] = row / integral
            else:
                pdf_rows[y] = 1.0 / width
                cdf_rows[y, :width] = np.arange(width) / width
                cdf_rows[y, width] = 1.0

        weights = cdf_rows[:, width].copy()
        cdf_marginals = np.zeros(height + 1)
        cdf_marginals[1:] = np.cumsum(weights)
        total_values = float(cdf_marginals[-1])
        if total_values > 0:
            cdf_marginals[:height] /= total_values
            cdf_marginals[height] = 1.0
            pdf_marginals = weights / total_values
        else:
            pdf_marginals = np.full(height, 1.0 / height)
            cdf_marginals[:height] = np.arange(height) / height
            cdf_marginals[height] = 1.0
        cdf_rows[:, width] = 1.0
        return cls(
            cdf_rows, pdf_rows, cdf_marginals, pdf_marginals, total_values, width, height
        )

    def sample(self, rnd_param):
        """Map two uniform numbers to a point in [0, 1]^2 distributed like the table."""
        w, h = self.width, self.height
        u, v = float(rnd_param[0]), float(rnd_param[1])
        y = _clamp(int(np.searchsorted(self.cdf_marginals, v, side="right")) - 1, 0, h - 1)
        dy = v - self.cdf_marginals[y]
        span_y = self.cdf_marginals[y + 1] - self.cdf_marginals[y]
        if span_y > 0:
            dy /= span_y
        cdf = self.cdf_rows[y]
        x = _clamp(int(np.searchsorted(cdf, u, side="right")) - 1, 0, w - 1)
        dx = u - cdf[x]
        span_x = cdf[x + 1] - cdf[x]
        if span_x > 0:
            dx /= span_x
        return np.array([(x + dx) / w, (y + dy) / h])

    def pdf(self, xy):
        """Probability density of sampling the point ``xy``."""
        w, h = self.width, self.height
        x = int(_clamp(xy[0] * w, 0.0, float(w - 1)))
        y = int(_clamp(xy[1] * h, 0.0, float(h - 1)))
        return float(self.pdf_marginals[y] * self.pdf_rows[y, x] * w * h)