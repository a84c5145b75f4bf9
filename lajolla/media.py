"""Participating media."""

from dataclasses import dataclass

import numpy as np


@dataclass(eq=False)
class HomogeneousMedium:
    """A medium with constant absorption and scattering coefficients."""

    sigma_a: np.ndarray
    sigma_s: np.ndarray

    def __post_init__(self):
        self.sigma_a = np.asarray(self.sigma_a, dtype=float)
        self.sigma_s = np.asarray(self.sigma_s, dtype=float)

    def majorant(self):
        """Upper bound of the extinction coefficient."""
        return self.sigma_a + self.sigma_s

    def get_sigma_s(self):
        """Scattering coefficient."""
        return self.sigma_s.copy()

    def get_sigma_a(self):
        """Absorption coefficient."""
        return self.sigma_a.copy()