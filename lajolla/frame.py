"""Orthonormal coordinate frames."""

from dataclasses import dataclass

import numpy as np


def coordinate_system(n):
    """Return two vectors that together with unit vector ``n`` are mutually orthogonal."""
    n = np.asarray(n, dtype=float)
    if n[2] < -1 + 1e-6:
        return np.array([0.0, -1.0, 0.0]), np.array([-1.0, 0.0, 0.0])
    a = 1.0 / (1.0 + n[2])
    b = -n[0] * n[1] * a
    return (
        np.array([1.0 - n[0] * n[0] * a, b, -n[0]]),
        np.array([b, 1.0 - n[1] * n[1] * a, -n[1]]),
    )


@dataclass(eq=False)
class Frame:
    """Coordinate basis made of three orthogonal unit vectors."""

    x: np.ndarray
    y: np.ndarray
    n: np.ndarray

    def __post_init__(self):
        self.x = np.asarray(self.x, dtype=float)
        self.y = np.asarray(self.y, dtype=float)
        self.n = np.asarray(self.n, dtype=float)

    @classmethod
    def from_normal(cls, n):
        """Build a frame whose third axis is ``n``."""
        n = np.asarray(n, dtype=float)
        x, y = coordinate_system(n)
        return cls(x, y, n)

    def __getitem__(self, i):
        return (self.x, self.y, self.n)[i]

    def __iter__(self):
        return iter((self.x, self.y, self.n))

    def __neg__(self):
        return Frame(-self.x, -self.y, -self.n)

    def __repr__(self):
        return f"Frame({self.x}, {self.y}, {self.n})"


def to_local(frame, v):
    """Project ``v`` onto the frame's axes."""
    v = np.asarray(v, dtype=float)
    return np.array([np.dot(v, axis) for axis in frame])


def to_world(frame, v):
    """Map local coordinates ``v`` back to the frame's reference space."""
    v = np.asarray(v, dtype=float)
    return frame.x * v[0] + frame.y * v[1] + frame.n * v[2]