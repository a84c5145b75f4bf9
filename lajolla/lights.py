"""Light sources: diffuse area lights and environment maps."""

import math
from dataclasses import dataclass, field

import numpy as np

from lajolla.mathutil import INV_PI, INV_TWO_PI, PI
from lajolla.spectrum import luminance, make_zero_spectrum
from lajolla.table_dist import TableDist2D
from lajolla.transform import xform_vector


@dataclass(eq=False)
class PointAndNormal:
    """A point on a light and the normal there.

    For environment maps the position is unused and the normal holds the
    direction pointing outwards from the light.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)
        self.normal = np.asarray(self.normal, dtype=float)


def _evaluate(values, uv, footprint):
    """Evaluate a texture: a callable of (uv, footprint) or a constant."""
    if callable(values):
        return np.asarray(values(uv, footprint), dtype=float)
    return np.asarray(values, dtype=float)


@dataclass(eq=False)
class DiffuseAreaLight:
    """A shape that emits constant radiance from its front side."""

    shape_id: int
    intensity: np.ndarray

    def __post_init__(self):
        self.intensity = np.asarray(self.intensity, dtype=float)

    def power(self, surface_area):
        """Total emitted power given the area of the attached shape."""
        return luminance(self.intensity) * surface_area * PI

    def emission(self, view_dir, point_on_light):
        """Radiance leaving ``point_on_light`` towards ``view_dir``."""
        if float(np.dot(point_on_light.normal, np.asarray(view_dir, dtype=float))) <= 0:
            return make_zero_spectrum()
        return self.intensity.copy()


def direction_to_uv(local_dir):
    """Spherical texture coordinates of a local direction, with y as the up axis."""
    x, y, z = (float(c) for c in local_dir)
    u = math.atan2(x, -z) * INV_TWO_PI
    v = math.acos(min(max(y, -1.0), 1.0)) * INV_PI
    if u < 0:
        u += 1.0
    return np.array([u, v])


@dataclass(eq=False)
class Envmap:
    """An infinitely distant light described by a spherical texture."""

    values: object = None
    to_world: np.ndarray = None
    scale: float = 1.0
    sampling_dist: TableDist2D = None
    to_local: np.ndarray = field(init=False)

    def __post_init__(self):
        if self.values is None:
            self.values = np.ones(3)
        elif not callable(self.values):
            self.values = np.asarray(self.values, dtype=float)
        self.to_world = (
            np.eye(4) if self.to_world is None else np.asarray(self.to_world, dtype=float)
        )
        self.to_local = np.linalg.inv(self.to_world)

    @classmethod
    def from_image(cls, luminances, width, height, to_world=None, scale=1.0, values=None):
        """Build an envmap whose sampling follows per-pixel ``luminances``.

        ``luminances`` holds ``width * height`` row-major values taken at the
        pixel centers; each row is weighted by the sine of its elevation.
        """
        lum = np.asarray(luminances, dtype=float).ravel()
        if width <= 0 or height <= 0 or lum.size != width * height:
            raise ValueError("luminances must hold width * height values")
        rows = lum.reshape(height, width)
        v = (np.arange(height) + 0.5) / height
        weighted = rows * np.sin(PI * v)[:, None]
        dist = TableDist2D.from_values(weighted.ravel(), width, height)
        return cls(values=values, to_world=to_world, scale=scale, sampling_dist=dist)

    def _dist(self):
        if self.sampling_dist is None:
            raise LookupError("environment map has no sampling distribution")
        return self.sampling_dist

    def power(self, bounds_radius):
        """Approximate emitted power for a scene of the given bounding radius."""
        dist = self._dist()
        return (
            PI * bounds_radius * bounds_radius * dist.total_values / (dist.width * dist.height)
        )

    def sample_point(self, rnd_param_uv):
        """Sample a direction; the returned normal points outwards from the light."""
        uv = self._dist().sample(rnd_param_uv)
        azimuth = uv[0] * (2.0 * PI)
        elevation = uv[1] * PI
        local_dir = np.array(
            [
                math.sin(azimuth) * math.sin(elevation),
                math.cos(elevation),
                -math.cos(azimuth) * math.sin(elevation),
            ]
        )
        world_dir = xform_vector(self.to_world, local_dir)
        return PointAndNormal(np.zeros(3), -world_dir)

    def pdf_point(self, point_on_light):
        """Solid-angle density of :meth:`sample_point` producing ``point_on_light``."""
        dist = self._dist()
        world_dir = -np.asarray(point_on_light.normal, dtype=float)
        local_dir = xform_vector(self.to_local, world_dir)
        uv = direction_to_uv(local_dir)
        cos_elevation = float(local_dir[1])
        sin_elevation = math.sqrt(min(max(1.0 - cos_elevation * cos_elevation, 0.0), 1.0))
        if sin_elevation <= 0:
            return 0.0
        return dist.pdf(uv) / (2.0 * PI * PI * sin_elevation)

    def emission(self, view_dir):
        """Radiance arriving from the direction opposite to ``view_dir``."""
        local_dir = xform_vector(self.to_local, -np.asarray(view_dir, dtype=float))
        uv = direction_to_uv(local_dir)

        wx, wy, wz = (float(c) for c in local_dir)
        denom = wx * wx + wz * wz
        if denom > 0:
            dudwx = -wz / denom
            dudwz = wx / denom
            du_len = math.sqrt(dudwx * dudwx + dudwz * dudwz)
        else:
            du_len = math.inf
        sin_sq = max(1.0 - wy * wy, 0.0)
        dvdwy = -1.0 / math.sqrt(sin_sq) if sin_sq > 0 else -math.inf
        footprint = min(du_len, dvdwy)

        return _evaluate(self.values, uv, footprint) * self.scale