"""Scene description: geometry, lights, options and light selection."""

import enum
import math
from dataclasses import dataclass, field

import numpy as np

from lajolla.table_dist import TableDist1D
from lajolla.shape import Sphere, TriangleMesh


class Integrator(enum.Enum):
    """Rendering algorithm to use."""

    DEPTH = enum.auto()
    SHADING_NORMAL = enum.auto()
    MEAN_CURVATURE = enum.auto()
    RAY_DIFFERENTIAL = enum.auto()
    MIPMAP_LEVEL = enum.auto()
    PATH = enum.auto()
    VOL_PATH = enum.auto()


@dataclass
class RenderOptions:
    """Parameters of the renderer."""

    integrator: Integrator = Integrator.PATH
    samples_per_pixel: int = 4
    max_depth: int = -1
    rr_depth: int = 5
    vol_path_version: int = 0
    max_null_collisions: int = 1000


@dataclass
class BSphere:
    """Bounding sphere."""

    radius: float
    center: np.ndarray

    @classmethod
    def from_bounds(cls, lower, upper):
        """Sphere enclosing the axis-aligned box from ``lower`` to ``upper``."""
        lower = np.asarray(lower, dtype=float)
        upper = np.asarray(upper, dtype=float)
        return cls(float(np.linalg.norm(upper - lower)) / 2.0, (lower + upper) / 2.0)


def _shape_bounds(shape):
    if isinstance(shape, Sphere):
        return shape.position - shape.radius, shape.position + shape.radius
    points = np.asarray(shape.positions, dtype=float).reshape(-1, 3)
    if len(points) == 0:
        return None
    return points.min(axis=0), points.max(axis=0)


def _surface_area(shape):
    if isinstance(shape, Sphere):
        return 4.0 * math.pi * shape.radius * shape.radius
    return sum(shape.triangle_area(i) for i in range(len(shape.indices)))


@dataclass(eq=False)
class Scene:
    """Camera, materials, shapes, lights, media and rendering options.

    Lights attached to a shape expose ``shape_id`` and ``power(surface_area)``;
    other lights expose ``power(bounds_radius)``.
    """

    camera: object = None
    materials: list = field(default_factory=list)
    shapes: list = field(default_factory=list)
    lights: list = field(default_factory=list)
    media: list = field(default_factory=list)
    envmap_light_id: int = -1
    texture_pool: object = None
    options: RenderOptions = field(default_factory=RenderOptions)
    output_filename: str = ""
    bounds: BSphere = field(init=False)
    light_dist: TableDist1D = field(init=False)

    def __post_init__(self):
        self.materials = list(self.materials)
        self.shapes = list(self.shapes)
        self.lights = list(self.lights)
        self.media = list(self.media)

        boxes = [b for b in map(_shape_bounds, self.shapes) if b is not None]
        if boxes:
            lower = np.min([b[0] for b in boxes], axis=0)
            upper = np.max([b[1] for b in boxes], axis=0)
            self.bounds = BSphere.from_bounds(lower, upper)
        else:
            self.bounds = BSphere(0.0, np.zeros(3))

        for shape in self.shapes:
            if isinstance(shape, TriangleMesh):
                shape.init_sampling_dist()

        powers = []
        for light in self.lights:
            shape_id = getattr(light, "shape_id", None)
            if shape_id is not None:
                powers.append(light.power(_surface_area(self.shapes[shape_id])))
            else:
                powers.append(light.power(self.bounds.radius))
        self.light_dist = TableDist1D.from_weights(powers)

    def sample_light(self, u):
        """Pick a light index given a uniform number in [0, 1]."""
        return self.light_dist.sample(u)

    def light_pmf(self, light_id):
        """Probability of :meth:`sample_light` returning ``light_id``."""
        return self.light_dist.probability(light_id)

    def has_envmap(self):
        """Whether the scene has an environment map."""
        return self.envmap_light_id != -1

    def get_envmap(self):
        """The environment map light."""
        if not self.has_envmap():
            raise LookupError("scene has no environment map")
        return self.lights[self.envmap_light_id]

    def shadow_epsilon(self):
        """Offset used to start shadow rays, scaled to the scene size."""
        return min(self.bounds.radius * 1e-5, 0.01)

    def intersection_epsilon(self):
        """Offset used to start continuation rays, scaled to the scene size."""
        return min(self.bounds.radius * 1e-5, 0.01)