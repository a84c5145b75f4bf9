"""Geometric shapes and per-shape sampling data."""

from dataclasses import dataclass, field

import numpy as np

from lajolla.frame import Frame
from lajolla.table_dist import TableDist1D


@dataclass
class ShadingInfo:
    """Shading quantities at a surface point."""

    uv: np.ndarray
    shading_frame: Frame
    mean_curvature: float
    inv_uv_size: float


@dataclass(kw_only=True)
class ShapeBase:
    """Identifiers shared by all shapes; -1 means none."""

    material_id: int = -1
    area_light_id: int = -1
    interior_medium_id: int = -1
    exterior_medium_id: int = -1

    def is_light(self):
        """Whether the shape is attached to an area light."""
        return self.area_light_id >= 0


@dataclass
class Sphere(ShapeBase):
    """A sphere given by its center and radius."""

    position: np.ndarray
    radius: float

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)


@dataclass(eq=False)
class TriangleMesh(ShapeBase):
    """A mesh of triangles indexing into shared vertex arrays."""

    positions: list
    indices: list
    normals: list = field(default_factory=list)
    uvs: list = field(default_factory=list)
    total_area: float = 0.0
    triangle_sampler: TableDist1D = None

    def triangle_area(self, index):
        """Area of triangle ``index``."""
        if not 0 <= index < len(self.indices):
            raise IndexError(f"triangle index {index} out of range")
        i0, i1, i2 = self.indices[index]
        p0, p1, p2 = (np.asarray(self.positions[i], dtype=float) for i in (i0, i1, i2))
        return float(np.linalg.norm(np.cross(p1 - p0, p2 - p0)) / 2.0)

    def init_sampling_dist(self):
        """Build the area-weighted triangle sampler and the total area."""
        areas = [self.triangle_area(i) for i in range(len(self.indices))]
        self.triangle_sampler = TableDist1D.from_weights(areas)
        self.total_area = sum(areas)