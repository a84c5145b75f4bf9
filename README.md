# lajolla

Building blocks of a physically based path tracer, written in plain Python and NumPy.
Vectors are three-component NumPy arrays of doubles. Transforms are 4×4 matrices.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `lajolla.mathutil`: constants such as `PI`, `INV_PI` and `TWO_PI`, plus `modulo`, `radians`, `degrees` and `to_lowercase`.
- `lajolla.frame`: orthonormal bases, through `Frame`, `Frame.from_normal`, `coordinate_system`, `to_local` and `to_world`.
- `lajolla.spectrum`: RGB spectra (`make_zero_spectrum`, `make_const_spectrum`, `luminance`, and others). Also CIE XYZ integration of measured spectra with `integrate_xyz`, plus the `xyz_to_rgb` and `srgb_to_rgb` conversions.
- `lajolla.transform`: `translate`, `scale`, `rotate`, `look_at`, `perspective`, `xform_point`, `xform_vector` and `xform_normal`.
- `lajolla.table_dist`: tabular distributions.
  - `TableDist1D.from_weights` is a discrete distribution with `sample` and `probability`.
  - `TableDist2D.from_values` is piecewise constant over the unit square, with `sample` and `pdf`.
- `lajolla.microfacet`: the Fresnel terms `fresnel_dielectric`, `fresnel_dielectric_full` and `schlick_fresnel`. Also the GTR2/GGX distribution (`gtr2`, `ggx`), Smith masking (`smith_masking_gtr2`) and visible-normal sampling (`sample_visible_normals`).
- `lajolla.filters`: the pixel reconstruction filters `Box`, `Tent` and `Gaussian`. Each has a `sample` method that maps a point of [0, 1]² to an offset on the image plane.
- `lajolla.media`: `HomogeneousMedium` with `majorant`, `get_sigma_s` and `get_sigma_a`.
- `lajolla.shape`: `Sphere` and `TriangleMesh`.
  - `TriangleMesh.triangle_area` gives the area of one triangle.
  - `TriangleMesh.init_sampling_dist` builds an area-weighted triangle sampler.
- `lajolla.scene`: `Integrator`, `RenderOptions`, `BSphere` and `Scene`.
  - A `Scene` computes its bounding sphere from its spheres and meshes.
  - It builds the mesh samplers.
  - It selects lights in proportion to their power, through `sample_light` and `light_pmf`.
  - A light with a `shape_id` is asked for `power(surface_area)`. Any other light is asked for `power(bounds_radius)`.
- `lajolla.materials`: `Lambertian`, `RoughPlastic` and `RoughDielectric`, each with `eval`, `pdf` and `sample`.
  - They take a `SurfacePoint` and return `BSDFSample` records, or `None` when no direction can be sampled.
  - A texture parameter is either a constant or a callable of `(uv, footprint)`.
- `lajolla.lights`: `PointAndNormal`, `DiffuseAreaLight`, `Envmap` and `direction_to_uv`.
  - `Envmap.from_image` builds importance sampling from per-pixel luminances.

## Example

```python
import numpy as np
from lajolla.frame import Frame, to_local, to_world
from lajolla.materials import Lambertian, SurfacePoint

n = np.array([0.0, 0.0, 1.0])
frame = Frame.from_normal(n)
v = np.array([-1.0, -2.0, -3.0])
assert np.allclose(to_world(frame, to_local(frame, v)), v)

vertex = SurfacePoint(geometry_normal=n, shading_frame=frame)
bsdf = Lambertian(reflectance=np.array([0.5, 0.5, 0.5]))
dir_in = np.array([0.3, 0.4, 0.5]) / np.linalg.norm([0.3, 0.4, 0.5])
record = bsdf.sample(dir_in, vertex, np.array([0.3, 0.4]), 0.6)
density = bsdf.pdf(dir_in, record.dir_out, vertex)
```

## Errors

Invalid arguments raise standard Python exceptions:

- `ValueError` for non-positive table weights, a non-positive `eta`, a degenerate `look_at`, or mismatched envmap image sizes.
- `IndexError` for out-of-range table or triangle indices.
- `LookupError` when a scene has no environment map, or an envmap has no sampling distribution.

## What it does not do

The package holds the pieces a renderer is built from. It is not a renderer:

- There is no ray–scene intersection and no occlusion testing.
- There is no camera model and no integrator that produces an image.
- It does not read or write images or textures.
- It does not parse scene files.
- It has no command-line program.