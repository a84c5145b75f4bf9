"""Surface scattering models: Lambertian, rough plastic and rough dielectric."""

import enum
import math
from dataclasses import dataclass, field

import numpy as np

from lajolla.frame import Frame, to_local, to_world
from lajolla.mathutil import PI
from lajolla.microfacet import (
    fresnel_dielectric,
    gtr2,
    sample_visible_normals,
    smith_masking_gtr2,
)
from lajolla.spectrum import luminance, make_zero_spectrum


class TransportDirection(enum.Enum):
    """Whether the path being built carries importance toward lights or radiance toward the view."""

    TO_LIGHT = enum.auto()
    TO_VIEW = enum.auto()


@dataclass(eq=False)
class SurfacePoint:
    """The local surface quantities a material needs to scatter light."""

    geometry_normal: np.ndarray
    shading_frame: Frame = None
    uv: np.ndarray = field(default_factory=lambda: np.zeros(2))
    uv_screen_size: float = 0.0

    def __post_init__(self):
        self.geometry_normal = np.asarray(self.geometry_normal, dtype=float)
        self.uv = np.asarray(self.uv, dtype=float)
        if self.shading_frame is None:
            self.shading_frame = Frame.from_normal(self.geometry_normal)


@dataclass(eq=False)
class BSDFSample:
    """A sampled outgoing direction; ``eta`` is 0 for reflection."""

    dir_out: np.ndarray
    eta: float
    roughness: float


def sample_cos_hemisphere(rnd_param):
    """Map [0, 1]^2 to a cosine-distributed direction on the +z hemisphere."""
    u, v = float(rnd_param[0]), float(rnd_param[1])
    phi = 2.0 * PI * v
    tmp = math.sqrt(min(max(1.0 - u, 0.0), 1.0))
    return np.array(
        [math.cos(phi) * tmp, math.sin(phi) * tmp, math.sqrt(min(max(u, 0.0), 1.0))]
    )


def _texture(value, vertex):
    """Evaluate a texture parameter: a callable of (uv, footprint) or a constant."""
    if callable(value):
        return value(vertex.uv, vertex.uv_screen_size)
    return value


def _as_param(value):
    if callable(value) or isinstance(value, (int, float)):
        return value
    return np.asarray(value, dtype=float)


def _normalize(v):
    v = np.asarray(v, dtype=float)
    return v / np.linalg.norm(v)


def _dot(a, b):
    return float(np.dot(a, b))


def _clamp_roughness(roughness):
    return min(max(float(roughness), 0.01), 1.0)


def _one_sided_frame(vertex, dir_in):
    frame = vertex.shading_frame
    if _dot(frame.n, dir_in) < 0:
        frame = -frame
    return frame


def _two_sided_frame(vertex, dir_in):
    frame = vertex.shading_frame
    if _dot(frame.n, dir_in) * _dot(vertex.geometry_normal, dir_in) < 0:
        frame = -frame
    return frame


def _below_surface(vertex, dir_in, dir_out):
    return (
        _dot(vertex.geometry_normal, dir_in) < 0
        or _dot(vertex.geometry_normal, dir_out) < 0
    )


def _reflect(dir_in, half_vector):
    return _normalize(-dir_in + 2.0 * _dot(dir_in, half_vector) * half_vector)


@dataclass(eq=False)
class Lambertian:
    """Ideal diffuse reflector."""

    reflectance: object

    def __post_init__(self):
        self.reflectance = _as_param(self.reflectance)

    def eval(self, dir_in, dir_out, vertex, direction=TransportDirection.TO_LIGHT):
        """BSDF value times the outgoing cosine."""
        dir_in = np.asarray(dir_in, dtype=float)
        dir_out = np.asarray(dir_out, dtype=float)
        if _below_surface(vertex, dir_in, dir_out):
            return make_zero_spectrum()
        frame = _one_sided_frame(vertex, dir_in)
        kd = np.asarray(_texture(self.reflectance, vertex), dtype=float)
        return max(_dot(frame.n, dir_out), 0.0) * kd / PI

    def pdf(self, dir_in, dir_out, vertex):
        """Solid-angle density of :meth:`sample` producing ``dir_out``."""
        dir_in = np.asarray(dir_in, dtype=float)
        dir_out = np.asarray(dir_out, dtype=float)
        if _below_surface(vertex, dir_in, dir_out):
            return 0.0
        frame = _one_sided_frame(vertex, dir_in)
        return max(_dot(frame.n, dir_out), 0.0) / PI

    def sample(self, dir_in, vertex, rnd_param_uv, rnd_param_w=0.0):
        """Cosine-weighted hemisphere sample, or None below the surface."""
        dir_in = np.asarray(dir_in, dtype=float)
        if _dot(vertex.geometry_normal, dir_in) < 0:
            return None
        frame = _one_sided_frame(vertex, dir_in)
        return BSDFSample(to_world(frame, sample_cos_hemisphere(rnd_param_uv)), 0.0, 1.0)


@dataclass(eq=False)
class RoughPlastic:
    """Diffuse base under a rough dielectric coating."""

    diffuse_reflectance: object
    specular_reflectance: object
    roughness: object
    eta: float = 1.5

    def __post_init__(self):
        self.diffuse_reflectance = _as_param(self.diffuse_reflectance)
        self.specular_reflectance = _as_param(self.specular_reflectance)
        self.roughness = _as_param(self.roughness)

    def eval(self, dir_in, dir_out, vertex, direction=TransportDirection.TO_LIGHT):
        """BSDF value times the outgoing cosine."""
        dir_in = np.asarray(dir_in, dtype=float)
        dir_out = np.asarray(dir_out, dtype=float)
        if _below_surface(vertex, dir_in, dir_out):
            return make_zero_spectrum()
        frame = _one_sided_frame(vertex, dir_in)

        half_vector = _normalize(dir_in + dir_out)
        n_dot_h = _dot(frame.n, half_vector)
        n_dot_in = _dot(frame.n, dir_in)
        n_dot_out = _dot(frame.n, dir_out)
        if n_dot_out <= 0 or n_dot_h <= 0:
            return make_zero_spectrum()

        kd = np.asarray(_texture(self.diffuse_reflectance, vertex), dtype=float)
        ks = np.asarray(_texture(self.specular_reflectance, vertex), dtype=float)
        roughness = _clamp_roughness(_texture(self.roughness, vertex))

        f_o = fresnel_dielectric(_dot(half_vector, dir_out), self.eta)
        d = gtr2(n_dot_h, roughness)
        g = smith_masking_gtr2(to_local(frame, dir_in), roughness) * smith_masking_gtr2(
            to_local(frame, dir_out), roughness
        )
        spec_contrib = ks * (g * f_o * d) / (4.0 * n_dot_in * n_dot_out)

        f_i = fresnel_dielectric(_dot(half_vector, dir_in), self.eta)
        diffuse_contrib = kd * (1.0 - f_o) * (1.0 - f_i) / PI

        return (spec_contrib + diffuse_contrib) * n_dot_out

    def pdf(self, dir_in, dir_out, vertex):
        """Solid-angle density of :meth:`sample` producing ``dir_out``."""
        dir_in = np.asarray(dir_in, dtype=float)
        dir_out = np.asarray(dir_out, dtype=float)
        if _below_surface(vertex, dir_in, dir_out):
            return 0.0
        frame = _one_sided_frame(vertex, dir_in)

        half_vector = _normalize(dir_in + dir_out)
        n_dot_in = _dot(frame.n, dir_in)
        n_dot_out = _dot(frame.n, dir_out)
        n_dot_h = _dot(frame.n, half_vector)
        if n_dot_out <= 0 or n_dot_h <= 0:
            return 0.0

        l_s = luminance(_texture(self.specular_reflectance, vertex))
        l_r = luminance(_texture(self.diffuse_reflectance, vertex))
        if l_s + l_r <= 0:
            return 0.0
        roughness = _clamp_roughness(_texture(self.roughness, vertex))
        spec_prob = l_s / (l_s + l_r)
        diff_prob = 1.0 - spec_prob
        g = smith_masking_gtr2(to_local(frame, dir_in), roughness)
        d = gtr2(n_dot_h, roughness)
        spec_prob *= (g * d) / (4.0 * n_dot_in)
        diff_prob *= n_dot_out / PI
        return spec_prob + diff_prob

    def sample(self, dir_in, vertex, rnd_param_uv, rnd_param_w):
        """Pick the specular or diffuse lobe by reflectance and sample it."""
        dir_in = np.asarray(dir_in, dtype=float)
        if _dot(vertex.geometry_normal, dir_in) < 0:
            return None
        frame = _one_sided_frame(vertex, dir_in)

        l_s = luminance(_texture(self.specular_reflectance, vertex))
        l_r = luminance(_texture(self.diffuse_reflectance, vertex))
        if l_s + l_r <= 0:
            return None
        spec_prob = l_s / (l_s + l_r)
        if rnd_param_w < spec_prob:
            roughness = _clamp_roughness(_texture(self.roughness, vertex))
            alpha = roughness * roughness
            local_micro_normal = sample_visible_normals(
                to_local(frame, dir_in), alpha, rnd_param_uv
            )
            half_vector = to_world(frame, local_micro_normal)
            return BSDFSample(_reflect(dir_in, half_vector), 0.0, roughness)
        return BSDFSample(to_world(frame, sample_cos_hemisphere(rnd_param_uv)), 0.0, 1.0)


@dataclass(eq=False)
class RoughDielectric:
    """Rough glass-like interface that both reflects and refracts."""

    specular_reflectance: object
    specular_transmittance: object
    roughness: object
    eta: float = 1.5

    def __post_init__(self):
        self.specular_reflectance = _as_param(self.specular_reflectance)
        self.specular_transmittance = _as_param(self.specular_transmittance)
        self.roughness = _as_param(self.roughness)

    def _relative_eta(self, vertex, dir_in):
        return self.eta if _dot(vertex.geometry_normal, dir_in) > 0 else 1.0 / self.eta

    @staticmethod
    def _half_vector(dir_in, dir_out, eta, reflect, frame):
        if reflect:
            half_vector = _normalize(dir_in + dir_out)
        else:
            half_vector = _normalize(dir_in + dir_out * eta)
        if _dot(half_vector, frame.n) < 0:
            half_vector = -half_vector
        return half_vector

    def eval(self, dir_in, dir_out, vertex, direction=TransportDirection.TO_LIGHT):
        """BSDF value times the outgoing cosine, for reflection or refraction."""
        dir_in = np.asarray(dir_in, dtype=float)
        dir_out = np.asarray(dir_out, dtype=float)
        reflect = (
            _dot(vertex.geometry_normal, dir_in) * _dot(vertex.geometry_normal, dir_out)
            > 0
        )
        frame = _two_sided_frame(vertex, dir_in)
        eta = self._relative_eta(vertex, dir_in)

        ks = np.asarray(_texture(self.specular_reflectance, vertex), dtype=float)
        kt = np.asarray(_texture(self.specular_transmittance, vertex), dtype=float)
        roughness = _texture(self.roughness, vertex)

        half_vector = self._half_vector(dir_in, dir_out, eta, reflect, frame)
        roughness = _clamp_roughness(roughness)

        h_dot_in = _dot(half_vector, dir_in)
        f = fresnel_dielectric(h_dot_in, eta)
        d = gtr2(_dot(frame.n, half_vector), roughness)
        g = smith_masking_gtr2(to_local(frame, dir_in), roughness) * smith_masking_gtr2(
            to_local(frame, dir_out), roughness
        )
        if reflect:
            return ks * (f * d * g) / (4.0 * abs(_dot(frame.n, dir_in)))

        # The adjoint BSDF drops the 1/eta^2 radiance compression.
        eta_factor = 1.0 / (eta * eta) if direction is TransportDirection.TO_LIGHT else 1.0
        h_dot_out = _dot(half_vector, dir_out)
        sqrt_denom = h_dot_in + eta * h_dot_out
        return kt * (
            eta_factor * (1.0 - f) * d * g * eta * eta * abs(h_dot_out * h_dot_in)
        ) / (abs(_dot(frame.n, dir_in)) * sqrt_denom * sqrt_denom)

    def pdf(self, dir_in, dir_out, vertex):
        """Solid-angle density of :meth:`sample` producing ``dir_out``."""
        dir_in = np.asarray(dir_in, dtype=float)
        dir_out = np.asarray(dir_out, dtype=float)
        reflect = (
            _dot(vertex.geometry_normal, dir_in) * _dot(vertex.geometry_normal, dir_out)
            > 0
        )
        frame = _two_sided_frame(vertex, dir_in)
        eta = self._relative_eta(vertex, dir_in)
        if not eta > 0:
            raise ValueError("eta must be positive")

        half_vector = self._half_vector(dir_in, dir_out, eta, reflect, frame)
        roughness = _clamp_roughness(_texture(self.roughness, vertex))

        h_dot_in = _dot(half_vector, dir_in)
        f = fresnel_dielectric(h_dot_in, eta)
        d = gtr2(_dot(half_vector, frame.n), roughness)
        g_in = smith_masking_gtr2(to_local(frame, dir_in), roughness)
        if reflect:
            return (f * d * g_in) / (4.0 * abs(_dot(frame.n, dir_in)))
        h_dot_out = _dot(half_vector, dir_out)
        sqrt_denom = h_dot_in + eta * h_dot_out
        dh_dout = eta * eta * h_dot_out / (sqrt_denom * sqrt_denom)
        return (1.0 - f) * d * g_in * abs(dh_dout * h_dot_in / _dot(frame.n, dir_in))

    def sample(self, dir_in, vertex, rnd_param_uv, rnd_param_w):
        """Sample a visible micro normal, then reflect or refract by Fresnel."""
        dir_in = np.asarray(dir_in, dtype=float)
        eta = self._relative_eta(vertex, dir_in)
        frame = _two_sided_frame(vertex, dir_in)
        roughness = _clamp_roughness(_texture(self.roughness, vertex))
        alpha = roughness * roughness
        local_micro_normal = sample_visible_normals(
            to_local(frame, dir_in), alpha, rnd_param_uv
        )
        half_vector = to_world(frame, local_micro_normal)
        if _dot(half_vector, frame.n) < 0:
            half_vector = -half_vector

        h_dot_in = _dot(half_vector, dir_in)
        f = fresnel_dielectric(h_dot_in, eta)
        if rnd_param_w <= f:
            return BSDFSample(_reflect(dir_in, half_vector), 0.0, roughness)

        h_dot_out_sq = 1.0 - (1.0 - h_dot_in * h_dot_in) / (eta * eta)
        if h_dot_out_sq <= 0:
            return None
        if h_dot_in < 0:
            half_vector = -half_vector
        h_dot_out = math.sqrt(h_dot_out_sq)
        refracted = -dir_in / eta + (abs(h_dot_in) / eta - h_dot_out) * half_vector
        return BSDFSample(refracted, eta, roughness)