"""Microfacet distribution, masking and Fresnel terms."""

import math

import numpy as np

from lajolla.frame import Frame, to_world
from lajolla.mathutil import PI


def _normalize(v):
    v = np.asarray(v, dtype=float)
    return v / np.linalg.norm(v)


def schlick_fresnel(f0, cos_theta):
    """Schlick's approximation of the Fresnel reflectance."""
    if not isinstance(f0, (int, float)):
        f0 = np.asarray(f0, dtype=float)
    return f0 + (1.0 - f0) * max(1.0 - cos_theta, 0.0) ** 5


def fresnel_dielectric_full(n_dot_i, n_dot_t, eta):
    """Fresnel reflectance of a dielectric interface.

    ``n_dot_i`` and ``n_dot_t`` are the absolute cosines of the incident and
    transmitted angles; ``eta`` is eta_transmission / eta_incident.
    """
    if n_dot_i < 0 or n_dot_t < 0 or not eta > 0:
        raise ValueError("cosines must be non-negative and eta positive")
    rs = (n_dot_i - eta * n_dot_t) / (n_dot_i + eta * n_dot_t)
    rp = (eta * n_dot_i - n_dot_t) / (eta * n_dot_i + n_dot_t)
    return (rs * rs + rp * rp) / 2.0


def fresnel_dielectric(n_dot_i, eta):
    """Fresnel reflectance from the (possibly negative) incident cosine alone."""
    if not eta > 0:
        raise ValueError("eta must be positive")
    n_dot_t_sq = 1.0 - (1.0 - n_dot_i * n_dot_i) / (eta * eta)
    if n_dot_t_sq < 0:
        # total internal reflection
        return 1.0
    return fresnel_dielectric_full(abs(n_dot_i), math.sqrt(n_dot_t_sq), eta)


def gtr2(n_dot_h, roughness):
    """Generalized Trowbridge-Reitz normal distribution with exponent 2."""
    alpha = roughness * roughness
    a2 = alpha * alpha
    t = 1.0 + (a2 - 1.0) * n_dot_h * n_dot_h
    return a2 / (PI * t * t)


def ggx(n_dot_h, roughness):
    """The GGX distribution, identical to GTR2."""
    return gtr2(n_dot_h, roughness)


def smith_masking_gtr2(v_local, roughness):
    """Smith masking term of the GTR2 distribution for a local direction."""
    alpha = roughness * roughness
    a2 = alpha * alpha
    v2 = np.asarray(v_local, dtype=float) ** 2
    with np.errstate(divide="ignore"):
        lam = (-1.0 + np.sqrt(1.0 + (v2[0] * a2 + v2[1] * a2) / v2[2])) / 2.0
    return float(1.0 / (1.0 + lam))


def sample_visible_normals(local_dir_in, alpha, rnd_param):
    """Sample a micro normal from the distribution of normals visible from ``local_dir_in``."""
    local_dir_in = np.asarray(local_dir_in, dtype=float)
    if local_dir_in[2] < 0:
        return -sample_visible_normals(-local_dir_in, alpha, rnd_param)

    hemi_dir_in = _normalize(
        [alpha * local_dir_in[0], alpha * local_dir_in[1], local_dir_in[2]]
    )

    r = math.sqrt(rnd_param[0])
    phi = 2.0 * PI * rnd_param[1]
    t1 = r * math.cos(phi)
    t2 = r * math.sin(phi)
    s = (1.0 + hemi_dir_in[2]) / 2.0
    t2 = (1.0 - s) * math.sqrt(1.0 - t1 * t1) + s * t2
    disk_n = np.array([t1, t2, math.sqrt(max(0.0, 1.0 - t1 * t1 - t2 * t2))])

    hemi_n = to_world(Frame.from_normal(hemi_dir_in), disk_n)
    return _normalize([alpha * hemi_n[0], alpha * hemi_n[1], max(0.0, hemi_n[2])])