"""4x4 homogeneous transformations and their application to vectors."""

import math

import numpy as np

from lajolla.mathutil import radians


def _normalize(v):
    v = np.asarray(v, dtype=float)
    return v / np.linalg.norm(v)


def translate(delta):
    """Translation by ``delta``."""
    m = np.eye(4)
    m[:3, 3] = np.asarray(delta, dtype=float)
    return m


def scale(s):
    """Axis-aligned scaling by ``s``."""
    s = np.asarray(s, dtype=float)
    return np.diag([s[0], s[1], s[2], 1.0])


def rotate(angle, axis):
    """Rotation by ``angle`` degrees around ``axis``."""
    a = _normalize(axis)
    s = math.sin(radians(angle))
    c = math.cos(radians(angle))
    return np.array(
        [
            [
                a[0] * a[0] + (1 - a[0] * a[0]) * c,
                a[0] * a[1] * (1 - c) - a[2] * s,
                a[0] * a[2] * (1 - c) + a[1] * s,
                0.0,
            ],
            [
                a[0] * a[1] * (1 - c) + a[2] * s,
                a[1] * a[1] + (1 - a[1] * a[1]) * c,
                a[1] * a[2] * (1 - c) - a[0] * s,
                0.0,
            ],
            [
                a[0] * a[2] * (1 - c) - a[1] * s,
                a[1] * a[2] * (1 - c) + a[0] * s,
                a[2] * a[2] + (1 - a[2] * a[2]) * c,
                0.0,
            ],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def look_at(pos, look, up):
    """Camera-to-world matrix for a camera at ``pos`` looking at ``look``."""
    pos = np.asarray(pos, dtype=float)
    direction = _normalize(np.asarray(look, dtype=float) - pos)
    side = np.cross(_normalize(up), direction)
    if np.linalg.norm(side) == 0:
        raise ValueError("up vector is parallel to the viewing direction")
    left = _normalize(side)
    new_up = np.cross(direction, left)
    m = np.eye(4)
    m[:3, 0] = left
    m[:3, 1] = new_up
    m[:3, 2] = direction
    m[:3, 3] = pos
    return m


def perspective(fov):
    """Perspective projection with a field of view of ``fov`` degrees."""
    cot = 1.0 / math.tan(radians(fov / 2.0))
    return np.array(
        [
            [cot, 0.0, 0.0, 0.0],
            [0.0, cot, 0.0, 0.0],
            [0.0, 0.0, 1.0, -1.0],
            [0.0, 0.0, 1.0, 0.0],
        ]
    )


def xform_point(xform, pt):
    """Transform a point, including translation and perspective divide."""
    xform = np.asarray(xform, dtype=float)
    tpt = xform @ np.append(np.asarray(pt, dtype=float), 1.0)
    inv_w = 1.0 / tpt[3]
    return tpt[:3] * inv_w


def xform_vector(xform, vec):
    """Transform a direction, ignoring translation."""
    return np.asarray(xform, dtype=float)[:3, :3] @ np.asarray(vec, dtype=float)


def xform_normal(inv_xform, n):
    """Transform a normal given the inverse of the transformation."""
    return np.asarray(inv_xform, dtype=float)[:3, :3].T @ np.asarray(n, dtype=float)