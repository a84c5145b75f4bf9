import math

import numpy as np
import pytest

from lajolla.lights import (
    DiffuseAreaLight,
    Envmap,
    PointAndNormal,
    direction_to_uv,
)
from lajolla.scene import Scene
from lajolla.shape import Sphere
from lajolla.transform import rotate, xform_vector


def _image_envmap(to_world=None, values=None):
    lum = [0.5, 1.0, 2.0, 0.25, 3.0, 1.5, 0.75, 1.25]
    return Envmap.from_image(lum, 4, 2, to_world=to_world, values=values)


def test_area_light_power_scales_with_area():
    light = DiffuseAreaLight(0, [2.0, 2.0, 2.0])
    assert light.power(3.0) == pytest.approx(3.0 * light.power(1.0))
    assert light.power(0.0) == 0.0


def test_area_light_power_of_white_unit_area():
    light = DiffuseAreaLight(0, [1.0, 1.0, 1.0])
    assert light.power(1.0) == pytest.approx(math.pi)


def test_area_light_emission_front_side():
    light = DiffuseAreaLight(0, [0.3, 0.6, 0.9])
    pn = PointAndNormal([0, 0, 0], [0, 0, 1])
    np.testing.assert_allclose(light.emission([0, 0.2, 1.0], pn), [0.3, 0.6, 0.9])


def test_area_light_emission_back_side_is_zero():
    light = DiffuseAreaLight(0, [0.3, 0.6, 0.9])
    pn = PointAndNormal([0, 0, 0], [0, 0, 1])
    np.testing.assert_allclose(light.emission([0, 0, -1.0], pn), [0, 0, 0])
    np.testing.assert_allclose(light.emission([1.0, 0, 0], pn), [0, 0, 0])


def test_scene_light_pmf_follows_area():
    shapes = [
        Sphere(position=[0, 0, 0], radius=1.0, area_light_id=0),
        Sphere(position=[5, 0, 0], radius=2.0, area_light_id=1),
    ]
    lights = [DiffuseAreaLight(0, [1, 1, 1]), DiffuseAreaLight(1, [1, 1, 1])]
    scene = Scene(shapes=shapes, lights=lights)
    assert scene.light_pmf(1) == pytest.approx(4.0 * scene.light_pmf(0))
    assert scene.light_pmf(0) + scene.light_pmf(1) == pytest.approx(1.0)


def test_direction_to_uv_up_axis():
    uv = direction_to_uv([0.0, 1.0, 0.0])
    assert uv[1] == pytest.approx(0.0)


def test_direction_to_uv_forward():
    uv = direction_to_uv([0.0, 0.0, -1.0])
    assert uv[0] == pytest.approx(0.0)
    assert uv[1] == pytest.approx(0.5)


def test_direction_to_uv_in_unit_square():
    rng = np.random.default_rng(3)
    for _ in range(50):
        d = rng.normal(size=3)
        d /= np.linalg.norm(d)
        u, v = direction_to_uv(d)
        assert 0.0 <= u <= 1.0
        assert 0.0 <= v <= 1.0


def test_sample_point_round_trips_through_uv():
    env = _image_envmap()
    for rnd in ([0.1, 0.2], [0.7, 0.9], [0.45, 0.55]):
        pn = env.sample_point(rnd)
        uv_expected = env.sampling_dist.sample(rnd)
        uv = direction_to_uv(-pn.normal)
        np.testing.assert_allclose(uv, uv_expected, atol=1e-9)
        assert np.linalg.norm(pn.normal) == pytest.approx(1.0)


def test_pdf_integrates_to_one_over_sphere():
    env = _image_envmap()
    n_u, n_v = 64, 64
    total = 0.0
    for i in range(n_u):
        for j in range(n_v):
            u = (i + 0.5) / n_u
            v = (j + 0.5) / n_v
            az, el = 2 * math.pi * u, math.pi * v
            d = np.array(
                [math.sin(az) * math.sin(el), math.cos(el), -math.cos(az) * math.sin(el)]
            )
            pdf = env.pdf_point(PointAndNormal(np.zeros(3), -d))
            total += pdf * math.sin(el) * (2 * math.pi / n_u) * (math.pi / n_v)
    assert total == pytest.approx(1.0, rel=1e-2)


def test_pdf_positive_at_sampled_points():
    env = _image_envmap()
    for rnd in ([0.2, 0.3], [0.8, 0.6]):
        assert env.pdf_point(env.sample_point(rnd)) > 0


def test_pdf_degenerate_pole_is_zero():
    env = _image_envmap()
    assert env.pdf_point(PointAndNormal(np.zeros(3), [0.0, -1.0, 0.0])) == 0.0


def test_rotated_envmap_pdf_matches_unrotated():
    rot = rotate(90.0, [0, 1, 0])
    env_rot = _image_envmap(to_world=rot)
    env = _image_envmap()
    pn = env_rot.sample_point([0.3, 0.4])
    local_normal = xform_vector(np.linalg.inv(rot), pn.normal)
    assert env_rot.pdf_point(pn) == pytest.approx(
        env.pdf_point(PointAndNormal(np.zeros(3), local_normal))
    )


def test_power_scales_with_radius_squared():
    env = _image_envmap()
    assert env.power(2.0) == pytest.approx(4.0 * env.power(1.0))


def test_emission_constant_values_scaled():
    env = Envmap(values=[0.2, 0.4, 0.6], scale=2.0)
    np.testing.assert_allclose(env.emission([0.3, 0.5, -0.8]), [0.4, 0.8, 1.2])


def test_emission_looks_up_opposite_direction():
    seen = []

    def texture(uv, footprint):
        seen.append(np.array(uv))
        return np.array([uv[0], uv[1], 0.0])

    env = Envmap(values=texture)
    view_dir = np.array([0.3, -0.4, 0.5])
    view_dir /= np.linalg.norm(view_dir)
    out = env.emission(view_dir)
    expected_uv = direction_to_uv(-view_dir)
    np.testing.assert_allclose(out[:2], expected_uv)
    np.testing.assert_allclose(seen[0], expected_uv)


def test_envmap_without_distribution_raises():
    env = Envmap(values=[1.0, 1.0, 1.0])
    with pytest.raises(LookupError):
        env.power(1.0)
    with pytest.raises(LookupError):
        env.sample_point([0.5, 0.5])


def test_from_image_rejects_wrong_size():
    with pytest.raises(ValueError):
        Envmap.from_image([1.0, 2.0, 3.0], 2, 2)