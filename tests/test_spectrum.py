import numpy as np
import pytest

from lajolla.spectrum import (
    from_rgb,
    integrate_xyz,
    luminance,
    make_const_spectrum,
    make_zero_spectrum,
    spectrum_exp,
    spectrum_sqrt,
    srgb_to_rgb,
    to_rgb,
    x_fit_1931,
    xyz_integral_coeff,
    xyz_to_rgb,
    y_fit_1931,
    z_fit_1931,
)


def test_zero_and_const():
    np.testing.assert_array_equal(make_zero_spectrum(), [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(make_const_spectrum(2.5), [2.5, 2.5, 2.5])


def test_rgb_round_trip():
    rgb = [0.1, 0.2, 0.3]
    np.testing.assert_array_equal(to_rgb(from_rgb(rgb)), rgb)


def test_sqrt_clamps_negative():
    np.testing.assert_allclose(spectrum_sqrt([4.0, -1.0, 9.0]), [2.0, 0.0, 3.0])


def test_exp_inverse_of_log():
    s = np.array([0.5, 1.0, 3.0])
    np.testing.assert_allclose(spectrum_exp(np.log(s)), s)


def test_luminance_weights_from_source():
    assert luminance([1.0, 0.0, 0.0]) == pytest.approx(0.212671)
    assert luminance([0.0, 1.0, 0.0]) == pytest.approx(0.715160)
    assert luminance([0.0, 0.0, 1.0]) == pytest.approx(0.072169)


def test_luminance_is_linear():
    a = np.array([0.3, 0.6, 0.1])
    b = np.array([1.0, 0.2, 0.7])
    assert luminance(2 * a + b) == pytest.approx(2 * luminance(a) + luminance(b))


def test_color_matching_peaks():
    assert y_fit_1931(568.8) > y_fit_1931(500.0)
    assert y_fit_1931(568.8) > y_fit_1931(650.0)
    assert z_fit_1931(450.0) > z_fit_1931(600.0)
    assert x_fit_1931(600.0) > x_fit_1931(500.0)


def test_integral_coeff_matches_fits():
    w = 520.0
    np.testing.assert_allclose(
        xyz_integral_coeff(w), [x_fit_1931(w), y_fit_1931(w), z_fit_1931(w)]
    )


def test_integrate_empty_is_zero():
    np.testing.assert_array_equal(integrate_xyz([]), [0.0, 0.0, 0.0])


def test_integrate_constant_spectrum_forms_agree():
    single = integrate_xyz([(550.0, 1.0)])
    two_ends = integrate_xyz([(400.0, 1.0), (700.0, 1.0)])
    np.testing.assert_allclose(single, two_ends, rtol=1e-9)
    assert np.all(single > 0)


def test_integrate_is_linear_in_values():
    data = [(380.0, 0.2), (500.0, 0.8), (620.0, 0.4), (720.0, 0.1)]
    scaled = [(w, 3.0 * v) for w, v in data]
    np.testing.assert_allclose(integrate_xyz(scaled), 3.0 * integrate_xyz(data))


def test_xyz_to_rgb_is_linear():
    a = np.array([0.2, 0.4, 0.1])
    b = np.array([0.5, 0.1, 0.9])
    np.testing.assert_allclose(xyz_to_rgb(a + b), xyz_to_rgb(a) + xyz_to_rgb(b))


def test_srgb_endpoints_and_monotonic():
    np.testing.assert_allclose(srgb_to_rgb([0.0, 1.0, 0.5])[:2], [0.0, 1.0])
    values = srgb_to_rgb(np.linspace(0.0, 1.0, 50))
    assert np.all(np.diff(values) > 0)


def test_srgb_linear_segment():
    c = 0.04045
    assert srgb_to_rgb([c, c, c])[0] == pytest.approx(c / 12.92)