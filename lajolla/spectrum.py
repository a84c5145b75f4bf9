"""RGB spectra and conversions between color spaces."""

import numpy as np

_LUMINANCE_WEIGHTS = np.array([0.212671, 0.715160, 0.072169])

_XYZ_TO_RGB = np.array(
    [
        [3.240479, -1.537150, -0.498535],
        [-0.969256, 1.875991, 0.041556],
        [0.055648, -0.204043, 1.057311],
    ]
)

CIE_Y_INTEGRAL = 106.856895
WAVELENGTH_BEGIN = 400
WAVELENGTH_END = 700


def make_zero_spectrum():
    """A spectrum with all channels zero."""
    return np.zeros(3)


def make_const_spectrum(v):
    """A spectrum with all channels equal to ``v``."""
    return np.full(3, float(v))


def from_rgb(rgb):
    """Build a spectrum from linear RGB values."""
    return np.array(rgb, dtype=float)


def to_rgb(s):
    """Return the linear RGB values of a spectrum."""
    return np.array(s, dtype=float)


def spectrum_sqrt(s):
    """Channel-wise square root, with negative channels clamped to zero."""
    return np.sqrt(np.maximum(np.asarray(s, dtype=float), 0.0))


def spectrum_exp(s):
    """Channel-wise exponential."""
    return np.exp(np.asarray(s, dtype=float))


def luminance(s):
    """Perceived brightness of a linear RGB spectrum."""
    return float(np.dot(np.asarray(s, dtype=float), _LUMINANCE_WEIGHTS))


def _lobe(wavelength, center, below, above):
    t = (wavelength - center) * (below if wavelength < center else above)
    return np.exp(-0.5 * t * t)


def x_fit_1931(wavelength):
    """Analytic fit of the CIE 1931 x color matching function."""
    return (
        0.362 * _lobe(wavelength, 442.0, 0.0624, 0.0374)
        + 1.056 * _lobe(wavelength, 599.8, 0.0264, 0.0323)
        - 0.065 * _lobe(wavelength, 501.1, 0.0490, 0.0382)
    )


def y_fit_1931(wavelength):
    """Analytic fit of the CIE 1931 y color matching function."""
    return 0.821 * _lobe(wavelength, 568.8, 0.0213, 0.0247) + 0.286 * _lobe(
        wavelength, 530.9, 0.0613, 0.0322
    )


def z_fit_1931(wavelength):
    """Analytic fit of the CIE 1931 z color matching function."""
    return 1.217 * _lobe(wavelength, 437.0, 0.0845, 0.0278) + 0.681 * _lobe(
        wavelength, 459.0, 0.0385, 0.0725
    )


def xyz_integral_coeff(wavelength):
    """The three color matching functions at one wavelength."""
    return np.array(
        [x_fit_1931(wavelength), y_fit_1931(wavelength), z_fit_1931(wavelength)]
    )


def integrate_xyz(data):
    """Integrate sampled spectral data, sorted by wavelength, into CIE XYZ.

    ``data`` holds ``(wavelength, value)`` pairs. The spectrum is linearly
    interpolated from 400 nm to 700 nm in 1 nm steps, holding the end values
    beyond the sampled range.
    """
    pairs = [(float(w), float(v)) for w, v in data]
    if not pairs:
        return np.zeros(3)
    last = len(pairs) - 1
    first_wave = pairs[0][0]
    ret = np.zeros(3)
    pos = 0
    for step in range(WAVELENGTH_BEGIN, WAVELENGTH_END + 1):
        wavelength = float(step)
        while pos < last and not (
            pairs[pos][0] <= wavelength < pairs[pos + 1][0] or first_wave > wavelength
        ):
            pos += 1
        if pos < last and first_wave <= wavelength:
            curr_wave, curr_data = pairs[pos]
            next_wave, next_data = pairs[pos + 1]
            span = next_wave - curr_wave
            measurement = (
                curr_data * (next_wave - wavelength) / span
                + next_data * (wavelength - curr_wave) / span
            )
        else:
            measurement = pairs[pos][1]
        ret += xyz_integral_coeff(wavelength) * measurement
    span = float(WAVELENGTH_END - WAVELENGTH_BEGIN)
    return ret * (span / (CIE_Y_INTEGRAL * span))


def xyz_to_rgb(xyz):
    """Convert CIE XYZ to linear RGB."""
    return _XYZ_TO_RGB @ np.asarray(xyz, dtype=float)


def srgb_to_rgb(srgb):
    """Remove the sRGB transfer curve, giving linear RGB."""
    c = np.asarray(srgb, dtype=float)
    linear_part = c / 12.92
    curved_part = np.power(np.maximum((c + 0.055) / 1.055, 0.0), 2.4)
    return np.where(c <= 0.04045, linear_part, curved_part)