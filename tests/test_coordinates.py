import math

import numpy as np
import pytest

from starfield.config import DISTANCE_SCALE, MIN_STAR_RADIUS
from starfield.geometry.coordinates import magnitude_to_radius, ra_dec_to_cartesian


@pytest.mark.parametrize("ra", [0.0, 45.0, 137.5, 270.0, 359.9])
@pytest.mark.parametrize("dec", [-90.0, -33.3, 0.0, 61.0, 90.0])
def test_length_is_scaled_distance(ra, dec):
    position = ra_dec_to_cartesian(ra, dec, 12.5)
    assert np.linalg.norm(position) == pytest.approx(12.5 * DISTANCE_SCALE)


def test_zero_distance_maps_to_origin():
    assert np.allclose(ra_dec_to_cartesian(123.0, -45.0, 0.0), [0.0, 0.0, 0.0])


def test_axis_directions():
    assert np.allclose(ra_dec_to_cartesian(0, 0, 1), [2, 0, 0])
    assert np.allclose(ra_dec_to_cartesian(90, 0, 1), [0, 2, 0])
    assert np.allclose(ra_dec_to_cartesian(0, 90, 1), [0, 0, 2])


def test_array_input():
    positions = ra_dec_to_cartesian(
        np.array([0.0, 90.0, 180.0]), np.zeros(3), np.array([1.0, 2.0, 3.0])
    )
    assert positions.shape == (3, 3)
    assert np.allclose(positions[2], [-6.0, 0.0, 0.0])


def test_custom_scale():
    assert np.allclose(ra_dec_to_cartesian(0, 0, 10, scale=1.0), [10, 0, 0])


def test_radius_formula():
    assert magnitude_to_radius(-1.46) == pytest.approx(6.46)
    assert magnitude_to_radius(0.0) == pytest.approx(5.0)


@pytest.mark.parametrize("magnitude", [4.5, 4.83, 11.13, 1e9, math.inf])
def test_radius_floor(magnitude):
    assert magnitude_to_radius(magnitude) == MIN_STAR_RADIUS


def test_radius_nan_uses_floor():
    assert magnitude_to_radius(float('nan')) == MIN_STAR_RADIUS


def test_radius_strictly_decreasing_above_floor():
    magnitudes = np.linspace(-30.0, 4.4, 50)
    radii = [magnitude_to_radius(m) for m in magnitudes]
    assert all(a > b for a, b in zip(radii, radii[1:]))
    assert min(radii) >= MIN_STAR_RADIUS
