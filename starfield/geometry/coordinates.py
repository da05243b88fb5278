"""Celestial coordinate conversion and magnitude-based sizing."""

import numpy as np

from ..config import DISTANCE_SCALE, MAGNITUDE_BASE, MIN_STAR_RADIUS


def ra_dec_to_cartesian(ra, dec, distance, scale: float = DISTANCE_SCALE) -> np.ndarray:
    """
    Convert right ascension / declination / distance to Cartesian coordinates.

    x = r * cos(dec) * cos(ra)
    y = r * cos(dec) * sin(ra)
    z = r * sin(dec)

    where r = distance * scale. Works on scalars or arrays.

    Args:
        ra: Right ascension in degrees
        dec: Declination in degrees
        distance: Distance in catalog units (0 maps to the origin)
        scale: Scene units per catalog distance unit

    Returns:
        Array of shape (3,) for scalar input, (..., 3) for array input
    """
    ra_rad = np.radians(ra)
    dec_rad = np.radians(dec)
    r = np.asarray(distance, dtype=np.float64) * scale

    x = r * np.cos(dec_rad) * np.cos(ra_rad)
    y = r * np.cos(dec_rad) * np.sin(ra_rad)
    z = r * np.sin(dec_rad)

    return np.stack([x, y, z], axis=-1)


def magnitude_to_radius(magnitude: float) -> float:
    """
    Visual sphere radius for a magnitude (lower magnitude = brighter = larger).

    Clamped below at MIN_STAR_RADIUS; NaN also lands on the floor.
    """
    radius = MAGNITUDE_BASE - magnitude
    if not radius > MIN_STAR_RADIUS:
        return MIN_STAR_RADIUS
    return float(radius)
