"""Color and fog calculations for star visualization."""

import string
from typing import Tuple

import numpy as np

from ..config import FOG_DENSITY

_HEX_DIGITS = frozenset(string.hexdigits)

WHITE = (1.0, 1.0, 1.0)


def hex_to_rgb(value) -> Tuple[float, float, float]:
    """
    Parse a hex color string ("#ffcc00" or "ffcc00") into RGB.

    Anything that is not exactly six hex digits after stripping whitespace
    and '#' resolves to white. Never raises.

    Args:
        value: Hex color string

    Returns:
        Tuple of (R, G, B) values in 0-1 range
    """
    if not isinstance(value, str):
        return WHITE

    hex_string = value.strip().replace('#', '')
    if len(hex_string) != 6 or not set(hex_string) <= _HEX_DIGITS:
        return WHITE

    rgb = int(hex_string, 16)
    r = ((rgb >> 16) & 0xFF) / 255.0
    g = ((rgb >> 8) & 0xFF) / 255.0
    b = (rgb & 0xFF) / 255.0

    return (r, g, b)


def hex_to_rgba(value, alpha: float = 1.0) -> Tuple[float, float, float, float]:
    """Parse a hex color string into RGBA with the given alpha."""
    r, g, b = hex_to_rgb(value)
    return (r, g, b, float(alpha))


def fog_factor(distance, density: float = FOG_DENSITY):
    """
    Exponential squared fog visibility.

    Returns 1.0 for no fog and approaches 0.0 as fog swallows the object.
    Works on scalars or arrays.

    Args:
        distance: Distance from the camera
        density: Fog density

    Returns:
        Visibility factor(s) in [0, 1]
    """
    visibility = np.exp(-((density * np.asarray(distance, dtype=np.float64)) ** 2))
    visibility = np.clip(visibility, 0.0, 1.0)
    if visibility.ndim == 0:
        return float(visibility)
    return visibility


def apply_fog(rgba, visibility: float, fog_color=(0.0, 0.0, 0.0)) -> Tuple[float, ...]:
    """Blend an RGBA color toward the fog color, keeping alpha."""
    rgb = np.asarray(rgba[:3], dtype=np.float64)
    fog = np.asarray(fog_color, dtype=np.float64)
    blended = fog + visibility * (rgb - fog)
    return (float(blended[0]), float(blended[1]), float(blended[2]), float(rgba[3]))
