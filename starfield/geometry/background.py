"""Decorative background star field."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import (
    BACKGROUND_ALPHA,
    BACKGROUND_COLOR_VARIATION,
    BACKGROUND_JITTER,
    BACKGROUND_POINT_SIZE,
    BACKGROUND_RADIUS,
    BACKGROUND_STAR_COUNT,
)


@dataclass
class BackgroundField:
    """A one-shot burst of static points on a hollow sphere."""

    positions: np.ndarray  # (N, 3)
    colors: np.ndarray  # (N, 4)
    size: float
    radius: float

    @property
    def count(self) -> int:
        return len(self.positions)

    def create_node(self, parent=None):
        """Wrap the field in a non-interactive Markers visual."""
        from vispy.scene import visuals

        node = visuals.Markers(parent=parent)
        node.set_data(
            self.positions,
            edge_width=0,
            face_color=self.colors,
            size=self.size,
        )
        node.interactive = False
        node.name = 'background_field'
        return node


def generate_background_field(
    count: int = BACKGROUND_STAR_COUNT,
    radius: float = BACKGROUND_RADIUS,
    jitter: float = BACKGROUND_JITTER,
    size: float = BACKGROUND_POINT_SIZE,
    rng: Optional[np.random.Generator] = None,
) -> BackgroundField:
    """
    Emit the whole background field at once.

    Points are born on the surface of a sphere of the given radius and each
    is pushed a small random distance along a random direction, so the shell
    looks slightly fuzzy instead of perfectly thin. Colors start white;
    red and green are pulled down together by up to the configured
    variation while blue barely moves, which tints points toward pale blue.

    Args:
        count: Number of points
        radius: Radius of the emitting sphere
        jitter: Maximum offset away from the sphere surface
        size: Point size in pixels (uniform)
        rng: Random number generator (created if None)

    Returns:
        BackgroundField with positions (count, 3) and RGBA colors (count, 4)
    """
    if rng is None:
        rng = np.random.default_rng()

    # Uniform directions on the sphere surface
    cos_theta = rng.uniform(-1.0, 1.0, count)
    sin_theta = np.sqrt(1.0 - cos_theta**2)
    phi = rng.uniform(0.0, 2.0 * np.pi, count)

    positions = np.zeros((count, 3), dtype=np.float32)
    positions[:, 0] = radius * sin_theta * np.cos(phi)
    positions[:, 1] = radius * sin_theta * np.sin(phi)
    positions[:, 2] = radius * cos_theta

    # Small random ambient direction per point
    directions = rng.normal(size=(count, 3))
    norms = np.linalg.norm(directions, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    directions /= norms
    positions += directions * rng.uniform(0.0, jitter, (count, 1))

    # Near-white with a red/green pull-down, leaving blue dominant
    variation = np.asarray(BACKGROUND_COLOR_VARIATION, dtype=np.float32)
    colors = np.ones((count, 4), dtype=np.float32)
    rg_drop = rng.uniform(0.0, 1.0, (count, 1)) * variation[:2]
    colors[:, :2] -= rg_drop
    colors[:, 2] -= rng.uniform(0.0, variation[2], count) * 0.25
    colors[:, 3] = BACKGROUND_ALPHA

    return BackgroundField(
        positions=positions, colors=colors, size=float(size), radius=float(radius)
    )
