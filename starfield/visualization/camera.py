"""Orbit camera model used for projection, picking and zoom policy."""

from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..config import (
    CAMERA_AZIMUTH,
    CAMERA_DISTANCE,
    CAMERA_ELEVATION,
    CAMERA_FAR,
    CAMERA_FOV,
    CAMERA_NEAR,
    ZOOM_FACTOR,
    ZOOM_MAX_DISTANCE,
    ZOOM_MIN_DISTANCE,
)


class OrbitCamera:
    """
    Camera orbiting a center point, described by azimuth/elevation/distance.

    Uses the same angle convention as vispy's TurntableCamera with +z up:
    azimuth 0 / elevation 0 puts the camera on the -y side of the center,
    elevation 90 puts it on the +z axis. Screen coordinates are pixels with
    the origin at the top-left of the viewport.
    """

    def __init__(
        self,
        distance: float = CAMERA_DISTANCE,
        azimuth: float = CAMERA_AZIMUTH,
        elevation: float = CAMERA_ELEVATION,
        fov: float = CAMERA_FOV,
        near: float = CAMERA_NEAR,
        far: float = CAMERA_FAR,
        viewport_size: Tuple[int, int] = (1200, 800),
        center=(0.0, 0.0, 0.0),
    ):
        self.distance = float(distance)
        self.azimuth = float(azimuth)
        self.elevation = float(elevation)
        self.fov = float(fov)
        self.near = float(near)
        self.far = float(far)
        self.viewport_size = tuple(viewport_size)
        self.center = np.asarray(center, dtype=np.float64)

        self._default_state = self.get_state()

    @property
    def orbit_radius(self) -> float:
        """Distance from the orbit center."""
        return self.distance

    def _direction(self) -> np.ndarray:
        """Unit vector from the center toward the camera."""
        az = np.radians(self.azimuth)
        el = np.radians(self.elevation)
        return np.array(
            [np.cos(el) * np.sin(az), -np.cos(el) * np.cos(az), np.sin(el)]
        )

    @property
    def position(self) -> np.ndarray:
        return self.center + self.distance * self._direction()

    def basis(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Camera frame in world space.

        Returns:
            (right, up, forward) unit vectors; forward points at the center
        """
        az = np.radians(self.azimuth)
        el = np.radians(self.elevation)
        forward = -self._direction()
        # Derivative of the direction w.r.t. elevation: defined even at the poles
        up = np.array([-np.sin(el) * np.sin(az), np.sin(el) * np.cos(az), np.cos(el)])
        right = np.cross(forward, up)
        return right, up, forward

    @property
    def aspect(self) -> float:
        width, height = self.viewport_size
        return width / height if height else 1.0

    def half_extents(self) -> Tuple[float, float]:
        """
        Tangents of the horizontal and vertical half-angles of the view.

        The field of view is vertical in every window shape, as in vispy's
        perspective cameras.
        """
        tan_y = float(np.tan(np.radians(self.fov) / 2))
        return tan_y * self.aspect, tan_y

    def render_depth_value(
        self,
        min_distance: float = ZOOM_MIN_DISTANCE,
        max_distance: float = ZOOM_MAX_DISTANCE,
    ) -> float:
        """
        Depth value for a vispy perspective camera drawing this scene.

        Vispy places its clip planes at distance / sqrt(10 * depth_value) and
        distance * sqrt(10 * depth_value). The returned value keeps
        [near, far] inside that range at every zoom distance.
        """
        spread = max(max_distance / self.near, self.far / min_distance)
        return spread**2 / 10.0

    def view_matrix(self) -> np.ndarray:
        """World -> camera space, for row vectors (point @ matrix)."""
        right, up, forward = self.basis()
        eye = self.position
        view = np.eye(4)
        view[:3, 0] = right
        view[:3, 1] = up
        view[:3, 2] = -forward
        view[3, 0] = -right @ eye
        view[3, 1] = -up @ eye
        view[3, 2] = forward @ eye
        return view

    def projection_matrix(self) -> np.ndarray:
        """Camera -> clip space, for row vectors (point @ matrix)."""
        tan_x, tan_y = self.half_extents()
        near, far = self.near, self.far
        return np.array(
            [
                [1.0 / tan_x, 0, 0, 0],
                [0, 1.0 / tan_y, 0, 0],
                [0, 0, (far + near) / (near - far), -1],
                [0, 0, 2 * far * near / (near - far), 0],
            ]
        )

    def project(self, point) -> Optional[Tuple[float, float]]:
        """
        Project a world-space point to screen pixels.

        Returns None if the point is behind the camera.
        """
        pos_4d = np.append(np.asarray(point, dtype=np.float64), 1.0)
        clip = pos_4d @ (self.view_matrix() @ self.projection_matrix())

        w = clip[3]
        if w <= 1e-10:
            return None
        ndc = clip[:3] / w

        width, height = self.viewport_size
        screen_x = (ndc[0] + 1) / 2 * width
        screen_y = (1 - ndc[1]) / 2 * height
        return float(screen_x), float(screen_y)

    def ray(self, screen_point) -> Tuple[np.ndarray, np.ndarray]:
        """
        World-space ray through a screen pixel.

        Returns:
            (origin, unit direction)
        """
        width, height = self.viewport_size
        ndc_x = 2.0 * screen_point[0] / width - 1.0
        ndc_y = 1.0 - 2.0 * screen_point[1] / height

        tan_x, tan_y = self.half_extents()
        right, up, forward = self.basis()
        direction = right * ndc_x * tan_x + up * ndc_y * tan_y + forward
        return self.position, direction / np.linalg.norm(direction)

    def zoom(self, steps: float) -> float:
        """
        Move toward (steps > 0) or away from (steps < 0) the center.

        Only the radial distance changes; it is clamped to the zoom bounds.

        Returns:
            New distance
        """
        distance = self.distance / (ZOOM_FACTOR**steps)
        self.distance = float(np.clip(distance, ZOOM_MIN_DISTANCE, ZOOM_MAX_DISTANCE))
        return self.distance

    def set_orbit(
        self, azimuth: float, elevation: float, distance: float, center=None
    ) -> bool:
        """
        Update the orbit (e.g. from the interactive camera).

        Returns:
            True if anything changed
        """
        new_center = self.center if center is None else np.asarray(center, float)
        changed = (
            azimuth != self.azimuth
            or elevation != self.elevation
            or distance != self.distance
            or not np.array_equal(new_center, self.center)
        )
        if changed:
            self.azimuth = float(azimuth)
            self.elevation = float(elevation)
            self.distance = float(distance)
            self.center = new_center
        return changed

    def get_state(self) -> Dict[str, Any]:
        """Get current camera state as dictionary."""
        return {
            'center': list(self.center),
            'azimuth': self.azimuth,
            'elevation': self.elevation,
            'distance': self.distance,
        }

    def reset(self):
        """Return to the initial orbit."""
        state = self._default_state
        self.set_orbit(
            state['azimuth'], state['elevation'], state['distance'], state['center']
        )
