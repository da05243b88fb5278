"""Vispy-based interactive window for the starfield."""

import logging

import numpy as np

# Set Vispy backend
# Use glfw on macOS for better OpenGL compatibility, pyglet elsewhere
import platform
import vispy

if platform.system() == 'Darwin':
    vispy.use('glfw', gl='gl2')
else:
    vispy.use('pyglet')

from vispy import app, scene
from vispy.scene.cameras import TurntableCamera
from typing import Optional

from ..config import (
    FOG_DENSITY_MAX,
    HELP_CONTENT,
    INFO_PANEL_HEIGHT,
    INFO_PANEL_PADDING,
    INFO_PANEL_WIDTH,
    TAP_MOVE_TOLERANCE,
)
from ..state.events import CameraControlUpdate, Selection
from .camera import OrbitCamera
from .controller import StarfieldController
from .overlay import format_star_info, place_info_panel

logger = logging.getLogger(__name__)

# Info panel opacity presets cycled with the O key
_PANEL_OPACITY_STEPS = (0.3, 0.55, 0.85, 1.0)
_STAR_SCALE_STEP = 0.1
_FOG_STEP = FOG_DENSITY_MAX / 8


class ClampedTurntableCamera(TurntableCamera):
    """Turntable camera whose wheel zoom follows the orbit camera's policy."""

    def __init__(self, orbit: OrbitCamera, **kwargs):
        self.orbit = orbit
        super().__init__(**kwargs)

    def viewbox_mouse_event(self, event):
        if event.handled or not self.interactive:
            return
        if event.type == 'mouse_wheel':
            self.distance = self.orbit.zoom(event.delta[1])
            event.handled = True
            return
        super().viewbox_mouse_event(event)


class StarfieldViewer:
    """Window showing the scene owned by a StarfieldController."""

    def __init__(self, controller: StarfieldController):
        """
        Initialize the viewer.

        Args:
            controller: Controller whose scene is displayed; stars may be
                loaded before or after the viewer is created
        """
        self.controller = controller
        self.orbit = controller.scene.camera

        # Determine initial window size (half of primary screen dimensions)
        try:
            screens = app.screens()
            if screens:
                screen = screens[0]
                window_size = (
                    screen['geometry']['width'] // 2,
                    screen['geometry']['height'] // 2,
                )
            else:
                window_size = (1200, 800)
        except Exception:
            window_size = (1200, 800)

        self.canvas = scene.SceneCanvas(
            keys='interactive',
            title='Starfield',
            size=window_size,
            show=True,
            bgcolor='black',
            vsync=True,
        )
        logger.debug(
            "Canvas size %s, pixel scale %s, DPI %s",
            self.canvas.size,
            self.canvas.pixel_scale,
            self.canvas.dpi,
        )

        self.view = self.canvas.central_widget.add_view()
        self.view.camera = ClampedTurntableCamera(
            self.orbit,
            fov=self.orbit.fov,
            distance=self.orbit.distance,
            elevation=self.orbit.elevation,
            azimuth=self.orbit.azimuth,
            center=tuple(self.orbit.center),
        )
        # Keep the drawn frustum around the picking near/far planes
        self.view.camera.depth_value = self.orbit.render_depth_value()
        self.orbit.viewport_size = tuple(self.canvas.size)

        # Scene graph root holds stars and the background field
        controller.scene.root.parent = self.view.scene

        dpi_scale = self.canvas.dpi / 96.0

        # Info panel for the selected star (hidden until something is picked)
        self.info_bg = scene.visuals.Rectangle(
            center=(0, 0),
            width=INFO_PANEL_WIDTH,
            height=INFO_PANEL_HEIGHT,
            color=(0, 0, 0, controller.settings.info_panel_opacity),
            parent=self.canvas.scene,
        )
        self.info_bg.visible = False
        self.info_text = scene.visuals.Text(
            text='',
            color='white',
            anchor_x='left',
            anchor_y='center',
            font_size=12,
            parent=self.canvas.scene,
        )
        self.info_text.visible = False
        self._selection: Optional[Selection] = None

        # Help overlay (centered, initially hidden)
        help_width = int(360 * dpi_scale)
        help_height = int(400 * dpi_scale)
        canvas_center_x = self.canvas.size[0] / 2
        canvas_center_y = self.canvas.size[1] / 2
        self.help_bg = scene.visuals.Rectangle(
            center=(canvas_center_x, canvas_center_y),
            width=help_width,
            height=help_height,
            color=(0, 0, 0, 0.9),
            parent=self.canvas.scene,
        )
        self.help_bg.visible = False
        self.help_text = scene.visuals.Text(
            text=HELP_CONTENT,
            color='white',
            anchor_x='left',
            anchor_y='center',
            font_size=14,
            parent=self.canvas.scene,
        )
        self.help_text.pos = (canvas_center_x - int(130 * dpi_scale), canvas_center_y)
        self._help_visible = False
        self.help_text.visible = False

        self._press_pos = None

        controller.subscribe_settings(self._on_settings)
        controller.subscribe_selection(self._on_selection)
        # Push the current settings through so the camera picks them up
        controller.apply_settings(force=True)

        self.timer = app.Timer(interval=0, connect=self._on_timer, start=True)

        self.canvas.events.key_press.connect(self._on_key_press)
        self.canvas.events.mouse_press.connect(self._on_mouse_press)
        self.canvas.events.mouse_release.connect(self._on_mouse_release)
        self.canvas.events.resize.connect(self._on_resize)

    def _on_settings(self, update: CameraControlUpdate):
        """Render-surface side of the settings broadcast."""
        self.view.camera.interactive = update.camera_allows_control
        self.info_bg.color = (0, 0, 0, self.controller.settings.info_panel_opacity)

    def _on_selection(self, selection: Optional[Selection]):
        self._selection = selection
        if selection is None:
            self.info_bg.visible = False
            self.info_text.visible = False
            return
        self.info_text.text = format_star_info(selection.record)
        self._place_info_panel(selection.anchor)
        self.info_bg.visible = True
        self.info_text.visible = True

    def _place_info_panel(self, anchor):
        center_x, center_y = place_info_panel(anchor, self.canvas.size)
        self.info_bg.center = (center_x, center_y)
        self.info_text.pos = (
            center_x - INFO_PANEL_WIDTH / 2 + INFO_PANEL_PADDING,
            center_y,
        )

    def _sync_orbit(self) -> bool:
        """Copy the interactive camera's orbit into the scene's camera."""
        camera = self.view.camera
        return self.orbit.set_orbit(
            camera.azimuth, camera.elevation, camera.distance, camera.center
        )

    def _on_mouse_press(self, event):
        if event.button == 1 and event.pos is not None:
            self._press_pos = np.array(event.pos[:2], dtype=float)

    def _on_mouse_release(self, event):
        """A left press released close to where it started is a tap."""
        if event.button != 1 or self._press_pos is None or event.pos is None:
            return
        release_pos = np.array(event.pos[:2], dtype=float)
        moved = np.linalg.norm(release_pos - self._press_pos)
        self._press_pos = None
        if moved <= TAP_MOVE_TOLERANCE:
            self._sync_orbit()
            self.controller.picker.handle_tap(release_pos)

    def _on_resize(self, event):
        self.orbit.viewport_size = tuple(self.canvas.size)

    def _on_timer(self, event):
        """Timer callback for updating visualization."""
        if self._sync_orbit():
            self.controller.scene.refresh_fog()
            if self._selection is not None:
                anchor = self.controller.picker.anchor_for(self._selection.record)
                if anchor is not None:
                    self._place_info_panel(anchor)
        self.controller.picker.advance()
        self.canvas.update()

    def _update_settings(self, **changes):
        settings = self.controller.settings.clamped_with(**changes)
        self.controller.update_settings(settings)

    def _on_key_press(self, event):
        """Handle keyboard input."""
        settings = self.controller.settings

        if event.key == 'Q':
            print("Quit requested...")
            self.close()

        elif event.key == 'B':
            self._update_settings(show_background_stars=not settings.show_background_stars)

        elif event.key == 'C':
            allows = not settings.camera_allows_control
            self._update_settings(camera_allows_control=allows)
            print(f"Camera control: {'on' if allows else 'off'}")

        elif event.text in ('+', '='):
            self._update_settings(star_size_scale=settings.star_size_scale + _STAR_SCALE_STEP)

        elif event.text == '-':
            self._update_settings(star_size_scale=settings.star_size_scale - _STAR_SCALE_STEP)

        elif event.text == ']':
            self._update_settings(fog_density=settings.fog_density + _FOG_STEP)

        elif event.text == '[':
            self._update_settings(fog_density=settings.fog_density - _FOG_STEP)

        elif event.key == 'O':
            later = [o for o in _PANEL_OPACITY_STEPS if o > settings.info_panel_opacity]
            opacity = later[0] if later else _PANEL_OPACITY_STEPS[0]
            self._update_settings(info_panel_opacity=opacity)

        elif event.key == 'R':
            self.orbit.reset()
            camera = self.view.camera
            camera.azimuth = self.orbit.azimuth
            camera.elevation = self.orbit.elevation
            camera.distance = self.orbit.distance
            camera.center = tuple(self.orbit.center)
            print("Camera reset")

        elif event.key == 'X':
            self.controller.picker.clear_selection()

        elif event.key == 'H':
            self._help_visible = not self._help_visible
            self.help_bg.visible = self._help_visible
            self.help_text.visible = self._help_visible

    def close(self):
        """Close the viewer."""
        self.timer.stop()
        self.controller.close()
        self.canvas.close()
        app.quit()

    def run(self):
        """Run the visualization event loop."""
        app.run()


def run_visualization(controller: StarfieldController):
    """
    Run the visualization (main entry point).

    Args:
        controller: Controller holding the loaded scene and settings
    """
    viewer = StarfieldViewer(controller)
    viewer.run()
