"""Scene manager: the single source of truth for what is rendered."""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
from vispy import scene

from ..catalog.loader import StarRecord
from ..config import FOG_COLOR
from ..geometry.background import BackgroundField, generate_background_field
from ..state.events import CameraControlUpdate, StarfieldEvents
from ..state.settings import Settings
from .camera import OrbitCamera
from .colors import fog_factor
from .stars import RenderableStar, create_renderable

logger = logging.getLogger(__name__)


class SceneStatus(Enum):
    EMPTY = 'empty'
    POPULATED = 'populated'


class SceneManager:
    """
    Owns the scene graph (camera, fog, stars, background field).

    Stars and the background field live under `root`; the render surface
    attaches `root` to its view. Nothing here needs a GL context.

    No light nodes are created: star spheres use vispy's unlit mesh shading,
    so their colour does not depend on scene lighting.
    """

    def __init__(
        self,
        events: StarfieldEvents,
        camera: Optional[OrbitCamera] = None,
        background_factory=generate_background_field,
    ):
        """
        Initialize an empty scene.

        Args:
            events: Channels used to broadcast the cross-cutting settings
            camera: Orbit camera (default: +z axis at the configured distance)
            background_factory: Callable returning a BackgroundField
        """
        self.events = events
        self.camera = camera if camera is not None else OrbitCamera()
        self.root = scene.Node(name='starfield')

        self.fog_color = FOG_COLOR
        self.fog_density = Settings().fog_density
        self.settings: Optional[Settings] = None

        self.stars: List[RenderableStar] = []
        # Explicit primitive -> owning star mapping used to resolve hits
        self._owners: Dict[Any, RenderableStar] = {}

        self._background_factory = background_factory
        self.background: Optional[BackgroundField] = None
        self.background_node = None
        self._status = SceneStatus.EMPTY

    @property
    def status(self) -> SceneStatus:
        return self._status

    @property
    def background_visible(self) -> bool:
        return self.background_node is not None and bool(self.background_node.visible)

    def load_stars(self, records: Iterable[StarRecord]):
        """
        Replace the rendered star set with one star per record.

        The new set is fully built before the old one is detached, so callers
        never see a half-updated list. The background field is created on the
        first load and reused afterwards.
        """
        new_stars = [create_renderable(record) for record in records]
        new_owners = {}
        for star in new_stars:
            new_owners[star.core] = star
            new_owners[star.glow] = star

        for star in self.stars:
            star.detach()
        for star in new_stars:
            star.attach(self.root)
        self.stars = new_stars
        self._owners = new_owners
        self._status = SceneStatus.POPULATED

        if self.background_node is None:
            self.background = self._background_factory()
            self.background_node = self.background.create_node(parent=self.root)
            logger.debug("Created background field with %d points", self.background.count)

        if self.settings is not None:
            self._apply_to_stars(self.settings)
            if not self.settings.show_background_stars:
                self.background_node.visible = False
        self.refresh_fog()

        logger.debug("Scene now holds %d stars", len(self.stars))

    def apply_settings(self, settings: Settings):
        """
        Make the scene reflect `settings`. Safe in either state and idempotent.

        Background visibility, fog density and star scale are applied here;
        camera control and size scale are broadcast to the render surface.
        """
        if self.background_node is not None:
            self.background_node.visible = settings.show_background_stars
        self.fog_density = settings.fog_density
        self._apply_to_stars(settings)
        self.settings = settings
        self.refresh_fog()

        self.events.publish_settings(
            CameraControlUpdate(
                camera_allows_control=settings.camera_allows_control,
                star_size_scale=settings.star_size_scale,
            )
        )
        logger.debug("Applied %s", settings)

    def _apply_to_stars(self, settings: Settings):
        for star in self.stars:
            star.set_base_scale(settings.star_size_scale)

    def refresh_fog(self):
        """Re-attenuate star colors for the current camera and fog density."""
        if not self.stars:
            return
        eye = self.camera.position
        positions = np.array([star.position for star in self.stars])
        distances = np.linalg.norm(positions - eye, axis=1)
        visibility = fog_factor(distances, self.fog_density)
        for star, vis in zip(self.stars, visibility):
            star.set_fog_visibility(float(vis))

    def owner_of(self, primitive) -> Optional[RenderableStar]:
        """The star a core or glow primitive belongs to, if any."""
        return self._owners.get(primitive)

    def star_for_record(self, record: StarRecord) -> Optional[RenderableStar]:
        for star in self.stars:
            if star.record == record:
                return star
        return None

    def hit_test(self, screen_point) -> Optional[RenderableStar]:
        """
        Find the star under a screen point.

        Casts a ray through the point and intersects it with every core and
        glow sphere at its current rendered radius. The nearest intersected
        primitive wins and is resolved to its owning star. The background
        field is not part of the candidate set.

        Args:
            screen_point: (x, y) in top-left-origin pixels

        Returns:
            The hit star, or None
        """
        if not self.stars:
            return None

        origin, direction = self.camera.ray(screen_point)

        primitives = []
        centers = []
        radii = []
        for star in self.stars:
            primitives.append(star.core)
            centers.append(star.position)
            radii.append(star.core_radius)
            primitives.append(star.glow)
            centers.append(star.position)
            radii.append(star.glow_radius)
        centers = np.array(centers)
        radii = np.array(radii)

        # Ray-sphere intersection: |o + t*d - c|^2 = r^2 with |d| = 1
        oc = origin - centers
        b = oc @ direction
        c = np.einsum('ij,ij->i', oc, oc) - radii**2
        disc = b * b - c
        hit = disc >= 0

        sqrt_disc = np.sqrt(np.where(hit, disc, 0.0))
        t_near = -b - sqrt_disc
        t_far = -b + sqrt_disc
        # Camera inside a sphere: use the exit point
        t = np.where(t_near >= self.camera.near, t_near, t_far)
        hit &= (t >= self.camera.near) & (t <= self.camera.far)

        if not np.any(hit):
            return None

        t = np.where(hit, t, np.inf)
        nearest = int(np.argmin(t))
        return self.owner_of(primitives[nearest])

    def snapshot(self) -> Dict[str, Any]:
        """Get a copy of the observable scene state."""
        return {
            'status': self.status.value,
            'star_ids': [star.record.id for star in self.stars],
            'star_scales': [star.render_scale for star in self.stars],
            'fog_visibility': [star.fog_visibility for star in self.stars],
            'background_present': self.background_node is not None,
            'background_visible': self.background_visible,
            'fog_density': self.fog_density,
            'camera': self.camera.get_state(),
            'settings': self.settings,
        }

    def dispose(self):
        """Detach everything from the scene graph."""
        for star in self.stars:
            star.detach()
        self.stars = []
        self._owners = {}
        if self.background_node is not None:
            self.background_node.parent = None
        self.background_node = None
        self.background = None
        self.root.parent = None
        self._status = SceneStatus.EMPTY
