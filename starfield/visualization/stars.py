"""Renderable star objects: a core sphere plus a glow shell."""

import numpy as np
from vispy.scene import visuals
from vispy.visuals.transforms import STTransform

from ..catalog.loader import StarRecord
from ..config import GLOW_ALPHA, GLOW_RADIUS_FACTOR, STAR_SPHERE_SEGMENTS
from ..geometry.coordinates import magnitude_to_radius, ra_dec_to_cartesian
from .colors import apply_fog, hex_to_rgba


class RenderableStar:
    """
    Scene representation of one catalog record.

    The glow shell is a child of the core sphere, so any scale applied to
    the core carries over to the glow. The rendered scale is always
    base_scale (from Settings) times transient_scale (from highlights).
    """

    def __init__(
        self,
        record: StarRecord,
        position: np.ndarray,
        base_radius: float,
        core: visuals.Sphere,
        glow: visuals.Sphere,
        core_color,
        glow_color,
    ):
        self.record = record
        self.position = position
        self.base_radius = base_radius
        self.core = core
        self.glow = glow
        self.core_color = core_color
        self.glow_color = glow_color
        self.base_scale = 1.0
        self.transient_scale = 1.0
        self.fog_visibility = 1.0

    @property
    def render_scale(self) -> float:
        return self.base_scale * self.transient_scale

    @property
    def core_radius(self) -> float:
        """Core radius in scene units at the current render scale."""
        return self.base_radius * self.render_scale

    @property
    def glow_radius(self) -> float:
        return self.base_radius * GLOW_RADIUS_FACTOR * self.render_scale

    def set_base_scale(self, scale: float):
        self.base_scale = float(scale)
        self._sync_transform()

    def set_transient_scale(self, scale: float):
        self.transient_scale = float(scale)
        self._sync_transform()

    def set_fog_visibility(self, visibility: float):
        """Attenuate both primitives toward the (black) fog color."""
        if visibility == self.fog_visibility:
            return
        self.fog_visibility = visibility
        _recolor(self.core, apply_fog(self.core_color, visibility))
        _recolor(self.glow, apply_fog(self.glow_color, visibility))

    def _sync_transform(self):
        s = self.render_scale
        self.core.transform.scale = (s, s, s)

    def attach(self, parent):
        self.core.parent = parent

    def detach(self):
        self.core.parent = None

    def __repr__(self):
        return f"RenderableStar({self.record.name!r}, id={self.record.id})"


def _recolor(sphere, rgba):
    mesh = sphere.mesh
    mesh.set_data(meshdata=mesh.mesh_data, color=rgba)


def create_renderable(record: StarRecord) -> RenderableStar:
    """
    Build the renderable for a record.

    Position comes from RA/Dec/distance, radius from magnitude and color
    from the record's hex string (white if unparseable). Both spheres use
    unlit shading so their brightness does not depend on scene lights.

    Args:
        record: Catalog entry

    Returns:
        RenderableStar, not yet attached to any scene
    """
    position = ra_dec_to_cartesian(
        record.right_ascension, record.declination, record.distance
    )
    base_radius = magnitude_to_radius(record.magnitude)
    core_color = hex_to_rgba(record.color_hex, 1.0)
    glow_color = hex_to_rgba(record.color_hex, GLOW_ALPHA)

    core = visuals.Sphere(
        radius=base_radius,
        rows=STAR_SPHERE_SEGMENTS,
        cols=STAR_SPHERE_SEGMENTS,
        method='latitude',
        color=core_color,
    )
    core.transform = STTransform(translate=position, scale=(1.0, 1.0, 1.0))
    core.name = record.name

    glow = visuals.Sphere(
        radius=base_radius * GLOW_RADIUS_FACTOR,
        rows=STAR_SPHERE_SEGMENTS,
        cols=STAR_SPHERE_SEGMENTS,
        method='latitude',
        color=glow_color,
        parent=core,
    )
    glow.set_gl_state('translucent', depth_test=True, cull_face=False)
    # Draw after opaque cores so the halo blends over them
    glow.order = 1
    glow.name = f"{record.name} glow"

    return RenderableStar(
        record=record,
        position=position,
        base_radius=base_radius,
        core=core,
        glow=glow,
        core_color=core_color,
        glow_color=glow_color,
    )
