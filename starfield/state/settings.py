"""Live-tunable visual settings."""

from dataclasses import dataclass, replace

from ..config import (
    CAMERA_ALLOWS_CONTROL,
    FOG_DENSITY,
    FOG_DENSITY_MAX,
    FOG_DENSITY_MIN,
    INFO_PANEL_OPACITY,
    INFO_PANEL_OPACITY_MAX,
    INFO_PANEL_OPACITY_MIN,
    SHOW_BACKGROUND_STARS,
    STAR_SIZE_SCALE,
    STAR_SIZE_SCALE_MAX,
    STAR_SIZE_SCALE_MIN,
)


def _check_range(name: str, value: float, low: float, high: float):
    if not low <= value <= high:
        raise ValueError(f"{name} must be in [{low}, {high}], got {value}")


@dataclass(frozen=True)
class Settings:
    """
    Value object describing how the scene should look.

    Every user edit produces a new Settings that fully replaces the old one.
    """

    show_background_stars: bool = SHOW_BACKGROUND_STARS
    fog_density: float = FOG_DENSITY
    camera_allows_control: bool = CAMERA_ALLOWS_CONTROL
    star_size_scale: float = STAR_SIZE_SCALE
    info_panel_opacity: float = INFO_PANEL_OPACITY

    def __post_init__(self):
        _check_range('fog_density', self.fog_density, FOG_DENSITY_MIN, FOG_DENSITY_MAX)
        _check_range(
            'star_size_scale',
            self.star_size_scale,
            STAR_SIZE_SCALE_MIN,
            STAR_SIZE_SCALE_MAX,
        )
        _check_range(
            'info_panel_opacity',
            self.info_panel_opacity,
            INFO_PANEL_OPACITY_MIN,
            INFO_PANEL_OPACITY_MAX,
        )

    def with_changes(self, **changes) -> 'Settings':
        """Return a new Settings with the given fields replaced."""
        return replace(self, **changes)

    def clamped_with(self, **changes) -> 'Settings':
        """Like with_changes, but clamp numeric fields into range first."""
        limits = {
            'fog_density': (FOG_DENSITY_MIN, FOG_DENSITY_MAX),
            'star_size_scale': (STAR_SIZE_SCALE_MIN, STAR_SIZE_SCALE_MAX),
            'info_panel_opacity': (INFO_PANEL_OPACITY_MIN, INFO_PANEL_OPACITY_MAX),
        }
        for name, (low, high) in limits.items():
            if name in changes:
                changes[name] = max(low, min(high, float(changes[name])))
        return replace(self, **changes)
