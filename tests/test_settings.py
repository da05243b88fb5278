import dataclasses

import pytest

from starfield.state.settings import Settings


def test_defaults():
    settings = Settings()
    assert settings.show_background_stars is True
    assert settings.fog_density == 0.00025
    assert settings.camera_allows_control is True
    assert settings.star_size_scale == 1.0
    assert settings.info_panel_opacity == 0.85


def test_value_semantics():
    assert Settings() == Settings()
    assert Settings(star_size_scale=1.5) != Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        Settings().star_size_scale = 2.0


@pytest.mark.parametrize(
    "changes",
    [
        {"fog_density": -0.0001},
        {"fog_density": 0.0021},
        {"star_size_scale": 0.4},
        {"star_size_scale": 2.5},
        {"info_panel_opacity": 0.2},
        {"info_panel_opacity": 1.01},
    ],
)
def test_out_of_range_rejected(changes):
    with pytest.raises(ValueError):
        Settings(**changes)


def test_range_bounds_are_inclusive():
    Settings(fog_density=0.0, star_size_scale=0.5, info_panel_opacity=0.3)
    Settings(fog_density=0.002, star_size_scale=2.0, info_panel_opacity=1.0)


def test_with_changes_replaces_whole_value():
    original = Settings()
    updated = original.with_changes(show_background_stars=False)
    assert original.show_background_stars is True
    assert updated.show_background_stars is False
    assert updated.fog_density == original.fog_density


def test_clamped_with():
    settings = Settings().clamped_with(star_size_scale=9.0, fog_density=-1.0)
    assert settings.star_size_scale == 2.0
    assert settings.fog_density == 0.0
    with pytest.raises(ValueError):
        Settings().with_changes(star_size_scale=9.0)
