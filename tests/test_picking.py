import pytest

from conftest import FakeClock
from starfield.state.settings import Settings
from starfield.visualization.picking import HighlightAnimation, PickCoordinator


@pytest.fixture
def clock():
    return FakeClock(100.0)


@pytest.fixture
def picker(scene_manager, events, clock, sample_records):
    scene_manager.load_stars(sample_records)
    return PickCoordinator(scene_manager, events, clock=clock)


@pytest.fixture
def selections(events):
    received = []
    events.subscribe_selection(received.append)
    return received


def test_tap_on_star_emits_selection(picker, scene_manager, selections):
    beacon = scene_manager.stars[1]
    expected_x, expected_y = scene_manager.camera.project(beacon.position)

    selection = picker.handle_tap((expected_x + 2, expected_y - 2))

    assert selection.record is beacon.record
    assert selection.anchor.x == pytest.approx(expected_x)
    assert selection.anchor.y == pytest.approx(expected_y)
    assert selections == [selection]
    assert picker.selected == selection


def test_anchor_for_centered_star(picker, scene_manager):
    selection = picker.handle_tap((600, 400))
    assert selection.record is scene_manager.stars[0].record
    assert (selection.anchor.x, selection.anchor.y) == pytest.approx((600.0, 400.0))


def test_tap_on_empty_space_clears_selection(picker, selections):
    picker.handle_tap((600, 400))
    result = picker.handle_tap((5, 5))

    assert result is None
    assert selections[-1] is None
    assert picker.selected is None


def test_highlight_scales_up_then_settles(picker, scene_manager, clock):
    beacon = scene_manager.stars[1]
    picker.handle_tap(scene_manager.camera.project(beacon.position))
    assert beacon.transient_scale == 1.0

    clock.now += 0.1
    picker.advance()
    assert 1.0 < beacon.transient_scale < 1.5

    clock.now += 0.1
    picker.advance()
    assert beacon.transient_scale == pytest.approx(1.5)

    clock.now += 0.1
    assert picker.advance() is True
    assert 1.0 < beacon.transient_scale < 1.5

    clock.now += 0.2
    assert picker.advance() is False
    assert beacon.transient_scale == 1.0
    assert beacon.base_scale == 1.0


def test_highlight_does_not_touch_settings_scale(picker, scene_manager, clock):
    beacon = scene_manager.stars[1]
    scene_manager.apply_settings(Settings(star_size_scale=2.0))
    picker.handle_tap(scene_manager.camera.project(beacon.position))

    clock.now += 0.2
    picker.advance()
    assert beacon.render_scale == pytest.approx(3.0)

    # Settings change mid-animation keeps composing with the highlight
    scene_manager.apply_settings(Settings(star_size_scale=0.5))
    assert beacon.render_scale == pytest.approx(0.75)

    clock.now += 1.0
    picker.advance()
    assert beacon.base_scale == 0.5
    assert beacon.render_scale == pytest.approx(0.5)


def test_reload_drops_highlight(picker, scene_manager, clock, sample_records):
    picker.handle_tap((600, 400))
    assert picker.animating

    scene_manager.load_stars(sample_records)
    assert picker.advance() is False


def test_anchor_follows_camera(picker, scene_manager):
    record = scene_manager.stars[1].record
    before = picker.anchor_for(record)
    scene_manager.camera.zoom(3)
    after = picker.anchor_for(record)

    assert after.x > before.x
    assert after.y == pytest.approx(before.y)


def test_highlight_curve():
    class Dummy:
        transient_scale = 1.0

        def set_transient_scale(self, scale):
            self.transient_scale = scale

    animation = HighlightAnimation(Dummy(), start_time=0.0, peak=1.5, duration=0.2)
    assert animation.scale_at(0.0) == 1.0
    assert animation.scale_at(0.1) == pytest.approx(1.25)
    assert animation.scale_at(0.2) == pytest.approx(1.5)
    assert animation.scale_at(0.3) == pytest.approx(1.25)
    assert animation.scale_at(0.4) == 1.0
    assert animation.finished(0.4)
