import numpy as np
import pytest

from conftest import SOL, make_records, star_entry
from starfield.visualization.stars import create_renderable


def test_sol_example():
    (record,) = make_records(SOL)
    star = create_renderable(record)

    assert np.allclose(star.position, [0.0, 0.0, 0.0])
    # 5.0 - 4.83 is below the 0.5 floor
    assert star.base_radius == 0.5
    assert star.core_color == (1.0, 1.0, 0.0, 1.0)
    assert star.glow_color == pytest.approx((1.0, 1.0, 0.0, 0.3))


def test_record_back_reference():
    (record,) = make_records(SOL)
    star = create_renderable(record)
    assert star.record is record


def test_glow_is_child_of_core():
    (record,) = make_records(star_entry(magnitude=1.0))
    star = create_renderable(record)

    assert star.glow.parent is star.core
    assert star.glow_radius == pytest.approx(star.core_radius * 1.5)


def test_bad_color_falls_back_to_white():
    (record,) = make_records(star_entry(color="mauve"))
    star = create_renderable(record)
    assert star.core_color == (1.0, 1.0, 1.0, 1.0)


def test_core_is_translated_to_position():
    (record,) = make_records(star_entry(distance=10, rightAscension=90))
    star = create_renderable(record)
    assert np.allclose(star.core.transform.translate[:3], [0.0, 20.0, 0.0])


def test_scales_compose_multiplicatively():
    (record,) = make_records(star_entry(magnitude=2.0))
    star = create_renderable(record)

    star.set_base_scale(2.0)
    star.set_transient_scale(1.5)

    assert star.render_scale == pytest.approx(3.0)
    assert star.core_radius == pytest.approx(9.0)
    assert np.allclose(star.core.transform.scale[:3], [3.0, 3.0, 3.0])

    star.set_transient_scale(1.0)
    assert star.base_scale == 2.0
    assert np.allclose(star.core.transform.scale[:3], [2.0, 2.0, 2.0])


def test_fog_visibility_is_tracked():
    (record,) = make_records(SOL)
    star = create_renderable(record)
    star.set_fog_visibility(0.5)
    assert star.fog_visibility == 0.5


def test_each_record_gets_its_own_primitives():
    a, b = make_records(SOL, SOL)
    star_a, star_b = create_renderable(a), create_renderable(b)
    assert star_a.core is not star_b.core
    assert star_a.record != star_b.record
