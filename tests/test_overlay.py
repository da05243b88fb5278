import pytest

from conftest import make_records, star_entry
from starfield.state.events import AnchorPoint
from starfield.visualization.overlay import format_star_info, place_info_panel


def test_format_star_info():
    (record,) = make_records(
        star_entry(
            name="Betelgeuse",
            type="M1Ia",
            magnitude=0.42,
            distance=548.0,
            temperature=3500,
        )
    )
    assert format_star_info(record).splitlines() == [
        "Betelgeuse",
        "Type: M1Ia",
        "Magnitude: 0.42",
        "Distance: 548.0 ly",
        "Temperature: 3,500 K",
    ]


def test_panel_sits_right_of_anchor():
    x, y = place_info_panel(AnchorPoint(100, 300), (1200, 800))
    assert x == pytest.approx(100 + 16 + 150)
    assert y == pytest.approx(300)


def test_panel_clamped_at_right_edge():
    x, _ = place_info_panel(AnchorPoint(1150, 300), (1200, 800))
    assert x == pytest.approx(1200 - 12 - 150)


def test_panel_clamped_vertically():
    _, top = place_info_panel(AnchorPoint(100, 5), (1200, 800))
    _, bottom = place_info_panel(AnchorPoint(100, 795), (1200, 800))
    assert top == pytest.approx(12 + 100)
    assert bottom == pytest.approx(800 - 12 - 100)


def test_panel_on_tiny_canvas_pins_to_padding():
    x, y = place_info_panel(AnchorPoint(50, 50), (100, 100))
    assert (x, y) == pytest.approx((12 + 150, 12 + 100))
