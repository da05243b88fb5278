"""Info panel layout and text for the selected star."""

from typing import Tuple

from ..catalog.loader import StarRecord
from ..config import (
    INFO_PANEL_HEIGHT,
    INFO_PANEL_OFFSET_X,
    INFO_PANEL_PADDING,
    INFO_PANEL_WIDTH,
)
from ..state.events import AnchorPoint


def format_star_info(record: StarRecord) -> str:
    """Multi-line description shown in the info panel."""
    return (
        f"{record.name}\n"
        f"Type: {record.spectral_type}\n"
        f"Magnitude: {record.magnitude:.2f}\n"
        f"Distance: {record.distance:.1f} ly\n"
        f"Temperature: {record.temperature:,} K"
    )


def place_info_panel(
    anchor: AnchorPoint,
    canvas_size: Tuple[float, float],
    panel_size: Tuple[float, float] = (INFO_PANEL_WIDTH, INFO_PANEL_HEIGHT),
    padding: float = INFO_PANEL_PADDING,
    offset_x: float = INFO_PANEL_OFFSET_X,
) -> Tuple[float, float]:
    """
    Center of the info panel: just right of the anchor, kept inside the canvas.

    Args:
        anchor: Star position on screen (top-left origin)
        canvas_size: (width, height) of the canvas
        panel_size: (width, height) of the panel
        padding: Minimum gap to the canvas edges
        offset_x: Horizontal gap between the anchor and the panel

    Returns:
        (x, y) panel center in canvas pixels
    """
    width, height = canvas_size
    panel_w, panel_h = panel_size

    desired_x = anchor.x + offset_x + panel_w / 2
    desired_y = anchor.y

    low_x, high_x = padding + panel_w / 2, width - padding - panel_w / 2
    low_y, high_y = padding + panel_h / 2, height - padding - panel_h / 2
    # Canvas smaller than the panel: pin to the top-left padding
    x = max(low_x, min(desired_x, high_x))
    y = max(low_y, min(desired_y, high_y))
    return x, y
