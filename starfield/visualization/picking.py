"""Tap handling: hit-test, selection broadcast and transient highlight."""

import logging
import time
from typing import Callable, Dict, Optional

from ..config import HIGHLIGHT_DURATION, HIGHLIGHT_SCALE
from ..state.events import AnchorPoint, Selection, StarfieldEvents
from .scene import SceneManager
from .stars import RenderableStar

logger = logging.getLogger(__name__)


def _smoothstep(t: float) -> float:
    # Slow start, fast middle, slow end
    return t * t * (3 - 2 * t)


class HighlightAnimation:
    """Scale a star up to a peak and settle back to 1.0."""

    def __init__(
        self,
        star: RenderableStar,
        start_time: float,
        peak: float = HIGHLIGHT_SCALE,
        duration: float = HIGHLIGHT_DURATION,
    ):
        self.star = star
        self.start_time = start_time
        self.peak = peak
        self.duration = duration

    def scale_at(self, now: float) -> float:
        elapsed = max(0.0, now - self.start_time)
        if elapsed <= self.duration:
            t = _smoothstep(elapsed / self.duration)
            return 1.0 + t * (self.peak - 1.0)
        settle = elapsed - self.duration
        if settle < self.duration:
            t = _smoothstep(settle / self.duration)
            return self.peak + t * (1.0 - self.peak)
        return 1.0

    def finished(self, now: float) -> bool:
        return now - self.start_time >= 2 * self.duration

    def step(self, now: float) -> bool:
        """Apply the scale for `now`. Returns True while still running."""
        if self.finished(now):
            self.star.set_transient_scale(1.0)
            return False
        self.star.set_transient_scale(self.scale_at(now))
        return True


class PickCoordinator:
    """Turns taps into scene hit-tests and selection events."""

    def __init__(
        self,
        scene_manager: SceneManager,
        events: StarfieldEvents,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.scene_manager = scene_manager
        self.events = events
        self.clock = clock
        self.selected: Optional[Selection] = None
        self._highlights: Dict[int, HighlightAnimation] = {}

    @property
    def animating(self) -> bool:
        return bool(self._highlights)

    def handle_tap(self, screen_point) -> Optional[Selection]:
        """
        Select the star under `screen_point`, or clear the selection.

        On a hit the star's center is projected to screen space (top-left
        origin) as the overlay anchor, the selection is broadcast and the star
        gets a brief highlight. On a miss None is broadcast.
        """
        star = self.scene_manager.hit_test(screen_point)
        if star is None:
            self.clear_selection()
            return None

        anchor = self.scene_manager.camera.project(star.position)
        if anchor is None:
            # Center behind the camera while the glow is still in view
            anchor = (float(screen_point[0]), float(screen_point[1]))

        selection = Selection(record=star.record, anchor=AnchorPoint(*anchor))
        self.selected = selection
        self.events.publish_selection(selection)
        self._start_highlight(star)
        logger.debug("Selected %s at (%.1f, %.1f)", star.record.name, *anchor)
        return selection

    def clear_selection(self):
        self.selected = None
        self.events.publish_selection(None)

    def _start_highlight(self, star: RenderableStar):
        animation = HighlightAnimation(star, self.clock())
        self._highlights[star.record.id] = animation
        animation.step(animation.start_time)

    def advance(self, now: Optional[float] = None) -> bool:
        """
        Step running highlights.

        Highlights on stars that are no longer in the scene are dropped.

        Returns:
            True if any highlight is still running
        """
        if now is None:
            now = self.clock()
        live = {id(star) for star in self.scene_manager.stars}
        for key, animation in list(self._highlights.items()):
            if id(animation.star) not in live or not animation.step(now):
                del self._highlights[key]
        return self.animating

    def anchor_for(self, record) -> Optional[AnchorPoint]:
        """Current screen anchor of a record's star (e.g. after camera moves)."""
        star = self.scene_manager.star_for_record(record)
        if star is None:
            return None
        anchor = self.scene_manager.camera.project(star.position)
        if anchor is None:
            return None
        return AnchorPoint(*anchor)
