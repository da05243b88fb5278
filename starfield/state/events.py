"""Event channels shared between the scene, the picker and the render surface."""

from dataclasses import dataclass
from typing import Callable, Optional

from vispy.util.event import EmitterGroup, Event

from ..catalog.loader import StarRecord


@dataclass(frozen=True)
class CameraControlUpdate:
    """Cross-cutting part of Settings consumed by the render surface."""

    camera_allows_control: bool
    star_size_scale: float


@dataclass(frozen=True)
class AnchorPoint:
    """Screen position in top-left-origin pixels."""

    x: float
    y: float


@dataclass(frozen=True)
class Selection:
    """A picked star and where its center lands on screen."""

    record: StarRecord
    anchor: AnchorPoint


class Subscription:
    """Handle for a connected callback; dispose() disconnects it."""

    def __init__(self, emitter, callback: Callable):
        self._emitter = emitter
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._emitter is not None

    def dispose(self):
        """Disconnect the callback. Safe to call more than once."""
        if self._emitter is None:
            return
        self._emitter.disconnect(self._callback)
        self._emitter = None
        self._callback = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()


class StarfieldEvents:
    """
    Typed channels passed into the components that publish or consume them.

    settings: carries a CameraControlUpdate each time Settings are applied.
    selection: carries a Selection, or None when the selection is cleared.

    Both are fire-and-forget; listeners receive the payload, not the vispy
    Event wrapping it.
    """

    def __init__(self):
        self.events = EmitterGroup(
            source=self,
            auto_connect=False,
            settings=Event,
            selection=Event,
        )

    def publish_settings(self, update: CameraControlUpdate):
        self.events.settings(payload=update)

    def publish_selection(self, selection: Optional[Selection]):
        self.events.selection(payload=selection)

    def subscribe_settings(
        self, callback: Callable[[CameraControlUpdate], None]
    ) -> Subscription:
        return self._subscribe(self.events.settings, callback)

    def subscribe_selection(
        self, callback: Callable[[Optional[Selection]], None]
    ) -> Subscription:
        return self._subscribe(self.events.selection, callback)

    @staticmethod
    def _subscribe(emitter, callback) -> Subscription:
        def _deliver(event):
            callback(event.payload)

        emitter.connect(_deliver)
        return Subscription(emitter, _deliver)
