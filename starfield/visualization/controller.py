"""Controller tying catalog loading, settings and picking to one scene."""

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..catalog.loader import CatalogError, StarRecord, load_catalog
from ..config import DEFAULT_CATALOG
from ..state.events import StarfieldEvents
from ..state.settings import Settings
from .scene import SceneManager
from .picking import PickCoordinator

logger = logging.getLogger(__name__)


class StarfieldController:
    """
    Drives a SceneManager from the outside world.

    Loads the catalog once, installs it, keeps the current Settings and
    skips reapplying Settings that have not changed. A closed controller
    ignores any load that finishes afterwards.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        events: Optional[StarfieldEvents] = None,
        loader: Callable = load_catalog,
    ):
        self.events = events if events is not None else StarfieldEvents()
        self.scene = SceneManager(self.events)
        self.picker = PickCoordinator(self.scene, self.events)
        self.settings = settings if settings is not None else Settings()
        self.loader = loader

        self.is_loading = False
        self.error_message: Optional[str] = None
        self.closed = False
        self._applied: Optional[Settings] = None
        self._load_task: Optional[asyncio.Task] = None
        self._subscriptions = []

    async def load(
        self,
        source: Union[str, Path] = DEFAULT_CATALOG,
        timeout: Optional[float] = None,
    ) -> List[StarRecord]:
        """
        Load a catalog and install it into the scene.

        On failure the scene is left as it was, the message is kept in
        error_message and the error is re-raised; calling load again retries.
        `timeout` is handed to the loader and bounds each wait on a remote
        server.
        """
        self.is_loading = True
        self.error_message = None
        try:
            records = await self.loader(source, timeout=timeout)
        except CatalogError as e:
            if not self.closed:
                self.error_message = f"Error loading stars: {e}"
                logger.warning(self.error_message)
            raise
        finally:
            self.is_loading = False

        if self.closed:
            logger.debug("Controller closed during load; discarding %d stars", len(records))
            return records

        self.scene.load_stars(records)
        self.apply_settings(force=True)
        logger.info("Loaded %d stars", len(records))
        return records

    def start_loading(
        self,
        source: Union[str, Path] = DEFAULT_CATALOG,
        timeout: Optional[float] = None,
    ) -> asyncio.Task:
        """Schedule load() on the running event loop and remember the task."""
        self._load_task = asyncio.ensure_future(self.load(source, timeout))
        return self._load_task

    def update_settings(self, settings: Settings) -> bool:
        """
        Replace the current settings and apply them if they changed.

        Returns:
            True if the scene was updated
        """
        self.settings = settings
        return self.apply_settings()

    def apply_settings(self, force: bool = False) -> bool:
        if not force and self._applied == self.settings:
            return False
        self.scene.apply_settings(self.settings)
        self._applied = self.settings
        return True

    def subscribe_selection(self, callback):
        subscription = self.events.subscribe_selection(callback)
        self._subscriptions.append(subscription)
        return subscription

    def subscribe_settings(self, callback):
        subscription = self.events.subscribe_settings(callback)
        self._subscriptions.append(subscription)
        return subscription

    def close(self):
        """Abandon any in-flight load and release subscriptions."""
        self.closed = True
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        self._load_task = None
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()
        self.scene.dispose()
