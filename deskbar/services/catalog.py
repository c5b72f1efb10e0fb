"""
Catalog Service - Own the current application catalog and category index.

The catalog and its category index are published together as one
immutable Snapshot. A refresh builds a new Snapshot from disk and swaps
the reference; readers that grabbed the old snapshot keep a complete,
consistent view.

refresh() scans on the calling thread. refresh_async() scans on a worker
thread and publishes on the GLib main loop, so the UI never blocks on
filesystem I/O.
"""

import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from gi.repository import GLib, GObject
from ignis.base_service import BaseService
from loguru import logger

from deskbar.apps.categories import CategoryIndex, categorize, get_policy
from deskbar.apps.scanner import Catalog, scan
from deskbar.utils.helpers import load_settings


@dataclass(frozen=True)
class Snapshot:
    """A catalog and the category index derived from it."""
    catalog: Catalog = ()
    categories: CategoryIndex = field(default_factory=lambda: MappingProxyType({}))
    policy: str = "single"


class CatalogService(BaseService):
    """
    Service holding the application catalog snapshot.

    Signals:
        changed: Emitted after a new snapshot has been published

    Methods:
        refresh(): Rescan synchronously and publish
        refresh_async(): Rescan in the background and publish on the main loop
    """

    __gtype_name__ = "DeskbarCatalogService"

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_FIRST, None, ()),
    }

    def __init__(self, policy: str = "single", directories=None):
        super().__init__()

        # Fail early on a bad policy instead of inside a worker thread
        self._policy = get_policy(policy)
        self._directories = list(directories) if directories is not None else None

        self._snapshot = Snapshot(policy=self._policy.name)
        self._lock = threading.Lock()
        self._refreshing = False
        # Scans are numbered as they start; only newer ones may publish
        self._generation = 0
        self._published_generation = 0

    @property
    def snapshot(self) -> Snapshot:
        """Current snapshot; empty until the first refresh."""
        return self._snapshot

    @property
    def catalog(self) -> Catalog:
        return self._snapshot.catalog

    @property
    def categories(self) -> CategoryIndex:
        return self._snapshot.categories

    def _next_generation(self) -> int:
        """Number a scan as it starts; later scans get higher numbers."""
        with self._lock:
            self._generation += 1
            return self._generation

    def _build_snapshot(self) -> Snapshot:
        catalog = scan(self._directories)
        return Snapshot(
            catalog=catalog,
            categories=categorize(catalog, self._policy),
            policy=self._policy.name,
        )

    def _publish(self, snapshot: Snapshot, generation: int) -> bool:
        """
        Swap in a snapshot unless a newer scan was already published.

        Returns:
            True if the snapshot was published
        """
        with self._lock:
            if generation <= self._published_generation:
                logger.debug(f"Dropping stale catalog scan #{generation}")
                return False
            # Single reference assignment: readers see old or new, never a mix
            self._snapshot = snapshot
            self._published_generation = generation

        logger.debug(
            f"Published catalog #{generation}: {len(snapshot.catalog)} apps, "
            f"{len(snapshot.categories)} categories"
        )
        self.emit("changed")
        return True

    def refresh(self) -> Snapshot:
        """
        Rescan application directories and publish a new snapshot.

        Blocks on filesystem I/O.

        Returns:
            The current snapshot after the refresh

        Emits:
            changed: After the swap
        """
        generation = self._next_generation()
        self._publish(self._build_snapshot(), generation)
        return self._snapshot

    def refresh_async(self) -> None:
        """
        Rescan in a worker thread and publish from the GLib main loop.

        If a background refresh is already running, this call does nothing.
        A result that arrives after a newer scan was published is dropped.
        """
        with self._lock:
            if self._refreshing:
                logger.debug("Catalog refresh already in progress")
                return
            self._refreshing = True

        generation = self._next_generation()
        threading.Thread(
            target=self._refresh_worker,
            args=(generation,),
            name="deskbar-scan",
            daemon=True,
        ).start()

    def _refresh_worker(self, generation: int) -> None:
        snapshot: Optional[Snapshot] = None
        try:
            snapshot = self._build_snapshot()
        except Exception:
            logger.exception("Background catalog refresh failed")

        GLib.idle_add(self._publish_from_main_loop, snapshot, generation)

    def _publish_from_main_loop(self, snapshot: Optional[Snapshot], generation: int) -> bool:
        """
        GLib.idle_add callback that publishes a finished snapshot.

        Returns:
            False so the idle source runs once
        """
        with self._lock:
            self._refreshing = False

        if snapshot is not None:
            self._publish(snapshot, generation)
        return False


# Singleton accessor
_catalog_service_instance = None


def get_catalog_service() -> CatalogService:
    """
    Get the singleton CatalogService instance.

    The policy comes from settings; the catalog starts empty until
    refresh() or refresh_async() is called.

    Returns:
        CatalogService: The global instance
    """
    global _catalog_service_instance
    if _catalog_service_instance is None:
        settings = load_settings()
        _catalog_service_instance = CatalogService(policy=settings["menu"]["policy"])
    return _catalog_service_instance
