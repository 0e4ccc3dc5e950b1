"""In-memory registry of the user's saved locations.

The registry is the single owner of the saved-location map. Reads repair
missing derived data: ``list()`` fetches a current-conditions snapshot for
every entry that lacks one (or holds an expired one) before returning, and a
failed fetch simply leaves the entry without a snapshot until the next read.

Network calls never run while the lock is held; only the uniqueness check
and the map mutation do.
"""
from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from ..conditions import same_coordinates
from ..entities import CurrentSnapshot, Location, SavedLocation
from ..providers.base import ConfigError, WeatherError


logger = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    """Anything able to produce a current-conditions snapshot for coordinates."""

    @property
    def configured(self) -> bool:
        ...

    def current_snapshot(self, latitude: float, longitude: float) -> CurrentSnapshot:
        ...


class RegistryError(Exception):
    """Base class for registry failures."""


class DuplicateLocation(RegistryError):
    """Raised when a location with the same coordinates is already saved."""

    def __init__(self, latitude: float, longitude: float) -> None:
        super().__init__("Location already exists")
        self.latitude = latitude
        self.longitude = longitude


class LocationNotFound(RegistryError):
    """Raised when no saved location has the requested id."""

    def __init__(self, location_id: str) -> None:
        super().__init__("Location not found")
        self.location_id = location_id


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class LocationRegistry:
    """Coordinate-unique saved locations with lazily refreshed snapshots."""

    def __init__(
        self,
        provider: SnapshotSource,
        *,
        snapshot_ttl: Optional[float] = None,
        max_workers: int = 4,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._provider = provider
        self._snapshot_ttl = timedelta(seconds=snapshot_ttl) if snapshot_ttl else None
        self._max_workers = max_workers
        self._clock = clock
        self._entries: Dict[str, SavedLocation] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # -- Reads --------------------------------------------------------------
    def list(self) -> List[SavedLocation]:
        """Return every saved location in insertion order.

        Entries without a fresh snapshot are refreshed first, concurrently and
        best-effort. Provider failures are logged, never raised.
        """
        with self._lock:
            stale = [
                (entry.id, entry.name, entry.coordinates)
                for entry in self._entries.values()
                if self._needs_refresh(entry.current)
            ]
        if stale:
            self._refresh(stale)
        with self._lock:
            return [entry.copy() for entry in self._entries.values()]

    def get(self, location_id: str) -> SavedLocation:
        with self._lock:
            entry = self._entries.get(location_id)
            if entry is None:
                raise LocationNotFound(location_id)
            return entry.copy()

    # -- Mutations ----------------------------------------------------------
    def add(self, candidate: Location) -> SavedLocation:
        """Save ``candidate`` unless its coordinates are already saved.

        Raises :class:`DuplicateLocation` on a coordinate collision. A failed
        snapshot fetch does not prevent the insert.
        """
        with self._lock:
            self._ensure_unique(candidate)

        snapshot = self._fetch_snapshot(candidate.name, candidate.coordinates)
        entry = SavedLocation.from_location(str(uuid.uuid4()), candidate, current=snapshot)

        with self._lock:
            # Another request may have saved the same place while we fetched.
            self._ensure_unique(candidate)
            self._entries[entry.id] = entry
            stored = entry.copy()
        logger.info("Saved location %s (%s) at %s,%s", entry.name, entry.id, entry.latitude, entry.longitude)
        return stored

    def remove(self, location_id: str) -> SavedLocation:
        """Delete an entry. Raises :class:`LocationNotFound` if it is absent."""
        with self._lock:
            entry = self._entries.pop(location_id, None)
        if entry is None:
            raise LocationNotFound(location_id)
        logger.info("Removed location %s (%s)", entry.name, entry.id)
        return entry

    # -- Helpers ------------------------------------------------------------
    def _ensure_unique(self, candidate: Location) -> None:
        for entry in self._entries.values():
            if same_coordinates(entry.coordinates, candidate.coordinates):
                raise DuplicateLocation(candidate.latitude, candidate.longitude)

    def _needs_refresh(self, snapshot: Optional[CurrentSnapshot]) -> bool:
        if snapshot is None:
            return True
        if self._snapshot_ttl is None:
            return False
        return self._clock() - snapshot.fetched_at >= self._snapshot_ttl

    def _refresh(self, stale: List[Tuple[str, str, Tuple[float, float]]]) -> None:
        if not self._provider.configured:
            logger.debug("Weather provider not configured; skipping refresh of %d locations", len(stale))
            return
        workers = min(self._max_workers, len(stale))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="location-refresh") as pool:
            results = pool.map(lambda item: self._fetch_snapshot(item[1], item[2]), stale)
            fetched = list(zip((item[0] for item in stale), results))
        with self._lock:
            for location_id, snapshot in fetched:
                entry = self._entries.get(location_id)
                if entry is not None and snapshot is not None:
                    entry.current = snapshot

    def _fetch_snapshot(self, label: str, coordinates: Tuple[float, float]) -> Optional[CurrentSnapshot]:
        if not self._provider.configured:
            logger.debug("Weather provider not configured; %s left without snapshot", label)
            return None
        latitude, longitude = coordinates
        try:
            return self._provider.current_snapshot(latitude, longitude)
        except ConfigError:
            logger.debug("Weather provider not configured; %s left without snapshot", label)
        except WeatherError as exc:
            logger.warning("Failed to update weather for %s: %s", label, exc)
        except Exception as exc:  # noqa: BLE001 - one entry must not break the listing
            logger.warning("Unexpected error updating weather for %s", label, exc_info=exc)
        return None


__all__ = ["LocationRegistry", "RegistryError", "DuplicateLocation", "LocationNotFound", "SnapshotSource"]
