"""Domain entities for locations and their current-conditions snapshots.

Wire shapes use the provider's short keys (``lat``/``lon``) so clients can
post geocoding results back unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True, slots=True)
class Location:
    """A named place. Identity for deduplication is ``(latitude, longitude)``."""

    name: str
    latitude: float
    longitude: float
    country: str
    state: Optional[str] = None

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Location":
        """Build a location from a geocoding record or a request body."""
        state = payload.get("state")
        return cls(
            name=str(payload["name"]),
            latitude=float(payload["lat"]),
            longitude=float(payload["lon"]),
            country=str(payload["country"]),
            state=str(state) if state else None,
        )

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "lat": self.latitude,
            "lon": self.longitude,
            "country": self.country,
        }
        if self.state:
            payload["state"] = self.state
        return payload


@dataclass(frozen=True, slots=True)
class CurrentSnapshot:
    """Compact current conditions shown next to a saved location."""

    temperature_c: int
    condition_code: int
    description: str
    fetched_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "temp": self.temperature_c,
            "weatherId": self.condition_code,
            "description": self.description,
        }


@dataclass(slots=True)
class SavedLocation:
    """A location pinned by the user, keyed by a registry-issued ``id``."""

    id: str
    name: str
    latitude: float
    longitude: float
    country: str
    state: Optional[str] = None
    current: Optional[CurrentSnapshot] = None

    @classmethod
    def from_location(
        cls,
        location_id: str,
        location: Location,
        current: Optional[CurrentSnapshot] = None,
    ) -> "SavedLocation":
        return cls(
            id=location_id,
            name=location.name,
            latitude=location.latitude,
            longitude=location.longitude,
            country=location.country,
            state=location.state,
            current=current,
        )

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def copy(self) -> "SavedLocation":
        return replace(self)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "lat": self.latitude,
            "lon": self.longitude,
            "country": self.country,
        }
        if self.state:
            payload["state"] = self.state
        if self.current is not None:
            payload["current"] = self.current.as_dict()
        return payload


__all__ = ["Location", "CurrentSnapshot", "SavedLocation"]
