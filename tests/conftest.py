from __future__ import annotations

import threading
import time
from typing import List, Set, Tuple

import pytest

from requests_mock import Mocker

from skyboard.api.apps import get_api_config
from skyboard.core.entities import CurrentSnapshot
from skyboard.core.providers.base import ProviderError
from skyboard.core.services.locations import LocationRegistry


class FakeSnapshotProvider:
    """Stands in for the weather provider in registry and view tests."""

    def __init__(self, *, configured: bool = True, temperature: int = 21, delay: float = 0.0) -> None:
        self.configured = configured
        self.temperature = temperature
        self.delay = delay
        self.failing: Set[Tuple[float, float]] = set()
        self.fail_all = False
        self.calls: List[Tuple[float, float]] = []
        self._lock = threading.Lock()

    def current_snapshot(self, latitude: float, longitude: float) -> CurrentSnapshot:
        with self._lock:
            self.calls.append((latitude, longitude))
        if self.delay:
            time.sleep(self.delay)
        if self.fail_all or (latitude, longitude) in self.failing:
            raise ProviderError(503, "Weather provider error (HTTP 503)")
        return CurrentSnapshot(temperature_c=self.temperature, condition_code=800, description="Clear")


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def fake_provider() -> FakeSnapshotProvider:
    return FakeSnapshotProvider()


@pytest.fixture
def registry(fake_provider: FakeSnapshotProvider) -> LocationRegistry:
    return LocationRegistry(fake_provider)


@pytest.fixture
def app_registry(monkeypatch, fake_provider: FakeSnapshotProvider) -> LocationRegistry:
    """Swap a fresh registry into the running app for URL-level tests."""
    fresh = LocationRegistry(fake_provider)
    monkeypatch.setattr(get_api_config(), "registry", fresh)
    return fresh
