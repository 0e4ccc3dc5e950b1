"""Application config that owns the weather provider and location registry."""
from __future__ import annotations

import logging
from typing import Optional

from django.apps import AppConfig, apps
from django.conf import settings

from skyboard.core.providers.base import RequestConfig
from skyboard.core.providers.openweather import OpenWeatherProvider
from skyboard.core.services.locations import LocationRegistry


logger = logging.getLogger(__name__)


class ApiConfig(AppConfig):
    name = "skyboard.api"
    label = "api"
    verbose_name = "Skyboard weather API"

    provider: Optional[OpenWeatherProvider] = None
    registry: Optional[LocationRegistry] = None

    def ready(self) -> None:
        self.provider = build_provider()
        self.registry = LocationRegistry(
            self.provider,
            snapshot_ttl=settings.SAVED_LOCATION_SNAPSHOT_TTL or None,
            max_workers=settings.SAVED_LOCATION_REFRESH_WORKERS,
        )
        if not self.provider.configured:
            logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will fail and saved locations will have no snapshots")


def build_provider() -> OpenWeatherProvider:
    return OpenWeatherProvider(
        api_key=settings.OPENWEATHER_API_KEY,
        base_url=settings.OPENWEATHER_BASE_URL,
        request_config=RequestConfig(timeout=settings.WEATHER_PROVIDER_TIMEOUT),
    )


def get_api_config() -> ApiConfig:
    return apps.get_app_config("api")  # type: ignore[return-value]
