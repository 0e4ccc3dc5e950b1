"""REST API views for weather lookups and saved locations."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from skyboard.api.apps import get_api_config
from skyboard.api.serializers import LocationSerializer
from skyboard.core.providers.base import ConfigError, ProviderError
from skyboard.core.providers.openweather import OpenWeatherProvider
from skyboard.core.services.locations import DuplicateLocation, LocationNotFound, LocationRegistry


logger = logging.getLogger(__name__)

COORDINATES_REQUIRED = "Latitude and longitude are required"


def _error(message: str, status_code: int, **extra: Any) -> Response:
    return Response({"message": message, **extra}, status=status_code)


def _parse_coordinate(raw_value: Optional[str], name: str) -> float:
    if raw_value is None or raw_value == "":
        raise ValueError(COORDINATES_REQUIRED)
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a valid floating point number") from exc
    if name == "lat" and not -90.0 <= value <= 90.0:
        raise ValueError("Latitude must be between -90 and 90")
    if name == "lon" and not -180.0 <= value <= 180.0:
        raise ValueError("Longitude must be between -180 and 180")
    return value


def _parse_coordinates(params: Mapping[str, str]) -> Tuple[float, float]:
    if not params.get("lat") or not params.get("lon"):
        raise ValueError(COORDINATES_REQUIRED)
    return _parse_coordinate(params.get("lat"), "lat"), _parse_coordinate(params.get("lon"), "lon")


class WeatherAPIView(APIView):
    """Base view resolving the provider and registry.

    Both can be injected through ``as_view(provider=..., registry=...)``;
    otherwise the instances built by the app config are used.
    """

    permission_classes = [AllowAny]
    provider: Optional[OpenWeatherProvider] = None
    registry: Optional[LocationRegistry] = None

    def get_provider(self) -> OpenWeatherProvider:
        if self.provider is not None:
            return self.provider
        return get_api_config().provider

    def get_registry(self) -> LocationRegistry:
        if self.registry is not None:
            return self.registry
        return get_api_config().registry

    def provider_call(self, action: str, func, *args) -> Response:
        try:
            payload = func(*args)
        except ConfigError as exc:
            logger.error("Cannot %s: %s", action, exc)
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        except ProviderError as exc:
            logger.error("Failed to %s: %s", action, exc)
            return _error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(payload, status=status.HTTP_200_OK)


class OneCallView(WeatherAPIView):
    """Current, hourly and daily conditions for coordinates."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        try:
            latitude, longitude = _parse_coordinates(request.query_params)
        except ValueError as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        return self.provider_call("fetch weather data", self.get_provider().fetch_conditions, latitude, longitude)


class GeocodeView(WeatherAPIView):
    """Search locations by free text."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        query = (request.query_params.get("q") or "").strip()
        if not query:
            return _error("Query parameter is required", status.HTTP_400_BAD_REQUEST)
        provider = self.get_provider()
        return self.provider_call(
            "geocode location",
            lambda: [location.as_dict() for location in provider.geocode(query)],
        )


class ReverseGeocodeView(WeatherAPIView):
    """Place names for coordinates."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        try:
            latitude, longitude = _parse_coordinates(request.query_params)
        except ValueError as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        provider = self.get_provider()
        return self.provider_call(
            "reverse geocode",
            lambda: [location.as_dict() for location in provider.reverse_geocode(latitude, longitude)],
        )


class SavedLocationListView(WeatherAPIView):
    """List saved locations (refreshing missing snapshots) or save a new one."""

    def get(self, request, *args, **kwargs):  # noqa: D401
        try:
            locations = self.get_registry().list()
        except Exception:  # noqa: BLE001 - surfaced as a generic 500
            logger.exception("Error getting saved locations")
            return _error("Failed to get saved locations", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response([location.as_dict() for location in locations], status=status.HTTP_200_OK)

    def post(self, request, *args, **kwargs):  # noqa: D401
        serializer = LocationSerializer(data=request.data)
        if not serializer.is_valid():
            return _error(
                "Name, coordinates, and country are required",
                status.HTTP_400_BAD_REQUEST,
                errors=serializer.errors,
            )
        try:
            saved = self.get_registry().add(serializer.to_location())
        except DuplicateLocation as exc:
            return _error(str(exc), status.HTTP_409_CONFLICT)
        return Response(saved.as_dict(), status=status.HTTP_201_CREATED)


class SavedLocationDetailView(WeatherAPIView):
    """Remove a saved location by id."""

    def delete(self, request, location_id: str, *args, **kwargs):  # noqa: D401
        try:
            self.get_registry().remove(location_id)
        except LocationNotFound as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return Response({"message": "Location removed successfully"}, status=status.HTTP_200_OK)


__all__ = [
    "OneCallView",
    "GeocodeView",
    "ReverseGeocodeView",
    "SavedLocationListView",
    "SavedLocationDetailView",
]
