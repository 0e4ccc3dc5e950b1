"""OpenWeatherMap provider: One Call forecasts, geocoding and current snapshots."""
from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

from .base import ConfigError, ProviderError, WeatherProvider
from ..conditions import kelvin_to_celsius
from ..entities import CurrentSnapshot, Location


class OpenWeatherProvider(WeatherProvider):
    """Integration with the OpenWeatherMap data and geocoding APIs."""

    base_url = "https://api.openweathermap.org/"
    geocode_limit = 5

    def __init__(self, *, api_key: str = "", base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        if not self.base_url.endswith("/"):
            self.base_url += "/"

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    # Public API ---------------------------------------------------------
    def fetch_conditions(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """Return the One Call payload (current, hourly, daily, alerts) verbatim."""
        return self._get(
            "data/3.0/onecall",
            {"lat": latitude, "lon": longitude, "exclude": "minutely"},
        )

    def geocode(self, query: str, limit: Optional[int] = None) -> List[Location]:
        data = self._get("geo/1.0/direct", {"q": query, "limit": limit or self.geocode_limit})
        return self._locations(data)

    def reverse_geocode(self, latitude: float, longitude: float, limit: int = 1) -> List[Location]:
        data = self._get("geo/1.0/reverse", {"lat": latitude, "lon": longitude, "limit": limit})
        return self._locations(data)

    def current_snapshot(self, latitude: float, longitude: float) -> CurrentSnapshot:
        data = self._get("data/2.5/weather", {"lat": latitude, "lon": longitude})
        try:
            kelvin = float(data["main"]["temp"])
            condition = data["weather"][0]
            return CurrentSnapshot(
                temperature_c=kelvin_to_celsius(kelvin),
                condition_code=int(condition["id"]),
                description=str(condition["main"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            self._log.error("Unexpected current weather payload: %s", data)
            raise ProviderError(None, "Weather provider returned an unexpected payload") from exc

    # helpers ------------------------------------------------------------
    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        if not self.configured:
            raise ConfigError("Weather API key is not configured")
        url = urljoin(self.base_url, path)
        response = self._request("GET", url, params={**params, "appid": self.api_key})
        return self._json(response)

    def _locations(self, data: Any) -> List[Location]:
        if not isinstance(data, list):
            raise ProviderError(None, "Weather provider returned an unexpected payload")
        result: List[Location] = []
        for record in data:
            try:
                result.append(Location.from_payload(record))
            except (KeyError, TypeError, ValueError):
                self._log.warning("Skipping malformed geocoding record: %s", record)
        return result


__all__ = ["OpenWeatherProvider"]
