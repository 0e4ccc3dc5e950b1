from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


class WeatherError(RuntimeError):
    """Base error for weather lookups."""


class ConfigError(WeatherError):
    """Raised when the provider credential is not configured."""


class ProviderError(WeatherError):
    """Raised on upstream non-2xx responses, timeouts and network failures.

    ``str(error)`` is safe to show to clients; the upstream body is only
    logged.
    """

    def __init__(self, status: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


@dataclass
class RequestConfig:
    timeout: float = 5.0


class WeatherProvider:
    """Base class that adds timeouts and error mapping for HTTP providers."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    @property
    def configured(self) -> bool:
        return True

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise ProviderError(
                response.status_code, f"Weather provider error (HTTP {response.status_code})"
            )
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request to %s timed out", url, exc_info=exc)
            raise ProviderError(None, "Weather provider timed out") from exc
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", url, exc_info=exc)
            raise ProviderError(None, "Weather provider unavailable") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ProviderError(response.status_code, "Weather provider returned invalid JSON") from exc


__all__ = ["WeatherProvider", "WeatherError", "ConfigError", "ProviderError", "RequestConfig"]
