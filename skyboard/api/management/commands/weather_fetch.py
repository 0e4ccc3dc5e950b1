"""Management command to query the weather provider using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from skyboard.api.apps import get_api_config
from skyboard.core.providers.base import WeatherError


class Command(BaseCommand):
    help = "Fetch weather for the provided coordinates or search locations by name"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument("--query", type=str, help="Location name to geocode")
        parser.add_argument(
            "--current",
            action="store_true",
            help="Print the compact current-conditions snapshot instead of the full forecast",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        provider = get_api_config().provider
        query = options.get("query")
        latitude = options.get("lat")
        longitude = options.get("lon")

        try:
            if query:
                payload: Any = [location.as_dict() for location in provider.geocode(query)]
            else:
                if latitude is None or longitude is None:
                    raise CommandError("--lat and --lon are required unless using --query")
                if options.get("current"):
                    payload = provider.current_snapshot(latitude, longitude).as_dict()
                else:
                    payload = provider.fetch_conditions(latitude, longitude)
        except WeatherError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(json.dumps(payload))
