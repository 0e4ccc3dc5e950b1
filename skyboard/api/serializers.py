"""Request body validation for saved locations."""
from __future__ import annotations

from rest_framework import serializers

from skyboard.core.entities import Location


class CoordinateField(serializers.FloatField):
    """FloatField that refuses JSON booleans, which ``float()`` would accept."""

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail("invalid")
        return super().to_internal_value(data)


class LocationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    lat = CoordinateField(min_value=-90.0, max_value=90.0)
    lon = CoordinateField(min_value=-180.0, max_value=180.0)
    country = serializers.CharField(max_length=8)
    state = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)

    def to_location(self) -> Location:
        data = self.validated_data
        return Location(
            name=data["name"],
            latitude=data["lat"],
            longitude=data["lon"],
            country=data["country"],
            state=data.get("state") or None,
        )
