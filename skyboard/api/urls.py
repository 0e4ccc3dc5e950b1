"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from skyboard.api.views import (
    GeocodeView,
    OneCallView,
    ReverseGeocodeView,
    SavedLocationDetailView,
    SavedLocationListView,
)

urlpatterns = [
    path("onecall", OneCallView.as_view(), name="onecall"),
    path("geocode", GeocodeView.as_view(), name="geocode"),
    path("reverse-geocode", ReverseGeocodeView.as_view(), name="reverse-geocode"),
    path("locations", SavedLocationListView.as_view(), name="locations"),
    path("locations/<str:location_id>", SavedLocationDetailView.as_view(), name="location-detail"),
]
