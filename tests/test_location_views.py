from __future__ import annotations

from rest_framework.test import APIClient, APIRequestFactory

from skyboard.api.views import SavedLocationDetailView, SavedLocationListView
from skyboard.core.services.locations import LocationRegistry

PARIS = {"name": "Paris", "lat": 48.8566, "lon": 2.3522, "country": "FR"}

factory = APIRequestFactory()


def test_paris_scenario_over_http(app_registry: LocationRegistry) -> None:
    client = APIClient()

    created = client.post("/api/weather/locations", PARIS, format="json")
    assert created.status_code == 201
    body = created.json()
    assert body["id"]
    assert body["lat"] == 48.8566
    assert body["current"] == {"temp": 21, "weatherId": 800, "description": "Clear"}

    duplicate = client.post("/api/weather/locations", {**PARIS, "name": "Paris, FR"}, format="json")
    assert duplicate.status_code == 409
    assert duplicate.json()["message"] == "Location already exists"

    listed = client.get("/api/weather/locations")
    assert listed.status_code == 200
    assert [entry["id"] for entry in listed.json()] == [body["id"]]

    removed = client.delete(f"/api/weather/locations/{body['id']}")
    assert removed.status_code == 200
    assert removed.json() == {"message": "Location removed successfully"}

    again = client.delete(f"/api/weather/locations/{body['id']}")
    assert again.status_code == 404
    assert again.json()["message"] == "Location not found"

    assert client.get("/api/weather/locations").json() == []


def test_post_requires_fields(registry: LocationRegistry) -> None:
    view = SavedLocationListView.as_view(registry=registry)
    request = factory.post("/api/weather/locations", {"name": "Paris", "lat": 48.8566}, format="json")

    response = view(request)

    assert response.status_code == 400
    assert response.data["message"] == "Name, coordinates, and country are required"
    assert set(response.data["errors"]) == {"lon", "country"}
    assert len(registry) == 0


def test_post_rejects_out_of_range_coordinates(registry: LocationRegistry) -> None:
    view = SavedLocationListView.as_view(registry=registry)
    request = factory.post("/api/weather/locations", {**PARIS, "lat": 123.0}, format="json")

    response = view(request)

    assert response.status_code == 400
    assert "lat" in response.data["errors"]


def test_post_rejects_boolean_coordinates(registry: LocationRegistry) -> None:
    view = SavedLocationListView.as_view(registry=registry)
    request = factory.post(
        "/api/weather/locations", {**PARIS, "lat": True, "lon": False}, format="json"
    )

    response = view(request)

    assert response.status_code == 400
    assert set(response.data["errors"]) == {"lat", "lon"}
    assert len(registry) == 0


def test_post_keeps_optional_state(registry: LocationRegistry) -> None:
    view = SavedLocationListView.as_view(registry=registry)
    payload = {"name": "Austin", "lat": 30.2672, "lon": -97.7431, "country": "US", "state": "Texas"}

    response = view(factory.post("/api/weather/locations", payload, format="json"))

    assert response.status_code == 201
    assert response.data["state"] == "Texas"


def test_post_without_snapshot_when_provider_fails(registry: LocationRegistry, fake_provider) -> None:
    fake_provider.fail_all = True
    view = SavedLocationListView.as_view(registry=registry)

    response = view(factory.post("/api/weather/locations", PARIS, format="json"))

    assert response.status_code == 201
    assert "current" not in response.data


def test_list_returns_entries_when_refresh_fails(registry: LocationRegistry, fake_provider) -> None:
    fake_provider.fail_all = True
    view = SavedLocationListView.as_view(registry=registry)
    view(factory.post("/api/weather/locations", PARIS, format="json"))

    response = view(factory.get("/api/weather/locations"))

    assert response.status_code == 200
    assert [entry["name"] for entry in response.data] == ["Paris"]
    assert "current" not in response.data[0]


def test_delete_unknown_id(registry: LocationRegistry) -> None:
    view = SavedLocationDetailView.as_view(registry=registry)

    response = view(factory.delete("/api/weather/locations/nope"), location_id="nope")

    assert response.status_code == 404
