from __future__ import annotations

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from weatherwindow.api.main import create_app
from weatherwindow.domain.models import Coordinates
from weatherwindow.errors import PositionDenied
from weatherwindow.infra.weather.visual_crossing_client import VisualCrossingClient
from weatherwindow.providers.location.fixed import FixedPositionProvider
from weatherwindow.providers.weather.visual_crossing import VisualCrossingWeatherProvider
from weatherwindow.tests.factories import ANCHOR, timeline_body


class _DeniedGeolocation:
    async def current_position(self) -> Coordinates:
        raise PositionDenied()


class _SlowGeolocation:
    def __init__(self):
        self.calls = 0

    async def current_position(self) -> Coordinates:
        self.calls += 1
        await asyncio.sleep(0.02)
        return Coordinates(14.5995, 120.9842)


def _build_api_client(settings, handler, geolocation=None):
    client = VisualCrossingClient(timeout=1.0, transport=httpx.MockTransport(handler))
    app = create_app(
        settings,
        provider=VisualCrossingWeatherProvider(client),
        geolocation=geolocation or FixedPositionProvider(14.5995, 120.9842),
    )
    return TestClient(app)


@pytest.fixture()
def requests_seen():
    return []


@pytest.fixture()
def api_client(settings, requests_seen):
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return httpx.Response(200, json=timeline_body())

    with _build_api_client(settings, handler) as client:
        yield client


def test_weather_by_location(api_client):
    response = api_client.get("/api/weather", params={"location": "Manila, PH"})
    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "Manila, PH"
    assert body["unit_system"] == "metric"
    assert body["address"] == "Manila, Metro Manila, Philippines"
    assert [r["epoch_seconds"] for r in body["previous"]["rows"]] == [ANCHOR - 86400, ANCHOR - 3600]
    assert [r["epoch_seconds"] for r in body["next"]["rows"]] == [ANCHOR, ANCHOR + 3600]


def test_weather_by_coordinates(api_client, requests_seen):
    response = api_client.get("/api/weather", params={"lat": 40.7128, "lon": -74.006})
    assert response.status_code == 200
    assert "40.7128%2C-74.006" in requests_seen[0].url.raw_path.decode()


def test_weather_here_uses_geolocation(api_client, requests_seen):
    response = api_client.get("/api/weather/here")
    assert response.status_code == 200
    assert response.json()["query"] == "14.5995,120.9842"


def test_blank_location_returns_422_without_request(api_client, requests_seen):
    response = api_client.get("/api/weather", params={"location": "   "})
    assert response.status_code == 422
    assert response.json()["kind"] == "invalid_input"
    assert requests_seen == []


def test_missing_query_returns_422(api_client):
    response = api_client.get("/api/weather")
    assert response.status_code == 422


def test_out_of_range_latitude_returns_422(api_client):
    response = api_client.get("/api/weather", params={"lat": 95, "lon": 0})
    assert response.status_code == 422


def test_missing_key_returns_503(keyless_settings):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=timeline_body())

    with _build_api_client(keyless_settings, handler) as client:
        response = client.get("/api/weather", params={"location": "Madrid"})
    assert response.status_code == 503
    assert response.json()["kind"] == "configuration"
    assert seen == []


def test_provider_error_returns_502(settings):
    with _build_api_client(settings, lambda request: httpx.Response(401, text="No account found")) as client:
        response = client.get("/api/weather", params={"location": "Madrid"})
    assert response.status_code == 502
    body = response.json()
    assert body["kind"] == "transport"
    assert "No account found" not in body["detail"]


def test_malformed_body_returns_502(settings):
    with _build_api_client(settings, lambda request: httpx.Response(200, json={"oops": True})) as client:
        response = client.get("/api/weather", params={"location": "Madrid"})
    assert response.status_code == 502
    assert response.json()["kind"] == "malformed_response"


def test_denied_geolocation_returns_404(settings):
    handler = lambda request: httpx.Response(200, json=timeline_body())  # noqa: E731
    with _build_api_client(settings, handler, geolocation=_DeniedGeolocation()) as client:
        response = client.get("/api/weather/here")
    assert response.status_code == 404
    assert response.json()["detail"] == "Location permission denied. Enter a location to search."


def test_health(api_client):
    assert api_client.get("/api/health").json() == {"status": "ok"}


def test_concurrent_here_requests_share_one_position_lookup(settings):
    geolocation = _SlowGeolocation()
    client = VisualCrossingClient(
        timeout=1.0, transport=httpx.MockTransport(lambda request: httpx.Response(200, json=timeline_body()))
    )
    app = create_app(settings, provider=VisualCrossingWeatherProvider(client), geolocation=geolocation)

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            return await asyncio.gather(http.get("/api/weather/here"), http.get("/api/weather/here"))

    first, second = asyncio.run(run())
    assert first.status_code == second.status_code == 200
    assert first.json()["query"] == second.json()["query"] == "14.5995,120.9842"
    assert geolocation.calls == 1
