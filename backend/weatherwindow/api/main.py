from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weatherwindow.api.routers import weather
from weatherwindow.config import Settings
from weatherwindow.infra.weather.visual_crossing_client import VisualCrossingClient
from weatherwindow.providers.location.base import GeolocationProvider
from weatherwindow.providers.weather.base import WeatherProvider
from weatherwindow.providers.weather.visual_crossing import VisualCrossingWeatherProvider
from weatherwindow.providers.weather.query_builder import QueryBuilder
from weatherwindow.services.location_resolver import LocationResolver, default_geolocation


def create_app(
    settings: Optional[Settings] = None,
    *,
    provider: Optional[WeatherProvider] = None,
    geolocation: Optional[GeolocationProvider] = None,
) -> FastAPI:
    app = FastAPI(title="Weather Window API", version="0.1.0")
    settings = settings or Settings.from_env()
    app.state.settings = settings
    app.state.weather_provider = provider or VisualCrossingWeatherProvider(
        VisualCrossingClient(timeout=settings.http_timeout)
    )
    app.state.geolocation = geolocation or default_geolocation(settings)
    # one resolver per app so concurrent requests share a single outstanding lookup
    app.state.location_resolver = LocationResolver(
        app.state.geolocation, QueryBuilder(settings), timeout=settings.geolocation_timeout
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(weather.router, prefix="/api")
    return app


app = create_app()
