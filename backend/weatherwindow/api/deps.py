from __future__ import annotations

from fastapi import HTTPException, Request

from weatherwindow.services.weather_service import WeatherService


def get_weather_service(request: Request) -> WeatherService:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=500, detail="Settings not configured")
    return WeatherService(
        settings,
        provider=request.app.state.weather_provider,
        geolocation=request.app.state.geolocation,
        location_resolver=request.app.state.location_resolver,
    )
