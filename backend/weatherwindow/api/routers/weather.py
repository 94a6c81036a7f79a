from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from weatherwindow.api.deps import get_weather_service
from weatherwindow.domain.state import Failed, Loaded, ViewState
from weatherwindow.errors import ErrorKind, InvalidInput
from weatherwindow.services.weather_service import WeatherService
from weatherwindow.services.weather_view import build_view

router = APIRouter(tags=["weather"])

ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: 422,
    ErrorKind.CONFIGURATION: 503,
    ErrorKind.TRANSPORT: 502,
    ErrorKind.MALFORMED_RESPONSE: 502,
    ErrorKind.LOCATION_UNAVAILABLE: 404,
}


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/weather")
async def get_weather(
    location: Optional[str] = Query(None, description="Free-form location, e.g. 'Manila, PH'"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    service: WeatherService = Depends(get_weather_service),
):
    if location is not None:
        state = await service.search(location)
    elif lat is not None and lon is not None:
        state = await service.search_coordinates(lat, lon)
    else:
        error = InvalidInput()
        return JSONResponse(status_code=422, content={"detail": error.user_message, "kind": error.kind.value})
    return _render(state, service)


@router.get("/weather/here")
async def get_weather_here(service: WeatherService = Depends(get_weather_service)):
    state = await service.use_my_location()
    return _render(state, service)


def _render(state: ViewState, service: WeatherService):
    if isinstance(state, Failed):
        return JSONResponse(
            status_code=ERROR_STATUS.get(state.kind, 502),
            content={"detail": state.status, "kind": state.kind.value},
        )
    if not isinstance(state, Loaded):
        return JSONResponse(status_code=500, content={"detail": "weather fetch did not complete"})
    view = build_view(state.response, service.settings.unit_system)
    return {
        "query": state.last_query,
        "unit_system": service.settings.unit_system.value,
        **view.to_dict(),
    }
