from __future__ import annotations

import logging
from typing import Optional

from weatherwindow.config import Settings
from weatherwindow.domain.models import RequestDescriptor
from weatherwindow.domain.state import (
    Idle,
    ViewState,
    begin_fetch,
    complete_fetch,
    fail_fetch,
    report_status,
)
from weatherwindow.errors import FETCH_FAILED_MESSAGE, ErrorKind, WeatherError
from weatherwindow.infra.weather.visual_crossing_client import VisualCrossingClient
from weatherwindow.providers.location.base import GeolocationProvider
from weatherwindow.providers.weather.base import WeatherProvider
from weatherwindow.providers.weather.query_builder import QueryBuilder
from weatherwindow.providers.weather.visual_crossing import VisualCrossingWeatherProvider

from .location_resolver import LocationResolver

logger = logging.getLogger(__name__)

LOCATING_MESSAGE = "Requesting your location…"


class WeatherService:
    """Drives search, refresh and geolocation loads through the view state.

    Every public coroutine returns the resulting state and never raises a
    pipeline error; failures end up as :class:`Failed` with the previously
    displayed data kept. A response belonging to an older request than the
    latest dispatched one is discarded.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        provider: Optional[WeatherProvider] = None,
        geolocation: Optional[GeolocationProvider] = None,
        location_resolver: Optional[LocationResolver] = None,
    ):
        self.settings = settings
        self.query_builder = QueryBuilder(settings)
        self.provider = provider or VisualCrossingWeatherProvider(
            VisualCrossingClient(timeout=settings.http_timeout)
        )
        self.location_resolver = location_resolver or LocationResolver(
            geolocation, self.query_builder, timeout=settings.geolocation_timeout
        )
        self.state: ViewState = Idle()

    async def search(self, text: str) -> ViewState:
        try:
            descriptor = self.query_builder.for_location(text)
        except WeatherError as exc:
            return self._reject(exc)
        return await self._load(descriptor)

    async def search_coordinates(self, latitude: float, longitude: float) -> ViewState:
        try:
            descriptor = self.query_builder.for_coordinates(latitude, longitude)
        except WeatherError as exc:
            return self._reject(exc)
        return await self._load(descriptor, silent=True)

    async def refresh(self) -> ViewState:
        last_query = self.state.last_query
        if not last_query:
            return self.state
        try:
            descriptor = self.query_builder.for_location(last_query)
        except WeatherError as exc:
            return self._reject(exc)
        return await self._load(descriptor, silent=True)

    async def use_my_location(self) -> ViewState:
        if self.location_resolver.supported:
            self.state = report_status(self.state, LOCATING_MESSAGE)
        try:
            descriptor = await self.location_resolver.resolve()
        except WeatherError as exc:
            return self._reject(exc)
        return await self._load(descriptor, silent=True)

    async def load_initial(self) -> ViewState:
        """Default view: the caller's own position, when a key is configured."""
        if not self.settings.has_credential:
            return self.state
        return await self.use_my_location()

    async def _load(self, descriptor: RequestDescriptor, *, silent: bool = False) -> ViewState:
        self.state = begin_fetch(self.state, descriptor.location_label or descriptor.endpoint_path, silent=silent)
        generation = self.state.generation
        try:
            response = await self.provider.fetch_timeline(descriptor)
        except WeatherError as exc:
            logger.warning("weather fetch for %r failed: %s", descriptor.location_label, exc, exc_info=exc)
            self.state = fail_fetch(self.state, exc.kind, exc.user_message, generation)
            return self.state
        except Exception:
            logger.exception("unexpected error fetching weather for %r", descriptor.location_label)
            self.state = fail_fetch(self.state, ErrorKind.TRANSPORT, FETCH_FAILED_MESSAGE, generation)
            return self.state
        self.state = complete_fetch(self.state, response, generation)
        return self.state

    def _reject(self, exc: WeatherError) -> ViewState:
        logger.info("request rejected before dispatch: %s", exc)
        self.state = fail_fetch(self.state, exc.kind, exc.user_message)
        return self.state
