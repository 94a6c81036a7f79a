from __future__ import annotations

import asyncio
import logging
from typing import Optional

from weatherwindow.config import DEFAULT_GEOLOCATION_TIMEOUT, Settings
from weatherwindow.domain.models import Coordinates, RequestDescriptor
from weatherwindow.errors import InvalidInput, LocationUnavailable, PositionDenied
from weatherwindow.providers.location.base import GeolocationProvider
from weatherwindow.providers.location.fixed import FixedPositionProvider
from weatherwindow.providers.location.ip_lookup import IpGeolocationProvider
from weatherwindow.providers.weather.query_builder import QueryBuilder

logger = logging.getLogger(__name__)


def default_geolocation(settings: Settings) -> GeolocationProvider:
    """Configured coordinates when present, otherwise an IP-based lookup."""
    position = settings.default_position
    if position is not None:
        return FixedPositionProvider(*position)
    return IpGeolocationProvider()


class LocationResolver:
    """Turns a single position fix into a weather request.

    Only one lookup runs at a time: callers arriving while a lookup is in
    flight share its result. A dispatched lookup is never cancelled; it ends
    with a fix or after ``timeout`` seconds.
    """

    def __init__(
        self,
        provider: Optional[GeolocationProvider],
        query_builder: QueryBuilder,
        timeout: float = DEFAULT_GEOLOCATION_TIMEOUT,
    ):
        self.provider = provider
        self.query_builder = query_builder
        self.timeout = timeout
        self._pending: Optional[asyncio.Future] = None

    @property
    def supported(self) -> bool:
        return self.provider is not None

    async def locate(self) -> Coordinates:
        if self.provider is None:
            raise LocationUnavailable(LocationUnavailable.UNSUPPORTED)
        if self._pending is None or self._pending.done():
            self._pending = asyncio.ensure_future(self._locate_once(self.provider))
        return await asyncio.shield(self._pending)

    async def resolve(self) -> RequestDescriptor:
        position = await self.locate()
        try:
            return self.query_builder.for_coordinates(position.latitude, position.longitude)
        except InvalidInput as exc:
            raise LocationUnavailable(LocationUnavailable.ERROR, str(exc)) from exc

    async def _locate_once(self, provider: GeolocationProvider) -> Coordinates:
        try:
            return await asyncio.wait_for(provider.current_position(), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.info("geolocation timed out after %.1fs", self.timeout)
            raise LocationUnavailable(LocationUnavailable.TIMEOUT) from exc
        except (PositionDenied, PermissionError) as exc:
            logger.info("geolocation denied: %s", exc)
            raise LocationUnavailable(LocationUnavailable.DENIED) from exc
        except Exception as exc:
            logger.warning("geolocation failed: %s", exc, exc_info=True)
            raise LocationUnavailable(LocationUnavailable.ERROR, str(exc)) from exc
