from __future__ import annotations

from typing import Protocol

from weatherwindow.domain.models import Coordinates


class GeolocationProvider(Protocol):
    """Contract for "where am I" capabilities.

    ``current_position`` resolves to a single fix. Implementations raise
    :class:`weatherwindow.errors.PositionDenied` (or ``PermissionError``) when
    the user refuses; any other exception counts as the position being
    unavailable. Timeouts are enforced by the caller.
    """

    async def current_position(self) -> Coordinates:
        raise NotImplementedError
