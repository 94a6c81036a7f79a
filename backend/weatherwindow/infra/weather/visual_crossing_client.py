from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from weatherwindow.domain.models import RequestDescriptor
from weatherwindow.errors import MalformedResponse, TransportError

logger = logging.getLogger(__name__)

_BODY_EXCERPT = 200


class VisualCrossingClient:
    def __init__(self, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, descriptor: RequestDescriptor) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(descriptor.url, params=dict(descriptor.parameters))
        except httpx.HTTPError as exc:
            raise TransportError(f"request for {descriptor.location_label!r} failed: {exc}") from exc
        if resp.is_error:
            excerpt = resp.text[:_BODY_EXCERPT] or resp.reason_phrase
            raise TransportError(f"API error {resp.status_code}: {excerpt}", status_code=resp.status_code)
        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedResponse(f"response body is not JSON: {exc}") from exc
