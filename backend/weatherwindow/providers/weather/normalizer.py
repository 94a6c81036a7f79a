from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from weatherwindow.domain.formatting import PLACEHOLDER, is_number
from weatherwindow.domain.models import NormalizedResponse, Sample
from weatherwindow.errors import MalformedResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


def normalize_response(body: Any, *, fallback_address: Optional[str] = None) -> NormalizedResponse:
    """Flatten a Visual Crossing timeline body into one sorted sample sequence.

    The body must expose a ``days`` list whose buckets hold ``hours`` lists;
    anything else is a :class:`MalformedResponse`. Hour entries without a
    numeric ``datetimeEpoch`` are dropped, and a body with no usable hour at all
    yields an empty ``samples`` tuple rather than an error.
    """
    if not isinstance(body, Mapping):
        raise MalformedResponse(f"expected a JSON object, got {type(body).__name__}")
    days = body.get("days")
    if not isinstance(days, list):
        raise MalformedResponse("response has no 'days' collection")

    collected: List[Sample] = []
    dropped = 0
    for day_index, day in enumerate(days):
        if not isinstance(day, Mapping):
            raise MalformedResponse(f"day bucket {day_index} is not an object")
        hours = day.get("hours", [])
        if hours is None:
            hours = []
        if not isinstance(hours, list):
            raise MalformedResponse(f"'hours' of day bucket {day_index} is not a list")
        for entry in hours:
            sample = _to_sample(entry)
            if sample is None:
                dropped += 1
                continue
            collected.append(sample)
    if dropped:
        logger.debug("dropped %d hour entries without a numeric datetimeEpoch", dropped)

    # sorted() is stable: equal epochs keep day order, then hour order
    collected = sorted(collected, key=lambda s: s.epoch_seconds)

    return NormalizedResponse(
        timezone_name=_timezone_name(body),
        display_address=_display_address(body, fallback_address),
        anchor=_to_sample(body.get("currentConditions")),
        samples=tuple(collected),
    )


def _to_sample(entry: Any) -> Optional[Sample]:
    if not isinstance(entry, Mapping):
        return None
    epoch = entry.get("datetimeEpoch")
    if not is_number(epoch):
        return None
    return Sample(
        epoch_seconds=_epoch(epoch),
        temperature=_number(entry.get("temp")),
        wind_speed=_number(entry.get("windspeed")),
        precip_probability=_number(entry.get("precipprob")),
        conditions_text=_text(entry.get("conditions")),
        icon_code=_text(entry.get("icon")),
        datetime_label=_text(entry.get("datetime")),
    )


def _epoch(value: float) -> Union[int, float]:
    # fractional epochs stay as-is so window boundaries compare the exact instant
    if isinstance(value, int) or value.is_integer():
        return int(value)
    return value


def _number(value: Any) -> Optional[float]:
    return value if is_number(value) else None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _timezone_name(body: Mapping) -> str:
    tz = body.get("timezone")
    if isinstance(tz, str) and tz.strip():
        return tz
    return DEFAULT_TIMEZONE


def _display_address(body: Mapping, fallback: Optional[str]) -> str:
    for key in ("resolvedAddress", "address"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return fallback or PLACEHOLDER
