from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from enum import Enum
from functools import lru_cache
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

PLACEHOLDER = "—"

HOUR_FORMAT = "%a %H:%M"
AS_OF_FORMAT = "%a, %b %d, %Y %H:%M"


class UnitSystem(str, Enum):
    METRIC = "metric"
    US = "us"
    UK = "uk"


TEMPERATURE_UNITS = {
    UnitSystem.METRIC: "°C",
    UnitSystem.US: "°F",
    UnitSystem.UK: "°C",
}

# Visual Crossing's "uk" group reports temperatures in Celsius but wind in mph.
WIND_SPEED_UNITS = {
    UnitSystem.METRIC: "kph",
    UnitSystem.US: "mph",
    UnitSystem.UK: "mph",
}


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_temperature(value: Any, unit_system: UnitSystem) -> str:
    if not is_number(value):
        return PLACEHOLDER
    return f"{round_half_up(value)}{TEMPERATURE_UNITS[UnitSystem(unit_system)]}"


def format_wind_speed(value: Any, unit_system: UnitSystem) -> str:
    if not is_number(value):
        return PLACEHOLDER
    return f"{round_half_up(value)} {WIND_SPEED_UNITS[UnitSystem(unit_system)]}"


def format_precip_probability(value: Any) -> str:
    if not is_number(value):
        return PLACEHOLDER
    return f"{round_half_up(value)}%"


def format_conditions(text: Any) -> str:
    if not isinstance(text, str) or not text:
        return PLACEHOLDER
    return text


@lru_cache(maxsize=64)
def resolve_timezone(name: Optional[str]) -> tzinfo:
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def _localize(epoch_seconds: float, tz_name: Optional[str]) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(epoch_seconds, tz=resolve_timezone(tz_name))
    except (OverflowError, OSError, ValueError):
        return None


def format_hour(epoch_seconds: Any, tz_name: Optional[str]) -> str:
    """Weekday and time of day, e.g. ``Mon 14:00``, in the location's timezone."""
    if not is_number(epoch_seconds):
        return PLACEHOLDER
    local = _localize(epoch_seconds, tz_name)
    if local is None:
        return PLACEHOLDER
    return local.strftime(HOUR_FORMAT)


def format_as_of(epoch_seconds: Any, tz_name: Optional[str], now: Optional[datetime] = None) -> str:
    """Full date and time of an observation.

    Falls back to ``now`` (or the current instant) when the epoch is missing,
    so the header always shows something meaningful.
    """
    if is_number(epoch_seconds):
        local = _localize(epoch_seconds, tz_name)
    else:
        local = None
    if local is None:
        reference = now or datetime.now(timezone.utc)
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)
        local = reference.astimezone(resolve_timezone(tz_name))
    return local.strftime(AS_OF_FORMAT)
