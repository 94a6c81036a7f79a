from __future__ import annotations

ANCHOR = 1_000_000_000


def hour(epoch, **fields):
    payload = {"datetimeEpoch": epoch, "temp": 18.4, "windspeed": 12.0, "precipprob": 10.0}
    payload.update(fields)
    return payload


def timeline_body(days=None, current=None, **extra):
    body = {
        "timezone": "UTC",
        "resolvedAddress": "Manila, Metro Manila, Philippines",
        "address": "Manila, PH",
        "currentConditions": current if current is not None else hour(ANCHOR, conditions="Clear", icon="clear-day"),
        "days": days
        if days is not None
        else [
            {"hours": [hour(ANCHOR - 86400), hour(ANCHOR - 3600)]},
            {"hours": [hour(ANCHOR), hour(ANCHOR + 3600), hour(ANCHOR + 86400)]},
        ],
    }
    body.update(extra)
    return body
