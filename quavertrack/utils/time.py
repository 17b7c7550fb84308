"""Time helper utilities."""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pandas as pd


MS_PER_SECOND = 1_000
MS_PER_DAY = 1_000 * 60 * 60 * 24
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_ms(ts: datetime) -> int:
    """Epoch milliseconds; naive datetimes are read as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (ts - EPOCH) // timedelta(milliseconds=1)


def from_ms(ts_ms: int | float) -> datetime:
    return datetime.fromtimestamp(ts_ms / MS_PER_SECOND, tz=timezone.utc)


def parse_timestamp_ms(value: object) -> int:
    """Convert an ISO string, datetime or epoch-ms number to epoch milliseconds.

    The tracker backend serialises ``NaiveDateTime`` columns without an
    offset; those are UTC.
    """

    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        return to_ms(value)
    if isinstance(value, str) and value.strip():
        try:
            parsed = pd.Timestamp(value.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
        if parsed is pd.NaT:
            raise ValueError(f"Invalid timestamp: {value!r}")
        if parsed.tzinfo is None:
            parsed = parsed.tz_localize("UTC")
        return int(parsed.value // 1_000_000)
    raise ValueError(f"Invalid timestamp: {value!r}")
