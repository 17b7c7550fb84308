"""Value-range analysis of a time series restricted to a chart zoom window.

Trend charts size their value axis from the points that are actually visible.
The zoom window arrives as start/end percentages of the full timestamp range
and is widened by one day on either side so a chart always shows a little
more context than the raw selection.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Sequence, Tuple

from ..utils.time import MS_PER_DAY, to_ms

TimePoint = Tuple[int, float]

# An empty series reports a first point after its last one, so any
# "is this in range" comparison fails without a separate null check.
FAR_FUTURE: TimePoint = (to_ms(datetime(3000, 4, 20, tzinfo=timezone.utc)), 0.0)
FAR_PAST: TimePoint = (to_ms(datetime(1900, 4, 20, tzinfo=timezone.utc)), 0.0)

DEFAULT_OFFSET_RATIO = 0.05


@dataclass(slots=True, frozen=True)
class WindowStats:
    min: float
    max: float
    first: TimePoint
    last: TimePoint
    offset: float

    @property
    def empty(self) -> bool:
        return self.last[0] < self.first[0]

    def axis_bounds(self) -> Tuple[float, float]:
        """Axis extent with the offset applied above and below."""

        return self.min - self.offset, self.max + self.offset

    def as_dict(self) -> Dict[str, object]:
        axis_min, axis_max = self.axis_bounds()
        return {
            "min": self.min,
            "max": self.max,
            "first": {"t": self.first[0], "v": self.first[1]},
            "last": {"t": self.last[0], "v": self.last[1]},
            "offset": self.offset,
            "axis": {"min": axis_min, "max": axis_max},
        }


def window_padding(time_range_ms: float, padding_ms: float = MS_PER_DAY) -> float | None:
    """Padding as a percentage of ``time_range_ms``; ``None`` for a zero range."""

    if time_range_ms == 0:
        return None
    return abs(padding_ms / time_range_ms) * 100


def zoom_bounds(
    first_ts: int,
    time_range_ms: float,
    zoom_start: float,
    zoom_end: float,
    padding_pct: float,
) -> Tuple[int, int]:
    """Absolute timestamps of the padded zoom window, truncated to whole milliseconds."""

    start_pct = max(zoom_start - padding_pct, 0.0)
    end_pct = min(zoom_end + padding_pct, 100.0)
    return (
        math.trunc(first_ts + start_pct * time_range_ms / 100),
        math.trunc(first_ts + end_pct * time_range_ms / 100),
    )


def visible_points(
    series: Sequence[TimePoint],
    zoom_start: float = 0.0,
    zoom_end: float = 100.0,
    *,
    padding_ms: float = MS_PER_DAY,
) -> List[TimePoint]:
    """Points of ``series`` inside the padded zoom window.

    A series without a time range (one point, or every point at the same
    instant) is returned whole.
    """

    if not series:
        return []
    first_ts = series[0][0]
    time_range_ms = series[-1][0] - first_ts
    padding_pct = window_padding(time_range_ms, padding_ms)
    if padding_pct is None:
        return list(series)
    start_ts, end_ts = zoom_bounds(first_ts, time_range_ms, zoom_start, zoom_end, padding_pct)
    return [point for point in series if start_ts <= point[0] <= end_ts]


def analyze_time_series(
    series: Sequence[TimePoint],
    zoom_start: float = 0.0,
    zoom_end: float = 100.0,
    *,
    padding_ms: float = MS_PER_DAY,
    offset_ratio: float = DEFAULT_OFFSET_RATIO,
) -> WindowStats:
    """Compute the value range of the visible part of ``series``.

    Args:
        series: ``(timestamp_ms, value)`` pairs sorted by timestamp.
        zoom_start: Start of the visible window, percent of the full range.
        zoom_end: End of the visible window, percent of the full range.
        padding_ms: Extra time shown on each side of the zoom window.
        offset_ratio: Fraction of ``max - min`` added above and below when
            sizing an axis.

    Returns:
        ``WindowStats`` with ``min == max == 0`` when no point is visible.
    """

    first = tuple(series[0]) if series else FAR_FUTURE
    last = tuple(series[-1]) if series else FAR_PAST

    values = [float(value) for _, value in visible_points(series, zoom_start, zoom_end, padding_ms=padding_ms)]
    low = min(values) if values else 0.0
    high = max(values) if values else 0.0

    return WindowStats(
        min=low,
        max=high,
        first=first,  # type: ignore[arg-type]
        last=last,  # type: ignore[arg-type]
        offset=offset_ratio * (high - low),
    )
