"""Trend charts over a player's stats history."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

import pandas as pd

from ..config import Settings, get_settings
from .records import StatsUpdate
from .window import TimePoint, analyze_time_series


@dataclass(slots=True, frozen=True)
class MetricSpec:
    key: str
    title: str
    inverse: bool = False

    def as_dict(self) -> Dict[str, object]:
        return {"key": self.key, "title": self.title, "inverse": self.inverse}


# Ranks improve downwards, so their axes are drawn inverted.
METRICS: Dict[str, MetricSpec] = {
    spec.key: spec
    for spec in (
        MetricSpec("global_rank", "Global Rank", inverse=True),
        MetricSpec("country_rank", "Country Rank", inverse=True),
        MetricSpec("multiplayer_win_rank", "Multiplayer Win Rank", inverse=True),
        MetricSpec("overall_performance_rating", "Overall Performance Rating"),
        MetricSpec("overall_accuracy", "Overall Accuracy"),
        MetricSpec("play_count", "Play Count"),
        MetricSpec("total_score", "Total Score"),
        MetricSpec("ranked_score", "Ranked Score"),
        MetricSpec("max_combo", "Max Combo"),
        MetricSpec("fail_count", "Fail Count"),
    )
}


def get_metric(key: str) -> MetricSpec:
    try:
        return METRICS[key]
    except KeyError:
        raise KeyError(f"Unknown metric: {key}") from None


def stats_frame(history: Sequence[StatsUpdate]) -> pd.DataFrame:
    """Stats history as a frame indexed by ``recorded_at`` (UTC)."""

    if not history:
        return pd.DataFrame(columns=list(METRICS))
    frame = pd.DataFrame([update.as_dict() for update in history])
    frame.index = pd.to_datetime(frame.pop("recorded_at"), unit="ms", utc=True)
    frame.index.name = "recorded_at"
    frame.sort_index(inplace=True, kind="stable")
    return frame


def metric_series(history: Sequence[StatsUpdate], metric: str) -> List[TimePoint]:
    spec = get_metric(metric)
    frame = stats_frame(history)
    if frame.empty:
        return []
    column = pd.to_numeric(frame[spec.key], errors="coerce").dropna()
    return [(int(ts.value // 1_000_000), float(value)) for ts, value in column.items()]


def build_trend_chart(
    history: Sequence[StatsUpdate],
    metric: str,
    zoom_start: float | None = None,
    zoom_end: float | None = None,
    *,
    settings: Settings | None = None,
) -> Dict[str, object]:
    """Series and axis bounds for one metric's trend chart."""

    settings = settings or get_settings()
    chart = settings.chart
    spec = get_metric(metric)
    series = metric_series(history, spec.key)
    stats = analyze_time_series(
        series,
        chart.default_zoom_start if zoom_start is None else zoom_start,
        chart.default_zoom_end if zoom_end is None else zoom_end,
        padding_ms=chart.window_padding_ms,
        offset_ratio=chart.axis_offset_ratio,
    )
    axis_min, axis_max = stats.axis_bounds()
    return {
        "metric": spec.key,
        "title": spec.title,
        "inverse": spec.inverse,
        "y_axis": {"min": axis_min, "max": axis_max},
        "window": stats.as_dict(),
        "series": [{"name": spec.title, "data": [[ts, value] for ts, value in series]}],
    }
