"""Service layer exports for the chart backend."""

from .changes import (
    CHANGE_FIELDS,
    ChangeCell,
    build_change_cells,
    format_time_diff_seconds,
    summarize_update,
)
from .hiscores import (
    CategorySeries,
    PlotPoint,
    ScoreDelta,
    build_hiscores_series,
    decode_delta_origin,
    describe_point,
    encode_delta_origin,
    grade_color,
    resolve_origin,
)
from .records import (
    MapInfo,
    Score,
    ScoreSet,
    StatsUpdate,
    UpdateData,
    parse_maps,
    parse_score,
    parse_scores_response,
    parse_stats_history,
    parse_stats_update,
    parse_update_data,
)
from .trends import METRICS, MetricSpec, build_trend_chart, get_metric, metric_series, stats_frame
from .window import TimePoint, WindowStats, analyze_time_series, visible_points

__all__ = [
    "CHANGE_FIELDS",
    "ChangeCell",
    "build_change_cells",
    "format_time_diff_seconds",
    "summarize_update",
    "CategorySeries",
    "PlotPoint",
    "ScoreDelta",
    "build_hiscores_series",
    "decode_delta_origin",
    "describe_point",
    "encode_delta_origin",
    "grade_color",
    "resolve_origin",
    "MapInfo",
    "Score",
    "ScoreSet",
    "StatsUpdate",
    "UpdateData",
    "parse_maps",
    "parse_score",
    "parse_scores_response",
    "parse_stats_history",
    "parse_stats_update",
    "parse_update_data",
    "METRICS",
    "MetricSpec",
    "build_trend_chart",
    "get_metric",
    "metric_series",
    "stats_frame",
    "TimePoint",
    "WindowStats",
    "analyze_time_series",
    "visible_points",
]
