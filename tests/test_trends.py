from __future__ import annotations

import pytest

from quavertrack.config import Settings
from quavertrack.meta import Mode
from quavertrack.services.records import StatsUpdate
from quavertrack.services.trends import METRICS, build_trend_chart, get_metric, metric_series, stats_frame
from quavertrack.utils.time import MS_PER_DAY


BASE_TS = 1_600_000_000_000


def make_update(day: int, global_rank: int, rating: float) -> StatsUpdate:
    return StatsUpdate(
        recorded_at=BASE_TS + day * MS_PER_DAY,
        mode=Mode.K4,
        global_rank=global_rank,
        overall_performance_rating=rating,
    )


@pytest.fixture()
def history() -> list[StatsUpdate]:
    return [
        make_update(0, 9000, 40.0),
        make_update(10, 8000, 42.0),
        make_update(20, 7000, 45.0),
        make_update(30, 7500, 44.0),
    ]


def test_rank_metrics_are_inverted() -> None:
    assert get_metric("global_rank").inverse
    assert get_metric("country_rank").inverse
    assert not get_metric("play_count").inverse
    with pytest.raises(KeyError):
        get_metric("pp")


def test_stats_frame_is_indexed_by_time(history: list[StatsUpdate]) -> None:
    frame = stats_frame(list(reversed(history)))
    assert frame.index.is_monotonic_increasing
    assert list(frame["global_rank"]) == [9000, 8000, 7000, 7500]
    assert stats_frame([]).empty


def test_metric_series_points(history: list[StatsUpdate]) -> None:
    series = metric_series(history, "overall_performance_rating")
    assert series == [
        (BASE_TS, 40.0),
        (BASE_TS + 10 * MS_PER_DAY, 42.0),
        (BASE_TS + 20 * MS_PER_DAY, 45.0),
        (BASE_TS + 30 * MS_PER_DAY, 44.0),
    ]
    assert metric_series([], "global_rank") == []


def test_trend_chart_axis_from_full_history(history: list[StatsUpdate]) -> None:
    chart = build_trend_chart(history, "global_rank", settings=Settings())
    assert chart["title"] == "Global Rank"
    assert chart["inverse"] is True
    assert chart["y_axis"]["min"] == pytest.approx(7000 - 100)
    assert chart["y_axis"]["max"] == pytest.approx(9000 + 100)
    assert chart["series"][0]["data"][0] == [BASE_TS, 9000.0]


def test_trend_chart_axis_follows_zoom(history: list[StatsUpdate]) -> None:
    # 30 day range: the window 60-100% plus a day of padding keeps days 20 and 30.
    chart = build_trend_chart(history, "global_rank", 60, 100, settings=Settings())
    assert chart["window"]["min"] == 7000
    assert chart["window"]["max"] == 7500


def test_trend_chart_without_history() -> None:
    chart = build_trend_chart([], "play_count", settings=Settings())
    assert chart["y_axis"] == {"min": 0.0, "max": 0.0}
    assert chart["series"][0]["data"] == []


def test_every_metric_is_a_stats_field() -> None:
    fields = set(StatsUpdate.__dataclass_fields__)
    assert set(METRICS) <= fields
