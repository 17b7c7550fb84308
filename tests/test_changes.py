from __future__ import annotations

import pytest

from quavertrack.config import Settings
from quavertrack.errors import UpdateStatusError, describe_update_status
from quavertrack.meta import Mode
from quavertrack.services.changes import (
    CHANGE_FIELDS,
    FIRST_UPDATE_MESSAGE,
    ChangeCell,
    format_time_diff_seconds,
    summarize_update,
)
from quavertrack.services.records import StatsUpdate, UpdateData


def snapshot(recorded_at: int, mode: Mode = Mode.K4, **values) -> StatsUpdate:
    return StatsUpdate(recorded_at=recorded_at, mode=mode, **values)


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (-3 * 86_400, "3 days ago"),
        (-86_400, "24 hours ago"),
        (-7_200, "2 hours ago"),
        (-300, "5 minutes ago"),
        (-90, "90 seconds ago"),
        (-1, "1 second ago"),
        (300, "in 5 minutes"),
        (-2.5 * 86_400, "2.5 days ago"),
        (0.04, "0 seconds ago"),
        (0, "0 seconds ago"),
    ],
)
def test_time_diff_text(seconds: float, expected: str) -> None:
    assert format_time_diff_seconds(seconds) == expected


def test_change_direction_respects_inverted_fields() -> None:
    assert ChangeCell("Global Rank", "global_rank", 100, 90, invert=True).direction == "better"
    assert ChangeCell("Global Rank", "global_rank", 90, 100, invert=True).direction == "worse"
    assert ChangeCell("Playcount", "play_count", 10, 12).direction == "better"
    assert ChangeCell("Playcount", "play_count", 12, 12).direction == "same"
    assert ChangeCell("Playcount", "play_count", 10, 12).diff == 2


def test_summary_states() -> None:
    assert summarize_update(None, None, Mode.K4)["status"] == "loading"

    failed = summarize_update(None, UpdateStatusError(429), Mode.K4)
    assert failed["status"] == "error"
    assert failed["message"] == describe_update_status(429)

    update = UpdateData(stats_4k=snapshot(1_000), stats_7k=snapshot(1_000, Mode.K7))
    first = summarize_update(None, update, Mode.K4)
    assert first == {"status": "first_update", "message": FIRST_UPDATE_MESSAGE}


def test_summary_uses_selected_mode() -> None:
    day_ms = 86_400_000
    last = snapshot(0, Mode.K7, global_rank=500, play_count=10, overall_accuracy=90.0)
    update = UpdateData(
        stats_4k=snapshot(3 * day_ms, global_rank=1, play_count=999),
        stats_7k=snapshot(3 * day_ms, Mode.K7, global_rank=450, play_count=10, overall_accuracy=89.5),
    )
    settings = Settings()
    summary = summarize_update(last, update, Mode.K7, settings=settings)

    assert summary["status"] == "ready"
    assert summary["mode"] == "7k"
    assert summary["since"] == "3 days ago"
    changes = {cell["field"]: cell for cell in summary["changes"]}
    assert [cell["field"] for cell in summary["changes"]] == [field for _, field, _ in CHANGE_FIELDS]
    assert changes["global_rank"]["diff"] == -50
    assert changes["global_rank"]["direction"] == "better"
    assert changes["global_rank"]["color"] == settings.ui.diff_colors.increase
    assert changes["play_count"]["direction"] == "same"
    assert changes["overall_accuracy"]["direction"] == "worse"
    assert changes["overall_accuracy"]["color"] == settings.ui.diff_colors.decrease


@pytest.mark.parametrize(
    ("status", "fragment"),
    [(404, "not found"), (429, "too fast"), (500, "server"), (418, "unknown")],
)
def test_status_messages(status: int, fragment: str) -> None:
    assert fragment in describe_update_status(status)
    error = UpdateStatusError(status)
    assert error.status == status
    assert error.not_found is (status == 404)
