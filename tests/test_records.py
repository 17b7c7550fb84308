from __future__ import annotations

import pytest

from quavertrack.meta import Mode
from quavertrack.services.records import (
    parse_maps,
    parse_score,
    parse_scores_response,
    parse_stats_history,
    parse_stats_update,
    parse_update_data,
)
from quavertrack.utils.time import parse_timestamp_ms


def stats_row(recorded_at: str = "2020-08-08T21:50:39.855", mode: int = 1, **overrides) -> dict:
    row = {
        "id": 4,
        "user_id": 19250,
        "recorded_at": recorded_at,
        "mode": mode,
        "total_score": 133582330,
        "ranked_score": 67926257,
        "overall_accuracy": 89.57,
        "overall_performance_rating": 50.27,
        "play_count": 293,
        "fail_count": 80,
        "max_combo": 503,
        "total_marv": 51038,
        "total_miss": 6688,
        "global_rank": 7961,
        "country_rank": 1889,
        "multiplayer_win_rank": 4833,
    }
    row.update(overrides)
    return row


def score_row(**overrides) -> dict:
    row = {
        "id": 11,
        "user_id": 19250,
        "time": "2020-08-08T21:50:39",
        "mode": 1,
        "mods_string": "1.1x",
        "performance_rating": 12.5,
        "personal_best": True,
        "accuracy": 96.2,
        "grade": "S",
        "count_marv": 800,
        "total_miss": 3,
        "map_id": 5,
    }
    row.update(overrides)
    return row


def test_timestamps_are_parsed_as_utc_milliseconds() -> None:
    assert parse_timestamp_ms("2020-08-08T21:50:39.855") == 1596923439855
    assert parse_timestamp_ms("2020-08-08T21:50:39.855Z") == 1596923439855
    assert parse_timestamp_ms("2020-08-08T23:50:39.855+02:00") == 1596923439855
    assert parse_timestamp_ms(1596923439855) == 1596923439855
    with pytest.raises(ValueError):
        parse_timestamp_ms("not a timestamp")
    with pytest.raises(ValueError):
        parse_timestamp_ms(True)
    with pytest.raises(ValueError):
        parse_timestamp_ms(None)
    with pytest.raises(ValueError):
        parse_timestamp_ms(float("inf"))
    with pytest.raises(ValueError):
        parse_timestamp_ms(float("nan"))


def test_stats_update_fields() -> None:
    update = parse_stats_update(stats_row())
    assert update.recorded_at == 1596923439855
    assert update.mode is Mode.K4
    assert update.global_rank == 7961
    assert update.overall_performance_rating == pytest.approx(50.27)
    assert update.total_marv == 51038
    assert update.total_miss == 6688
    assert update.multiplayer_wins == 0
    assert update.as_dict()["mode"] == 1


def test_stats_update_requires_timestamp_and_mode() -> None:
    row = stats_row()
    del row["recorded_at"]
    with pytest.raises(ValueError):
        parse_stats_update(row)
    with pytest.raises(ValueError):
        parse_stats_update(stats_row(mode=5))
    with pytest.raises(ValueError):
        parse_stats_update(["not", "a", "mapping"])


def test_stats_history_not_found_and_shape() -> None:
    assert parse_stats_history(None) is None
    assert parse_stats_history([]) == []
    history = parse_stats_history([stats_row(), stats_row("2020-08-09T10:00:00", mode=2)])
    assert [update.mode for update in history] == [Mode.K4, Mode.K7]
    with pytest.raises(ValueError):
        parse_stats_history({"recorded_at": "2020-08-08"})


def test_score_accepts_both_judgement_spellings() -> None:
    score = parse_score(score_row())
    assert score.count_marv == 800
    assert score.count_miss == 3
    assert score.grade == "S"
    assert score.map_id == 5
    assert score.personal_best is True
    assert score.mods_string == "1.1x"


def test_score_reads_nested_map_id() -> None:
    row = score_row(map={"id": 42, "title": "Ghost"})
    del row["map_id"]
    assert parse_score(row).map_id == 42


def test_score_requires_grade() -> None:
    row = score_row()
    del row["grade"]
    with pytest.raises(ValueError):
        parse_score(row)


def test_maps_keyed_by_string_ids() -> None:
    maps = parse_maps({"5": {"id": 5, "artist": "Camellia", "title": "Ghost"}})
    assert list(maps) == [5]
    assert maps[5].display_name == "Camellia - Ghost"
    assert parse_maps(None) == {}
    assert list(parse_maps([{"id": 9, "title": "Untitled"}])) == [9]
    with pytest.raises(ValueError):
        parse_maps("5")


def test_scores_response() -> None:
    score_set = parse_scores_response({"scores": [score_row()], "maps": {"5": {"id": 5}}})
    assert len(score_set.scores) == 1
    assert score_set.maps[5].display_name == "Map #5"


def test_update_data() -> None:
    update = parse_update_data(
        {
            "stats_4k": stats_row(),
            "stats_7k": stats_row(mode=2, global_rank=38698),
            "maps": {},
            "new_scores": [score_row(), score_row(mode=2, grade="A")],
        }
    )
    assert update.stats_for(Mode.K7).global_rank == 38698
    assert update.stats_for(Mode.K4).global_rank == 7961
    assert [score.mode for score in update.new_scores] == [Mode.K4, Mode.K7]

    with pytest.raises(ValueError):
        parse_update_data({"stats_4k": stats_row()})
