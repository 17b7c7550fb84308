"""Parsing of tracker backend payloads into the records the chart services use."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Mapping, Sequence

from ..meta import Mode
from ..utils.time import parse_timestamp_ms

JUDGEMENTS = ("marv", "perf", "great", "good", "okay", "miss")


@dataclass(slots=True)
class StatsUpdate:
    """Point-in-time aggregate statistics of one player for one mode."""

    recorded_at: int
    mode: Mode
    id: int = 0
    user_id: int = 0
    total_score: int = 0
    ranked_score: int = 0
    overall_accuracy: float = 0.0
    overall_performance_rating: float = 0.0
    play_count: int = 0
    fail_count: int = 0
    max_combo: int = 0
    replays_watched: int = 0
    total_marv: int = 0
    total_perf: int = 0
    total_great: int = 0
    total_good: int = 0
    total_okay: int = 0
    total_miss: int = 0
    total_pauses: int = 0
    multiplayer_wins: int = 0
    multiplayer_losses: int = 0
    multiplayer_ties: int = 0
    global_rank: int = 0
    country_rank: int = 0
    multiplayer_win_rank: int = 0

    def as_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["mode"] = int(self.mode)
        return data


@dataclass(slots=True)
class Score:
    """A single play result. ``grade`` keeps the raw label from the backend."""

    time: int
    mode: Mode
    grade: str
    performance_rating: float
    id: int = 0
    user_id: int = 0
    map_id: int = 0
    mods: int = 0
    mods_string: str = ""
    personal_best: bool = False
    is_donator_score: bool = False
    total_score: int = 0
    accuracy: float = 0.0
    max_combo: int = 0
    count_marv: int = 0
    count_perf: int = 0
    count_great: int = 0
    count_good: int = 0
    count_okay: int = 0
    count_miss: int = 0
    scroll_speed: int = 0
    ratio: float = 0.0


@dataclass(slots=True)
class MapInfo:
    id: int
    mapset_id: int = 0
    md5: str = ""
    artist: str = ""
    title: str = ""
    difficulty_name: str = ""
    creator_id: int = 0
    creator_username: str = ""
    ranked_status: int = 0

    @property
    def display_name(self) -> str:
        name = f"{self.artist} - {self.title}" if self.artist else self.title
        if self.difficulty_name:
            name = f"{name} [{self.difficulty_name}]"
        return name or f"Map #{self.id}"


@dataclass(slots=True)
class ScoreSet:
    """High scores of one player for one mode plus the maps they were set on."""

    scores: List[Score] = field(default_factory=list)
    maps: Dict[int, MapInfo] = field(default_factory=dict)


@dataclass(slots=True)
class UpdateData:
    """What the update trigger returns: fresh snapshots and newly stored scores."""

    stats_4k: StatsUpdate
    stats_7k: StatsUpdate
    maps: Dict[int, MapInfo] = field(default_factory=dict)
    new_scores: List[Score] = field(default_factory=list)

    def stats_for(self, mode: Mode) -> StatsUpdate:
        return self.stats_4k if mode == Mode.K4 else self.stats_7k


def _require_mapping(row: object, kind: str) -> Mapping[str, object]:
    if not isinstance(row, Mapping):
        raise ValueError(f"{kind} must be an object, got {type(row).__name__}")
    return row


def _num(row: Mapping[str, object], *keys: str, default: float = 0.0) -> float:
    for key in keys:
        value = row.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
        if math.isfinite(number):
            return number
    return default


def _int(row: Mapping[str, object], *keys: str, default: int = 0) -> int:
    return int(_num(row, *keys, default=float(default)))


def _str(row: Mapping[str, object], key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value)


def _required(row: Mapping[str, object], key: str, kind: str) -> object:
    value = row.get(key)
    if value is None:
        raise ValueError(f"{kind} is missing required field {key!r}")
    return value


def parse_stats_update(row: object) -> StatsUpdate:
    data = _require_mapping(row, "stats update")
    recorded_at = parse_timestamp_ms(_required(data, "recorded_at", "stats update"))
    mode = Mode.parse(_required(data, "mode", "stats update"))
    counts = {f"total_{name}": _int(data, f"total_{name}", f"count_{name}") for name in JUDGEMENTS}
    return StatsUpdate(
        recorded_at=recorded_at,
        mode=mode,
        id=_int(data, "id"),
        user_id=_int(data, "user_id"),
        total_score=_int(data, "total_score"),
        ranked_score=_int(data, "ranked_score"),
        overall_accuracy=_num(data, "overall_accuracy"),
        overall_performance_rating=_num(data, "overall_performance_rating"),
        play_count=_int(data, "play_count"),
        fail_count=_int(data, "fail_count"),
        max_combo=_int(data, "max_combo"),
        replays_watched=_int(data, "replays_watched"),
        total_pauses=_int(data, "total_pauses"),
        multiplayer_wins=_int(data, "multiplayer_wins"),
        multiplayer_losses=_int(data, "multiplayer_losses"),
        multiplayer_ties=_int(data, "multiplayer_ties"),
        global_rank=_int(data, "global_rank"),
        country_rank=_int(data, "country_rank"),
        multiplayer_win_rank=_int(data, "multiplayer_win_rank"),
        **counts,
    )


def parse_stats_history(rows: Sequence[object] | None) -> List[StatsUpdate] | None:
    """Parse a stats history response; ``None`` means the user was not found."""

    if rows is None:
        return None
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise ValueError("stats history must be a list")
    return [parse_stats_update(row) for row in rows]


def parse_score(row: object) -> Score:
    data = _require_mapping(row, "score")
    counts = {f"count_{name}": _int(data, f"count_{name}", f"total_{name}") for name in JUDGEMENTS}
    map_id = _int(data, "map_id")
    nested_map = data.get("map")
    if not map_id and isinstance(nested_map, Mapping):
        map_id = _int(nested_map, "id")
    return Score(
        time=parse_timestamp_ms(_required(data, "time", "score")),
        mode=Mode.parse(_required(data, "mode", "score")),
        grade=str(_required(data, "grade", "score")),
        performance_rating=_num(data, "performance_rating"),
        id=_int(data, "id"),
        user_id=_int(data, "user_id"),
        map_id=map_id,
        mods=_int(data, "mods"),
        mods_string=_str(data, "mods_string"),
        personal_best=bool(data.get("personal_best") or False),
        is_donator_score=bool(data.get("is_donator_score") or False),
        total_score=_int(data, "total_score"),
        accuracy=_num(data, "accuracy"),
        max_combo=_int(data, "max_combo"),
        scroll_speed=_int(data, "scroll_speed"),
        ratio=_num(data, "ratio"),
        **counts,
    )


def parse_map(row: object) -> MapInfo:
    data = _require_mapping(row, "map")
    return MapInfo(
        id=_int(data, "id"),
        mapset_id=_int(data, "mapset_id"),
        md5=_str(data, "md5"),
        artist=_str(data, "artist"),
        title=_str(data, "title"),
        difficulty_name=_str(data, "difficulty_name"),
        creator_id=_int(data, "creator_id"),
        creator_username=_str(data, "creator_username"),
        ranked_status=_int(data, "ranked_status"),
    )


def parse_maps(raw: object) -> Dict[int, MapInfo]:
    """Parse a ``map id -> map`` lookup; JSON object keys arrive as strings."""

    if raw is None:
        return {}
    maps: Dict[int, MapInfo] = {}
    if isinstance(raw, Mapping):
        for key, value in raw.items():
            info = parse_map(value)
            try:
                map_id = int(key)
            except (TypeError, ValueError):
                map_id = info.id
            maps[map_id] = info
        return maps
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        for value in raw:
            info = parse_map(value)
            maps[info.id] = info
        return maps
    raise ValueError("maps must be an object keyed by map id")


def _parse_scores(raw: object) -> List[Score]:
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise ValueError("scores must be a list")
    return [parse_score(row) for row in raw]


def parse_scores_response(payload: object) -> ScoreSet:
    data = _require_mapping(payload, "scores response")
    return ScoreSet(scores=_parse_scores(data.get("scores")), maps=parse_maps(data.get("maps")))


def parse_update_data(payload: object) -> UpdateData:
    data = _require_mapping(payload, "update response")
    return UpdateData(
        stats_4k=parse_stats_update(_required(data, "stats_4k", "update response")),
        stats_7k=parse_stats_update(_required(data, "stats_7k", "update response")),
        maps=parse_maps(data.get("maps")),
        new_scores=_parse_scores(data.get("new_scores")),
    )
