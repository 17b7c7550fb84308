"""Per-grade scatter series for a player's high scores.

Historical scores and the scores returned by a just-triggered update are
plotted together. Each point keeps an origin index so a tooltip can find the
full record again without copying the delta into the historical list:

* ``origin >= 0`` is a position in the historical scores,
* ``origin < 0`` is ``-(position + 1)`` in the delta scores.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from ..meta import Grade, Meta, Mode
from ..utils.logging import get_logger
from ..utils.time import from_ms
from .records import MapInfo, Score

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ScoreDelta:
    """Scores recorded by an update, filtered to ``mode`` when plotted."""

    scores: Sequence[Score]
    mode: Mode


@dataclass(slots=True, frozen=True)
class PlotPoint:
    time: int
    rating: float
    origin: int
    marked: bool = False

    @property
    def is_delta(self) -> bool:
        return self.origin < 0

    def as_dict(self, *, marker_symbol: str | None = None, marker_size: int | None = None) -> Dict[str, object]:
        data: Dict[str, object] = {
            "t": self.time,
            "v": self.rating,
            "origin": self.origin,
            "new": self.marked,
        }
        if self.marked and marker_symbol:
            data["symbol"] = marker_symbol
            if marker_size:
                data["symbolSize"] = marker_size
        return data


@dataclass(slots=True)
class CategorySeries:
    grade: Grade
    data: List[PlotPoint] = field(default_factory=list)

    def as_dict(
        self,
        *,
        color: str | None = None,
        marker_symbol: str | None = None,
        marker_size: int | None = None,
    ) -> Dict[str, object]:
        return {
            "grade": self.grade.value,
            "name": self.grade.label,
            "color": color or self.grade.color,
            "data": [
                point.as_dict(marker_symbol=marker_symbol, marker_size=marker_size)
                for point in self.data
            ],
        }


def encode_delta_origin(position: int) -> int:
    if position < 0:
        raise ValueError("delta position must be non-negative")
    return -(position + 1)


def decode_delta_origin(origin: int) -> int:
    if origin >= 0:
        raise ValueError("origin does not refer to a delta score")
    return -(origin + 1)


def _point(score: Score, origin: int, marked: bool = False) -> PlotPoint:
    return PlotPoint(time=score.time, rating=score.performance_rating, origin=origin, marked=marked)


def group_by_grade(historical: Sequence[Score]) -> Dict[Grade, List[PlotPoint]]:
    """Bucket historical scores by grade, keeping their original positions."""

    buckets: Dict[Grade, List[PlotPoint]] = {grade: [] for grade in Meta.iter_grades()}
    for index, score in enumerate(historical):
        grade = Grade.parse(score.grade)
        if grade is None:
            LOGGER.debug("Dropping historical score %s with unknown grade %r", index, score.grade)
            continue
        buckets[grade].append(_point(score, index))
    return buckets


def build_hiscores_series(
    historical: Sequence[Score],
    delta: ScoreDelta | None = None,
) -> List[CategorySeries]:
    """Build one series per grade, always all seven in legend order.

    Delta scores of ``delta.mode`` are appended after the historical points of
    their grade. They are marked only when the grade already had historical
    points; a grade that is new altogether needs no highlight.
    """

    buckets = group_by_grade(historical)

    delta_by_grade: Dict[Grade, List[PlotPoint]] = {grade: [] for grade in Meta.iter_grades()}
    if delta is not None:
        for position, score in enumerate(delta.scores):
            if score.mode != delta.mode:
                continue
            grade = Grade.parse(score.grade)
            if grade is None:
                LOGGER.debug("Dropping new score %s with unknown grade %r", position, score.grade)
                continue
            delta_by_grade[grade].append(_point(score, encode_delta_origin(position)))

    series: List[CategorySeries] = []
    for grade in Meta.iter_grades():
        points = list(buckets[grade])
        had_history = bool(points)
        points.extend(
            PlotPoint(time=point.time, rating=point.rating, origin=point.origin, marked=had_history)
            for point in delta_by_grade[grade]
        )
        series.append(CategorySeries(grade=grade, data=points))
    return series


def resolve_origin(origin: int, historical: Sequence[Score], delta_scores: Sequence[Score] = ()) -> Score:
    """Return the score a plot point was built from."""

    if origin >= 0:
        if origin >= len(historical):
            raise IndexError(f"historical origin {origin} out of range")
        return historical[origin]
    position = decode_delta_origin(origin)
    if position >= len(delta_scores):
        raise IndexError(f"delta origin {origin} out of range")
    return delta_scores[position]


def describe_point(
    origin: int,
    historical: Sequence[Score],
    delta_scores: Sequence[Score],
    maps: Mapping[int, MapInfo],
) -> Dict[str, object]:
    """Tooltip fields for a plotted score."""

    score = resolve_origin(origin, historical, delta_scores)
    map_info = maps.get(score.map_id)
    grade = Grade.parse(score.grade)
    return {
        "origin": origin,
        "is_new": origin < 0,
        "map": map_info.display_name if map_info else f"Map #{score.map_id}",
        "map_id": score.map_id,
        "grade": grade.label if grade else score.grade,
        "performance_rating": score.performance_rating,
        "accuracy": score.accuracy,
        "mods": score.mods_string or "None",
        "max_combo": score.max_combo,
        "time": from_ms(score.time).isoformat(),
    }


def grade_color(grade: Grade, overrides: Mapping[str, str] | None = None) -> str:
    if overrides:
        return overrides.get(grade.value, grade.color)
    return grade.color
