"""Summary of what changed between a player's last snapshot and a fresh update."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..config import Settings, get_settings
from ..errors import UpdateStatusError
from ..meta import Mode
from .records import StatsUpdate, UpdateData

FIRST_UPDATE_MESSAGE = "This is your first update; go play a map or two and then refresh this page!"

# (label, field, lower is better)
CHANGE_FIELDS: Tuple[Tuple[str, str, bool], ...] = (
    ("Global Rank", "global_rank", True),
    ("Overall Performance Rating", "overall_performance_rating", False),
    ("Country Rank", "country_rank", True),
    ("Multiplayer Win Rank", "multiplayer_win_rank", True),
    ("Playcount", "play_count", False),
    ("Overall Accuracy", "overall_accuracy", False),
    ("Total Score", "total_score", False),
    ("Ranked Score", "ranked_score", False),
)

_TIME_UNITS: Tuple[Tuple[float, float, str], ...] = (
    (24 * 60 * 60 * 1.5, 24 * 60 * 60, "day"),
    (60 * 60 * 1.5, 60 * 60, "hour"),
    (60 * 2, 60, "minute"),
)


@dataclass(slots=True, frozen=True)
class ChangeCell:
    label: str
    field: str
    before: float
    after: float
    invert: bool = False

    @property
    def diff(self) -> float:
        return self.after - self.before

    @property
    def direction(self) -> str:
        if self.after == self.before:
            return "same"
        improved = self.before > self.after if self.invert else self.after > self.before
        return "better" if improved else "worse"

    def as_dict(self, colors: Dict[str, str] | None = None) -> Dict[str, object]:
        data: Dict[str, object] = {
            "label": self.label,
            "field": self.field,
            "before": self.before,
            "after": self.after,
            "diff": self.diff,
            "direction": self.direction,
        }
        if colors is not None:
            data["color"] = colors[self.direction]
        return data


def format_time_diff_seconds(seconds: float) -> str:
    """Relative time text, e.g. ``"3 days ago"`` or ``"in 5 minutes"``."""

    magnitude = abs(seconds)
    value, unit = seconds, "second"
    for threshold, size, name in _TIME_UNITS:
        if magnitude > threshold:
            value, unit = seconds / size, name
            break
    amount = round(abs(value), 1)
    text = f"{amount:g} {unit}{'' if amount == 1 else 's'}"
    return f"in {text}" if value > 0 and amount else f"{text} ago"


def build_change_cells(before: StatsUpdate, after: StatsUpdate) -> List[ChangeCell]:
    return [
        ChangeCell(
            label=label,
            field=field_name,
            before=getattr(before, field_name),
            after=getattr(after, field_name),
            invert=invert,
        )
        for label, field_name, invert in CHANGE_FIELDS
    ]


def summarize_update(
    last_update: StatsUpdate | None,
    update: UpdateData | UpdateStatusError | None,
    mode: Mode,
    *,
    settings: Settings | None = None,
) -> Dict[str, object]:
    """Describe an update for display.

    ``update`` is ``None`` while the update call is still in flight and an
    ``UpdateStatusError`` when it failed.
    """

    if update is None:
        return {"status": "loading"}
    if isinstance(update, UpdateStatusError):
        return {"status": "error", "error_status": update.status, "message": update.message}
    if last_update is None:
        return {"status": "first_update", "message": FIRST_UPDATE_MESSAGE}

    settings = settings or get_settings()
    diff_colors = settings.ui.diff_colors
    colors = {"better": diff_colors.increase, "worse": diff_colors.decrease, "same": diff_colors.same}

    new_update = update.stats_for(mode)
    seconds = (last_update.recorded_at - new_update.recorded_at) / 1000
    return {
        "status": "ready",
        "mode": mode.label,
        "since": format_time_diff_seconds(seconds),
        "since_seconds": seconds,
        "changes": [cell.as_dict(colors) for cell in build_change_cells(last_update, new_update)],
    }
