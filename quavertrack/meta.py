"""Game metadata shared by the chart services: modes and letter grades."""
from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Iterable, Tuple


class Mode(IntEnum):
    """Quaver key modes, valued by the tracker's numeric mode id."""

    K4 = 1
    K7 = 2

    @property
    def label(self) -> str:
        return MODE_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> "Mode":
        """Accept the aliases the tracker routes accept (``4k``, ``k7``, ``2``...)."""

        if isinstance(value, Mode):
            return value
        key = str(value).strip().lower()
        try:
            return _MODE_ALIASES[key]
        except KeyError:
            raise ValueError(f"Invalid mode: {value!r}") from None


MODE_LABELS: Dict[Mode, str] = {Mode.K4: "4k", Mode.K7: "7k"}

_MODE_ALIASES: Dict[str, Mode] = {
    "1": Mode.K4,
    "4": Mode.K4,
    "4k": Mode.K4,
    "k4": Mode.K4,
    "2": Mode.K7,
    "7": Mode.K7,
    "7k": Mode.K7,
    "k7": Mode.K7,
}


class Grade(str, Enum):
    """Letter grades in display order, best first."""

    SS = "SS"
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @property
    def label(self) -> str:
        return GRADE_LABELS[self]

    @property
    def color(self) -> str:
        return GRADE_COLORS[self]

    @classmethod
    def parse(cls, value: object) -> "Grade | None":
        """Return the grade for a label, ``None`` when it is not one of the seven."""

        if isinstance(value, Grade):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


GRADE_LABELS: Dict[Grade, str] = {
    Grade.SS: "SS",
    Grade.S: "S",
    Grade.A: "A",
    Grade.B: "B",
    Grade.C: "C",
    Grade.D: "D",
    Grade.F: "F",
}

GRADE_COLORS: Dict[Grade, str] = {
    Grade.SS: "#f4e04d",
    Grade.S: "#f7b32b",
    Grade.A: "#5bc762",
    Grade.B: "#3d9be9",
    Grade.C: "#b46ee8",
    Grade.D: "#e0607e",
    Grade.F: "#8a8a8a",
}


class Meta:
    """Holds application-wide metadata such as the grade legend order."""

    _GRADE_ORDER: Tuple[Grade, ...] = (
        Grade.SS,
        Grade.S,
        Grade.A,
        Grade.B,
        Grade.C,
        Grade.D,
        Grade.F,
    )

    @classmethod
    def iter_grades(cls) -> Iterable[Grade]:
        """Return the grades in legend order."""

        return cls._GRADE_ORDER
