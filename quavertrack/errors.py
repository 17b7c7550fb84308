"""Status-code errors reported by the tracker backend and their user-facing text."""
from __future__ import annotations

from typing import Dict

UPDATE_STATUS_MESSAGES: Dict[int, str] = {
    404: "User not found",
    429: "You're updating too fast! Wait a few seconds and try again.",
    500: "The server encountered an error while updating; try again later.",
}
UNKNOWN_STATUS_MESSAGE = "An unknown error occurred while updating."


def describe_update_status(status: int | None) -> str:
    if status is None:
        return UNKNOWN_STATUS_MESSAGE
    return UPDATE_STATUS_MESSAGES.get(int(status), UNKNOWN_STATUS_MESSAGE)


class UpdateStatusError(Exception):
    """A fetch or update call that failed with a numeric HTTP status."""

    def __init__(self, status: int) -> None:
        self.status = int(status)
        super().__init__(f"Tracker request failed with status {self.status}")

    @property
    def not_found(self) -> bool:
        return self.status == 404

    @property
    def message(self) -> str:
        return describe_update_status(self.status)
