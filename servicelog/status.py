"""Urgency enum for maintenance reminder display."""

from enum import Enum


class Urgency(Enum):
    """Reminder urgency categories. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    NORMAL = 3

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Urgency.OVERDUE: "Overdue",
    Urgency.DUE_SOON: "Due soon",
    Urgency.NORMAL: "Scheduled",
}
