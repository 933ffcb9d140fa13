"""Renewal intervals for each reminder kind."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from .kinds import ReminderKind


@dataclass(frozen=True)
class Interval:
    """How long a service lasts, by time, by distance, or both."""

    months: Optional[int] = None
    kilometers: Optional[int] = None

    def __post_init__(self):
        if self.months is None and self.kilometers is None:
            raise ValueError("Interval needs months, kilometers, or both")
        for name in ("months", "kilometers"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"Interval {name} must be positive, got {value}")


REMINDER_INTERVALS = MappingProxyType(
    {
        ReminderKind.OIL_CHANGE: Interval(months=6, kilometers=5000),
        ReminderKind.BRAKE_FLUID: Interval(months=24),
        ReminderKind.COOLANT: Interval(months=24, kilometers=40000),
        ReminderKind.TRANSMISSION_FLUID: Interval(kilometers=40000),
        ReminderKind.TIRE_ROTATION: Interval(kilometers=10000),
        ReminderKind.AIR_FILTER: Interval(kilometers=10000),
        ReminderKind.SPARK_PLUG: Interval(kilometers=20000),
        ReminderKind.TIMING_BELT: Interval(kilometers=60000),
    }
)


def interval_for(kind: ReminderKind) -> Interval:
    """Look up the renewal interval for a reminder kind."""
    return REMINDER_INTERVALS[kind]
