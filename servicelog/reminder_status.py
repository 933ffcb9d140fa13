"""ReminderStatus dataclass for a reminder classified against today's state."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, TYPE_CHECKING

from .status import Urgency

if TYPE_CHECKING:
    from .reminder import MaintenanceReminder


@dataclass
class ReminderStatus:
    """Open reminder with its urgency and distance/time left."""

    reminder: "MaintenanceReminder"
    urgency: Urgency
    km_remaining: Optional[int] = None
    days_remaining: Optional[int] = None

    @property
    def is_due(self) -> bool:
        return self.urgency in (Urgency.OVERDUE, Urgency.DUE_SOON)

    @classmethod
    def evaluate(
        cls, reminder: "MaintenanceReminder", today: Optional[date] = None
    ) -> "ReminderStatus":
        today = today or date.today()
        current = reminder.car.current_mileage
        return cls(
            reminder=reminder,
            urgency=reminder.urgency(today),
            km_remaining=(
                reminder.due_mileage - current
                if reminder.due_mileage is not None
                else None
            ),
            days_remaining=(
                (reminder.due_date - today).days
                if reminder.due_date is not None
                else None
            ),
        )
