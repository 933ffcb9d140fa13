"""Listing a user's open reminders in urgency order."""

from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, contains_eager

from .car import Car
from .reminder import MaintenanceReminder
from .reminder_status import ReminderStatus
from .status import Urgency


def list_open_reminders(
    session: Session, owner_id: str, car_id: Optional[int] = None
) -> List[MaintenanceReminder]:
    """
    Open reminders across all of an owner's cars, or just one car's.

    Ordered by due date, then due mileage, ascending; reminders without a
    due date (or mileage) sort after those with one.
    """
    stmt = (
        select(MaintenanceReminder)
        .join(MaintenanceReminder.car)
        .options(contains_eager(MaintenanceReminder.car))
        .where(Car.owner_id == owner_id, MaintenanceReminder.is_completed.is_(False))
        .order_by(
            MaintenanceReminder.due_date.is_(None),
            MaintenanceReminder.due_date,
            MaintenanceReminder.due_mileage.is_(None),
            MaintenanceReminder.due_mileage,
        )
    )
    if car_id is not None:
        stmt = stmt.where(MaintenanceReminder.car_id == car_id)
    return list(session.scalars(stmt))


def sort_by_urgency(
    reminders: Iterable[MaintenanceReminder], today: Optional[date] = None
) -> List[ReminderStatus]:
    """
    Overdue first, then due soon, then normal.

    Stable: within each group the incoming order is kept, so pass the
    reminders already ordered by list_open_reminders().
    """
    today = today or date.today()
    statuses = [ReminderStatus.evaluate(r, today) for r in reminders]
    return sorted(statuses, key=lambda s: s.urgency.value)


def count_by_urgency(statuses: Iterable[ReminderStatus]) -> Dict[str, int]:
    counts = {"overdue": 0, "due_soon": 0, "normal": 0}
    keys = {
        Urgency.OVERDUE: "overdue",
        Urgency.DUE_SOON: "due_soon",
        Urgency.NORMAL: "normal",
    }
    for status in statuses:
        counts[keys[status.urgency]] += 1
    return counts
