"""Due date/mileage calculations and urgency checks for reminders."""

from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from typing import Optional

from .intervals import interval_for
from .kinds import ReminderKind
from .status import Urgency

# Warn this many km before a mileage-based due point.
DUE_SOON_KM = 500
# Warn this many days before a date-based due point (inclusive).
DUE_SOON_DAYS = 7


def calc_due_date(kind: ReminderKind, last_service_date: date) -> Optional[date]:
    """
    Calculate next due date: last service + interval months.

    Uses calendar months, so Aug 31 + 6 months is Feb 28 (or 29).
    None for distance-only kinds.
    """
    months = interval_for(kind).months
    if months is None:
        return None
    return last_service_date + relativedelta(months=months)


def calc_due_mileage(kind: ReminderKind, last_service_mileage: int) -> Optional[int]:
    """Calculate next due mileage: last service + interval km. None for time-only kinds."""
    kilometers = interval_for(kind).kilometers
    if kilometers is None:
        return None
    return last_service_mileage + kilometers


def is_overdue(
    due_date: Optional[date],
    due_mileage: Optional[int],
    current_mileage: int,
    today: Optional[date] = None,
) -> bool:
    """Past the due date, or at/over the due mileage."""
    today = today or date.today()
    if due_date is not None and due_date < today:
        return True
    if due_mileage is not None and current_mileage >= due_mileage:
        return True
    return False


def is_due_soon(
    due_date: Optional[date],
    due_mileage: Optional[int],
    current_mileage: int,
    today: Optional[date] = None,
) -> bool:
    """
    Due date within the next DUE_SOON_DAYS, or within DUE_SOON_KM of the due mileage.

    Not exclusive of is_overdue: an overdue reminder usually also passes this
    check. Use classify() when a single label is needed.
    """
    today = today or date.today()
    if due_date is not None and due_date <= today + timedelta(days=DUE_SOON_DAYS):
        return True
    if due_mileage is not None and current_mileage >= due_mileage - DUE_SOON_KM:
        return True
    return False


def classify(
    due_date: Optional[date],
    due_mileage: Optional[int],
    current_mileage: int,
    today: Optional[date] = None,
) -> Urgency:
    """Single urgency label, overdue taking precedence over due soon."""
    if is_overdue(due_date, due_mileage, current_mileage, today):
        return Urgency.OVERDUE
    if is_due_soon(due_date, due_mileage, current_mileage, today):
        return Urgency.DUE_SOON
    return Urgency.NORMAL
