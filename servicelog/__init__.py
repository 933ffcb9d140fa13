"""
Vehicle service log and maintenance reminders.

This package provides:
- ServiceKind / ReminderKind: what was done, and what gets tracked
- Interval: renewal interval per reminder kind (REMINDER_INTERVALS)
- Urgency: OVERDUE, DUE_SOON, NORMAL
- Car, ServiceRecord, MaintenanceReminder: SQLAlchemy models
- record_service: the transactional service recording workflow
- list_open_reminders / sort_by_urgency: reminder listing
- summarize: owner dashboard figures
"""

from .status import Urgency
from .kinds import ServiceKind, ReminderKind, reminder_kind_for
from .intervals import Interval, REMINDER_INTERVALS
from .calculations import (
    calc_due_date,
    calc_due_mileage,
    is_overdue,
    is_due_soon,
    classify,
)
from .exceptions import (
    ServiceLogError,
    ValidationFailedError,
    NotFoundError,
    SaveFailedError,
)
from .db import Base, make_engine, make_session_factory, init_db, transaction
from .car import Car
from .service_record import ServiceRecord
from .reminder import MaintenanceReminder
from .reminder_status import ReminderStatus
from .validation import (
    CarInput,
    ServiceInput,
    validate_car_input,
    validate_service_input,
)
from .recording import record_service
from .listing import list_open_reminders, sort_by_urgency, count_by_urgency
from .dashboard import DashboardSummary, summarize

__all__ = [
    "Urgency",
    "ServiceKind",
    "ReminderKind",
    "reminder_kind_for",
    "Interval",
    "REMINDER_INTERVALS",
    "calc_due_date",
    "calc_due_mileage",
    "is_overdue",
    "is_due_soon",
    "classify",
    "ServiceLogError",
    "ValidationFailedError",
    "NotFoundError",
    "SaveFailedError",
    "Base",
    "make_engine",
    "make_session_factory",
    "init_db",
    "transaction",
    "Car",
    "ServiceRecord",
    "MaintenanceReminder",
    "ReminderStatus",
    "CarInput",
    "ServiceInput",
    "validate_car_input",
    "validate_service_input",
    "record_service",
    "list_open_reminders",
    "sort_by_urgency",
    "count_by_urgency",
    "DashboardSummary",
    "summarize",
]
