"""Recording a service: the record, the car's mileage, and its reminder, in one transaction."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .calculations import calc_due_date, calc_due_mileage
from .car import Car
from .db import transaction
from .exceptions import SaveFailedError
from .kinds import ReminderKind, reminder_kind_for
from .reminder import MaintenanceReminder
from .service_record import ServiceRecord
from .validation import ServiceInput

logger = logging.getLogger(__name__)


def record_service(
    session: Session,
    car: Car,
    data: ServiceInput,
    now: Optional[datetime] = None,
) -> ServiceRecord:
    """
    Record a completed service against a car.

    The caller has already checked that the car belongs to the requesting
    user and that data passed validate_service_input().

    Steps, all in one transaction:
    1. Insert the service record, stamped with entry time `now`
    2. Raise the car's current mileage if the service reading is higher
       (never lowers it, so late backdated entries are harmless)
    3. If the service kind tracks a reminder kind:
       4. complete every open reminder of that kind for this car
       5. create the replacement reminder with fresh due date/mileage

    Any failure rolls everything back and raises SaveFailedError.
    """
    now = now or datetime.now()
    try:
        with transaction(session):
            record = ServiceRecord(
                car_id=car.id,
                service_date=data.service_date,
                mileage_at_service=data.mileage_at_service,
                service_type=data.service_type,
                custom_service_type=data.custom_service_type,
                description=data.description,
                parts_replaced=data.parts_replaced,
                service_location=data.service_location,
                is_self_service=data.is_self_service,
                service_cost=data.service_cost,
                invoice_url=data.invoice_url,
                notes=data.notes,
                entry_created_at=now,
            )
            session.add(record)
            session.flush()

            if data.mileage_at_service > car.current_mileage:
                car.current_mileage = data.mileage_at_service

            reminder_kind = reminder_kind_for(data.service_type)
            if reminder_kind is not None:
                _regenerate_reminder(session, car, reminder_kind, data)
    except SQLAlchemyError as e:
        logger.exception("Failed to record service for car %s", car.id)
        raise SaveFailedError() from e

    logger.info(
        "Recorded %s for car %s at %s km (record %s)",
        data.service_type.name,
        car.id,
        data.mileage_at_service,
        record.id,
    )
    return record


def _regenerate_reminder(
    session: Session, car: Car, kind: ReminderKind, data: ServiceInput
) -> MaintenanceReminder:
    """Retire open reminders of this kind and create the next one."""
    session.execute(
        update(MaintenanceReminder)
        .where(
            MaintenanceReminder.car_id == car.id,
            MaintenanceReminder.reminder_type == kind,
            MaintenanceReminder.is_completed.is_(False),
        )
        .values(is_completed=True)
        .execution_options(synchronize_session="fetch")
    )

    reminder = MaintenanceReminder(
        car_id=car.id,
        reminder_type=kind,
        last_service_date=data.service_date,
        last_service_mileage=data.mileage_at_service,
        due_date=calc_due_date(kind, data.service_date),
        due_mileage=calc_due_mileage(kind, data.mileage_at_service),
        is_completed=False,
    )
    session.add(reminder)
    session.flush()
    logger.info(
        "New %s reminder for car %s: due %s / %s km",
        kind.name,
        car.id,
        reminder.due_date,
        reminder.due_mileage,
    )
    return reminder
