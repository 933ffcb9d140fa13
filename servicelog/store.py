"""Ownership checks and plain CRUD for cars, service records, and reminders."""

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .car import Car
from .db import transaction
from .exceptions import NotFoundError
from .reminder import MaintenanceReminder
from .service_record import ServiceRecord
from .validation import CarInput, ServiceInput

logger = logging.getLogger(__name__)


# =============================================================================
# Ownership lookups
# =============================================================================
# Missing rows and rows owned by someone else raise the same NotFoundError.


def get_owned_car(session: Session, car_id: int, owner_id: str) -> Car:
    car = session.scalar(select(Car).where(Car.id == car_id, Car.owner_id == owner_id))
    if car is None:
        raise NotFoundError(f"Car {car_id} not found")
    return car


def get_owned_service_record(
    session: Session, record_id: int, owner_id: str
) -> ServiceRecord:
    record = session.scalar(
        select(ServiceRecord)
        .join(ServiceRecord.car)
        .where(ServiceRecord.id == record_id, Car.owner_id == owner_id)
    )
    if record is None:
        raise NotFoundError(f"Service record {record_id} not found")
    return record


def get_owned_reminder(
    session: Session, reminder_id: int, owner_id: str
) -> MaintenanceReminder:
    reminder = session.scalar(
        select(MaintenanceReminder)
        .join(MaintenanceReminder.car)
        .where(MaintenanceReminder.id == reminder_id, Car.owner_id == owner_id)
    )
    if reminder is None:
        raise NotFoundError(f"Reminder {reminder_id} not found")
    return reminder


# =============================================================================
# Cars
# =============================================================================


def list_cars(session: Session, owner_id: str) -> List[Car]:
    """Owner's cars, primary car first, then oldest registration first."""
    return list(
        session.scalars(
            select(Car)
            .where(Car.owner_id == owner_id)
            .order_by(Car.is_primary.desc(), Car.created_at, Car.id)
        )
    )


def create_car(session: Session, owner_id: str, data: CarInput) -> Car:
    """Register a car. The owner's first car becomes the primary one."""
    with transaction(session):
        existing = session.scalar(
            select(func.count()).select_from(Car).where(Car.owner_id == owner_id)
        )
        car = Car(
            owner_id=owner_id,
            make=data.make,
            model=data.model,
            year=data.year,
            license_plate=data.license_plate,
            current_mileage=data.current_mileage,
            is_primary=existing == 0,
        )
        session.add(car)
    logger.info("Registered car %s for owner %s", car.id, owner_id)
    return car


def update_car(session: Session, car: Car, data: CarInput) -> Car:
    """
    Apply a direct edit to a car.

    Unlike record_service, this may lower current_mileage.
    """
    with transaction(session):
        car.make = data.make
        car.model = data.model
        car.year = data.year
        car.license_plate = data.license_plate
        car.current_mileage = data.current_mileage
    return car


def save_current_mileage(session: Session, car: Car, mileage: int) -> Car:
    """Set the odometer reading as entered by the owner."""
    with transaction(session):
        car.current_mileage = mileage
    return car


def delete_car(session: Session, car: Car) -> None:
    """Remove a car along with its service records and reminders."""
    car_id = car.id
    with transaction(session):
        session.delete(car)
    logger.info("Deleted car %s", car_id)


# =============================================================================
# Service records
# =============================================================================


def list_service_records(session: Session, car: Car) -> List[ServiceRecord]:
    """Service history for a car, most recent service first."""
    return list(
        session.scalars(
            select(ServiceRecord)
            .where(ServiceRecord.car_id == car.id)
            .order_by(ServiceRecord.service_date.desc(), ServiceRecord.id.desc())
        )
    )


def update_service_record(
    session: Session, record: ServiceRecord, data: ServiceInput
) -> ServiceRecord:
    """
    Overwrite a service record's fields.

    Reminders generated from the original record and the car's mileage are
    left as they are, so an edited kind/date/mileage can leave a stale
    reminder behind.
    """
    with transaction(session):
        record.service_date = data.service_date
        record.mileage_at_service = data.mileage_at_service
        record.service_type = data.service_type
        record.custom_service_type = data.custom_service_type
        record.description = data.description
        record.parts_replaced = data.parts_replaced
        record.service_location = data.service_location
        record.is_self_service = data.is_self_service
        record.service_cost = data.service_cost
        record.invoice_url = data.invoice_url
        record.notes = data.notes
    return record


def delete_service_record(session: Session, record: ServiceRecord) -> None:
    """Remove a service record. Reminders it produced stay untouched."""
    record_id = record.id
    with transaction(session):
        session.delete(record)
    logger.info("Deleted service record %s", record_id)


# =============================================================================
# Reminders
# =============================================================================


def mark_reminder_complete(
    session: Session, reminder: MaintenanceReminder
) -> MaintenanceReminder:
    with transaction(session):
        reminder.is_completed = True
    return reminder


def dismiss_reminder(session: Session, reminder: MaintenanceReminder) -> None:
    """Delete a reminder outright."""
    reminder_id = reminder.id
    with transaction(session):
        session.delete(reminder)
    logger.info("Dismissed reminder %s", reminder_id)
