"""MaintenanceReminder model for an outstanding maintenance obligation."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer
from sqlalchemy.orm import relationship

from .calculations import classify, is_due_soon, is_overdue
from .db import Base
from .kinds import ReminderKind
from .status import Urgency


class MaintenanceReminder(Base):
    """
    One maintenance obligation for one car.

    At most one open (is_completed=False) reminder exists per
    (car_id, reminder_type); record_service retires the old one before
    creating its replacement.
    """

    __tablename__ = "maintenance_reminders"

    id = Column(Integer, primary_key=True, index=True)
    car_id = Column(
        Integer, ForeignKey("cars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reminder_type = Column(Enum(ReminderKind), nullable=False)
    last_service_date = Column(Date, nullable=True)
    last_service_mileage = Column(Integer, nullable=True)
    due_date = Column(Date, nullable=True)
    due_mileage = Column(Integer, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    car = relationship("Car", back_populates="reminders")

    @property
    def label(self) -> str:
        return self.reminder_type.label

    def is_overdue(self, today: Optional[date] = None) -> bool:
        return is_overdue(self.due_date, self.due_mileage, self.car.current_mileage, today)

    def is_due_soon(self, today: Optional[date] = None) -> bool:
        return is_due_soon(self.due_date, self.due_mileage, self.car.current_mileage, today)

    def urgency(self, today: Optional[date] = None) -> Urgency:
        return classify(self.due_date, self.due_mileage, self.car.current_mileage, today)

    def __repr__(self):
        state = "done" if self.is_completed else "open"
        return f"<MaintenanceReminder {self.id} car={self.car_id} {self.reminder_type.name} {state}>"
