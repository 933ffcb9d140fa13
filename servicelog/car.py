"""Car model: vehicle identification and odometer state."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from .db import Base


class Car(Base):
    """A registered vehicle and its current odometer reading."""

    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    make = Column(String, nullable=False)
    model = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    license_plate = Column(String, nullable=False)
    current_mileage = Column(Integer, nullable=False, default=0)
    is_primary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    service_records = relationship(
        "ServiceRecord",
        back_populates="car",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reminders = relationship(
        "MaintenanceReminder",
        back_populates="car",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model}"

    def __repr__(self):
        return f"<Car {self.id} {self.name} [{self.license_plate}]>"
