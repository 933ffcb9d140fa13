"""ServiceRecord model for maintenance performed on a car."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .db import Base
from .kinds import ServiceKind

# Entries created more than this many days after the service date are flagged.
BACKDATE_THRESHOLD_DAYS = 7

SELF_SERVICE_LOCATION = "Self Service"


class ServiceRecord(Base):
    """A record of maintenance performed."""

    __tablename__ = "service_records"

    id = Column(Integer, primary_key=True, index=True)
    car_id = Column(
        Integer, ForeignKey("cars.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_date = Column(Date, nullable=False)
    mileage_at_service = Column(Integer, nullable=False)
    service_type = Column(Enum(ServiceKind), nullable=False)
    custom_service_type = Column(String, nullable=True)
    description = Column(Text, nullable=False)
    parts_replaced = Column(Text, nullable=True)
    service_location = Column(String, nullable=True)
    is_self_service = Column(Boolean, nullable=False, default=False)
    service_cost = Column(Float, nullable=True)
    invoice_url = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    # When the row was written, independent of service_date
    entry_created_at = Column(DateTime, nullable=False, default=datetime.now)

    car = relationship("Car", back_populates="service_records")

    @property
    def label(self) -> str:
        """Display name: the free-text label for custom services."""
        if self.service_type == ServiceKind.CUSTOM and self.custom_service_type:
            return self.custom_service_type
        return self.service_type.label

    @property
    def days_entered_after_service(self) -> int:
        return (self.entry_created_at.date() - self.service_date).days

    @property
    def is_backdated(self) -> bool:
        """Entered more than BACKDATE_THRESHOLD_DAYS after the service happened."""
        return self.days_entered_after_service > BACKDATE_THRESHOLD_DAYS

    def __repr__(self):
        return (
            f"<ServiceRecord {self.id} car={self.car_id} {self.service_type.name} "
            f"{self.service_date} @ {self.mileage_at_service}>"
        )
