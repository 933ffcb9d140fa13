"""Service and reminder kinds, with display labels and the mapping between them."""

from enum import Enum
from typing import Optional


class ServiceKind(Enum):
    """Kind of maintenance performed in a service record."""

    OIL_CHANGE = "Oil change"
    BRAKE_SERVICE = "Brake service"
    TIRE_ROTATION = "Tire rotation"
    ENGINE_CHECK = "Engine check"
    TRANSMISSION = "Transmission service"
    GENERAL_SERVICE = "General service"
    CUSTOM = "Other"

    @property
    def label(self) -> str:
        return self.value


class ReminderKind(Enum):
    """Kind of maintenance a reminder tracks."""

    OIL_CHANGE = "Change oil"
    BRAKE_FLUID = "Replace brake fluid"
    COOLANT = "Replace coolant"
    TRANSMISSION_FLUID = "Change transmission fluid"
    TIRE_ROTATION = "Rotate tires"
    AIR_FILTER = "Replace air filter"
    SPARK_PLUG = "Replace spark plugs"
    TIMING_BELT = "Replace timing belt"

    @property
    def label(self) -> str:
        return self.value


# Service kinds missing here never generate a reminder.
SERVICE_TO_REMINDER = {
    ServiceKind.OIL_CHANGE: ReminderKind.OIL_CHANGE,
    ServiceKind.BRAKE_SERVICE: ReminderKind.BRAKE_FLUID,
    ServiceKind.TRANSMISSION: ReminderKind.TRANSMISSION_FLUID,
    ServiceKind.TIRE_ROTATION: ReminderKind.TIRE_ROTATION,
}


def reminder_kind_for(service_kind: ServiceKind) -> Optional[ReminderKind]:
    """Reminder kind regenerated by a service of this kind, if any."""
    return SERVICE_TO_REMINDER.get(service_kind)
