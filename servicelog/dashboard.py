"""Owner dashboard: fleet size, service counts, and spending."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, contains_eager

from .car import Car
from .reminder import MaintenanceReminder
from .service_record import ServiceRecord

RECENT_ACTIVITY_LIMIT = 5


@dataclass
class DashboardSummary:
    total_cars: int = 0
    total_services: int = 0
    active_reminders: int = 0
    total_spent: float = 0.0
    # Spend per calendar month of the current year, January first
    monthly_costs: List[float] = field(default_factory=lambda: [0.0] * 12)
    recent_activity: List[ServiceRecord] = field(default_factory=list)


def summarize(
    session: Session, owner_id: str, today: Optional[date] = None
) -> DashboardSummary:
    """Aggregate an owner's cars, service history, and open reminders."""
    today = today or date.today()
    summary = DashboardSummary()

    summary.total_cars = session.scalar(
        select(func.count()).select_from(Car).where(Car.owner_id == owner_id)
    )
    summary.active_reminders = session.scalar(
        select(func.count())
        .select_from(MaintenanceReminder)
        .join(MaintenanceReminder.car)
        .where(Car.owner_id == owner_id, MaintenanceReminder.is_completed.is_(False))
    )

    records = list(
        session.scalars(
            select(ServiceRecord)
            .join(ServiceRecord.car)
            .options(contains_eager(ServiceRecord.car))
            .where(Car.owner_id == owner_id)
            .order_by(ServiceRecord.service_date.desc(), ServiceRecord.id.desc())
        )
    )
    summary.total_services = len(records)

    for record in records:
        if not record.service_cost:
            continue
        summary.total_spent += record.service_cost
        if record.service_date.year == today.year:
            summary.monthly_costs[record.service_date.month - 1] += record.service_cost

    summary.recent_activity = records[:RECENT_ACTIVITY_LIMIT]
    return summary
