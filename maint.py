#!/usr/bin/env python3
"""
Command-line service log and maintenance reminders.

Commands:
  cars         - List registered cars
  add-car      - Register a car
  update-miles - Set a car's current odometer reading
  log          - Record a service (updates mileage and reminders)
  history      - View a car's service history
  reminders    - Show open reminders, most urgent first
  complete     - Mark a reminder as done
  dismiss      - Delete a reminder
  summary      - Fleet totals and spending
"""

import argparse
import sys
from datetime import date
from typing import List, Optional

from tabulate import tabulate

from servicelog import (
    ServiceKind,
    ServiceLogError,
    ServiceRecord,
    ReminderStatus,
    ValidationFailedError,
    count_by_urgency,
    init_db,
    list_open_reminders,
    make_engine,
    make_session_factory,
    record_service,
    sort_by_urgency,
    summarize,
    validate_car_input,
    validate_service_input,
)
from servicelog import config, store

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[int]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_km_remaining(status: ReminderStatus) -> str:
    """Format remaining distance for display."""
    if status.km_remaining is None:
        return "-"
    if status.km_remaining < 0:
        return f"-{abs(status.km_remaining):,.0f}"
    return f"{status.km_remaining:,.0f}"


def format_time_remaining(status: ReminderStatus) -> str:
    """Format remaining time for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if status.days_remaining is None:
        return "-"

    days = abs(status.days_remaining)
    sign = "-" if status.days_remaining < 0 else ""
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Table builders
# =============================================================================


def make_reminder_table(statuses: List[ReminderStatus]) -> List[List[str]]:
    """Convert reminder statuses to table rows."""
    rows = []
    for status in statuses:
        reminder = status.reminder
        last_done = "-"
        if reminder.last_service_date or reminder.last_service_mileage:
            parts = []
            if reminder.last_service_date:
                parts.append(reminder.last_service_date.isoformat())
            if reminder.last_service_mileage:
                parts.append(format_km(reminder.last_service_mileage))
            last_done = " @ ".join(parts)

        rows.append(
            [
                reminder.id,
                status.urgency.label,
                reminder.car.name,
                reminder.label,
                last_done,
                format_km(reminder.due_mileage),
                reminder.due_date.isoformat() if reminder.due_date else "-",
                format_km_remaining(status),
                format_time_remaining(status),
            ]
        )
    return rows


def make_history_table(records: List[ServiceRecord]) -> List[List[str]]:
    """Convert service records to table rows."""
    rows = []
    for record in records:
        service_date = record.service_date.isoformat()
        if record.is_backdated:
            service_date += " *"
        rows.append(
            [
                record.id,
                service_date,
                format_km(record.mileage_at_service),
                record.label,
                record.service_location or "-",
                format_cost(record.service_cost),
                truncate(record.description),
            ]
        )
    return rows


# =============================================================================
# Command handlers
# =============================================================================


def cmd_cars(args, session):
    """List registered cars."""
    cars = store.list_cars(session, args.user)
    if not cars:
        print("No cars registered.")
        return 0

    rows = [
        [
            car.id,
            car.name + (" (primary)" if car.is_primary else ""),
            car.license_plate,
            format_km(car.current_mileage),
        ]
        for car in cars
    ]
    print(tabulate(rows, headers=["ID", "Car", "Plate", "Mileage (km)"], tablefmt="simple"))
    return 0


def cmd_add_car(args, session):
    """Register a car."""
    data = validate_car_input(
        {
            "make": args.make,
            "model": args.model,
            "year": args.year,
            "licensePlate": args.plate,
            "currentMileage": args.mileage,
        }
    )
    car = store.create_car(session, args.user, data)
    print(f"Registered {car.name} [{car.license_plate}] as car {car.id}.")
    return 0


def cmd_update_miles(args, session):
    """Set a car's current odometer reading."""
    car = store.get_owned_car(session, args.car_id, args.user)
    old_mileage = car.current_mileage

    print(f"Car: {car.name}")
    print(f"Current mileage: {format_km(old_mileage)}")
    print(f"New mileage:     {format_km(args.mileage)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    store.save_current_mileage(session, car, args.mileage)
    print("Mileage updated.")
    return 0


def cmd_log(args, session):
    """Record a service for a car."""
    car = store.get_owned_car(session, args.car_id, args.user)

    form = {
        "serviceDate": args.date or date.today().isoformat(),
        "mileageAtService": args.mileage,
        "serviceType": args.service_type.upper(),
        "description": args.description,
        "isSelfService": args.self_service,
    }
    optional = {
        "customServiceType": args.custom,
        "serviceLocation": args.location,
        "serviceCost": args.cost,
        "invoicePhotoUrl": args.invoice,
        "partsReplaced": args.parts,
        "notes": args.notes,
    }
    form.update({k: v for k, v in optional.items() if v is not None})
    data = validate_service_input(form)

    print(f"Recording service for {car.name}:")
    print(f"  Service: {data.custom_service_type or data.service_type.label}")
    print(f"  Date:    {data.service_date.isoformat()}")
    print(f"  Mileage: {format_km(data.mileage_at_service)}")
    if data.service_location:
        print(f"  Where:   {data.service_location}")
    if data.service_cost:
        print(f"  Cost:    {format_cost(data.service_cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    record = record_service(session, car, data)
    print(f"Service record {record.id} saved.")
    return 0


def cmd_history(args, session):
    """View a car's service history."""
    car = store.get_owned_car(session, args.car_id, args.user)
    records = store.list_service_records(session, car)

    if args.service_type:
        wanted = args.service_type.upper()
        records = [r for r in records if r.service_type.name == wanted]
    if args.since:
        try:
            since = date.fromisoformat(args.since)
        except ValueError as e:
            raise ValidationFailedError(
                f"Invalid --since date: {args.since} (expected YYYY-MM-DD)", field="since"
            ) from e
        records = [r for r in records if r.service_date >= since]

    total_cost = sum(r.service_cost for r in records if r.service_cost is not None)

    print(f"Car: {car.name} [{car.license_plate}]")
    print(f"Current mileage: {format_km(car.current_mileage)}")
    print(f"Showing: {len(records)} service records")
    if total_cost > 0:
        print(f"Total cost: {format_cost(total_cost)}")
    print()

    if not records:
        print("No service records found.")
        return 0

    headers = ["ID", "Date", "Mileage", "Service", "Location", "Cost", "Description"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))
    if any(r.is_backdated for r in records):
        print()
        print("* entered more than 7 days after the service date")
    return 0


def cmd_reminders(args, session):
    """Show open reminders, most urgent first."""
    statuses = sort_by_urgency(list_open_reminders(session, args.user))
    if args.due_only:
        statuses = [s for s in statuses if s.is_due]

    if not statuses:
        print("No open reminders.")
        return 0

    counts = count_by_urgency(statuses)
    print(
        f"Overdue: {counts['overdue']}  "
        f"Due soon: {counts['due_soon']}  "
        f"Scheduled: {counts['normal']}"
    )
    print()

    headers = [
        "ID",
        "Status",
        "Car",
        "Reminder",
        "Last Done",
        "Due (km)",
        "Due (date)",
        "Remaining (km)",
        "Remaining (time)",
    ]
    print(tabulate(make_reminder_table(statuses), headers=headers, tablefmt="simple"))
    return 0


def cmd_complete(args, session):
    """Mark a reminder as done."""
    reminder = store.get_owned_reminder(session, args.reminder_id, args.user)
    store.mark_reminder_complete(session, reminder)
    print(f"Reminder {reminder.id} ({reminder.label}) marked complete.")
    return 0


def cmd_dismiss(args, session):
    """Delete a reminder."""
    reminder = store.get_owned_reminder(session, args.reminder_id, args.user)
    label = reminder.label
    store.dismiss_reminder(session, reminder)
    print(f"Reminder {args.reminder_id} ({label}) dismissed.")
    return 0


def cmd_summary(args, session):
    """Fleet totals and spending."""
    summary = summarize(session, args.user)
    print(f"Cars:             {summary.total_cars}")
    print(f"Service records:  {summary.total_services}")
    print(f"Open reminders:   {summary.active_reminders}")
    print(f"Total spent:      {format_cost(summary.total_spent)}")
    print()

    if summary.recent_activity:
        print("Recent activity:")
        rows = [
            [r.service_date.isoformat(), r.car.name, r.label, format_cost(r.service_cost)]
            for r in summary.recent_activity
        ]
        print(tabulate(rows, headers=["Date", "Car", "Service", "Cost"], tablefmt="simple"))
    return 0


COMMANDS = {
    "cars": cmd_cars,
    "add-car": cmd_add_car,
    "update-miles": cmd_update_miles,
    "log": cmd_log,
    "history": cmd_history,
    "reminders": cmd_reminders,
    "complete": cmd_complete,
    "dismiss": cmd_dismiss,
    "summary": cmd_summary,
}


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle service log and maintenance reminders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add-car Toyota Avanza 2019 "B 1234 XYZ" 70000
  %(prog)s log 1 oil_change --mileage 73500 --description "Synthetic 5W-30 and filter" \\
      --location "Corner Garage" --cost 45 --invoice invoices/0412.jpg
  %(prog)s log 1 custom --custom "Wiper blades" --mileage 73600 \\
      --description "Replaced both front blades" --self
  %(prog)s history 1 --since 2024-01-01
  %(prog)s reminders --due-only
  %(prog)s update-miles 1 75000
""",
    )
    parser.add_argument(
        "--db",
        default=config.DATABASE_URL,
        help="Database URL (default: $SERVICELOG_DATABASE_URL or sqlite:///servicelog.db)",
    )
    parser.add_argument(
        "--user",
        default=config.DEFAULT_OWNER,
        help="Owner whose cars to act on (default: $SERVICELOG_USER or 'local')",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("cars", help="List registered cars")

    add_car_parser = subparsers.add_parser("add-car", help="Register a car")
    add_car_parser.add_argument("make", type=str)
    add_car_parser.add_argument("model", type=str)
    add_car_parser.add_argument("year", type=int)
    add_car_parser.add_argument("plate", type=str, help="License plate")
    add_car_parser.add_argument("mileage", type=int, help="Current odometer (km)")

    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Set a car's current odometer reading"
    )
    update_miles_parser.add_argument("car_id", type=int)
    update_miles_parser.add_argument("mileage", type=int, help="Current mileage (km)")
    update_miles_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    log_parser = subparsers.add_parser("log", help="Record a service")
    log_parser.add_argument("car_id", type=int)
    log_parser.add_argument(
        "service_type",
        type=str,
        help=f"One of: {', '.join(k.name.lower() for k in ServiceKind)}",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--mileage",
        type=int,
        required=True,
        help="Odometer reading at time of service (km)",
    )
    log_parser.add_argument(
        "--description",
        type=str,
        required=True,
        help="What was done (at least 10 characters)",
    )
    log_parser.add_argument("--custom", type=str, help="Label for a 'custom' service")
    log_parser.add_argument("--location", type=str, help="Where the service was done")
    log_parser.add_argument(
        "--self",
        dest="self_service",
        action="store_true",
        help="Service was performed by the owner",
    )
    log_parser.add_argument("--cost", type=float, help="Cost of service")
    log_parser.add_argument(
        "--invoice",
        type=str,
        help="Invoice photo reference (required for paid shop services)",
    )
    log_parser.add_argument("--parts", type=str, help="Parts replaced")
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be recorded without saving",
    )

    history_parser = subparsers.add_parser("history", help="View service history")
    history_parser.add_argument("car_id", type=int)
    history_parser.add_argument(
        "--service-type", type=str, help="Only show this service type"
    )
    history_parser.add_argument(
        "--since", type=str, help="Show only entries since date (YYYY-MM-DD)"
    )

    reminders_parser = subparsers.add_parser(
        "reminders", help="Show open reminders, most urgent first"
    )
    reminders_parser.add_argument(
        "--due-only",
        action="store_true",
        help="Only show overdue and due-soon reminders",
    )

    complete_parser = subparsers.add_parser("complete", help="Mark a reminder as done")
    complete_parser.add_argument("reminder_id", type=int)

    dismiss_parser = subparsers.add_parser("dismiss", help="Delete a reminder")
    dismiss_parser.add_argument("reminder_id", type=int)

    subparsers.add_parser("summary", help="Fleet totals and spending")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config.configure_logging()

    engine = make_engine(args.db)
    init_db(engine)
    session = make_session_factory(engine)()

    try:
        return COMMANDS[args.command](args, session)
    except ServiceLogError as e:
        print(f"Error: {e}")
        return 1
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main() or 0)
