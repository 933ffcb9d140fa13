#!/usr/bin/env python3
"""Tests for maint CLI formatting helpers and commands."""

from datetime import date

import pytest

from servicelog import Car, MaintenanceReminder, ReminderKind, ReminderStatus, Urgency
from servicelog import config
from maint import (
    format_km,
    format_cost,
    format_km_remaining,
    format_time_remaining,
    truncate,
    main,
    build_parser,
    make_reminder_table,
)


def _status(**kwargs):
    car = Car(make="Toyota", model="Avanza", year=2019, current_mileage=75000)
    reminder = MaintenanceReminder(car=car, reminder_type=ReminderKind.OIL_CHANGE)
    return ReminderStatus(reminder=reminder, urgency=Urgency.NORMAL, **kwargs)


class TestFormatKm:
    """Tests for format_km."""

    def test_formats_number(self):
        assert format_km(50000) == "50,000"
        assert format_km(0) == "0"

    def test_none_returns_dash(self):
        assert format_km(None) == "-"


class TestFormatCost:
    """Tests for format_cost."""

    def test_formats_number(self):
        assert format_cost(75.50) == "$75.50"

    def test_none_returns_dash(self):
        assert format_cost(None) == "-"


class TestFormatRemaining:
    """Tests for format_km_remaining and format_time_remaining."""

    def test_km_none(self):
        assert format_km_remaining(_status()) == "-"

    def test_km_positive_and_negative(self):
        assert format_km_remaining(_status(km_remaining=2500)) == "2,500"
        assert format_km_remaining(_status(km_remaining=-1500)) == "-1,500"

    def test_time_none(self):
        assert format_time_remaining(_status()) == "-"

    def test_time_months_and_days(self):
        assert format_time_remaining(_status(days_remaining=105)) == "3mo 15d"
        assert format_time_remaining(_status(days_remaining=14)) == "14d"

    def test_time_overdue(self):
        assert format_time_remaining(_status(days_remaining=-65)) == "-2mo 5d"
        assert format_time_remaining(_status(days_remaining=-10)) == "-10d"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_long_text_truncated_with_ellipsis(self):
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestMakeReminderTable:
    """Tests for make_reminder_table."""

    def test_empty_list_returns_empty_rows(self):
        assert make_reminder_table([]) == []

    def test_row(self):
        status = _status(km_remaining=3500, days_remaining=30)
        status.reminder.due_mileage = 78500
        status.reminder.due_date = date(2026, 11, 18)
        status.reminder.last_service_date = date(2026, 5, 18)
        status.reminder.last_service_mileage = 73500
        [row] = make_reminder_table([status])
        assert row[1:] == [
            "Scheduled",
            "2019 Toyota Avanza",
            "Change oil",
            "2026-05-18 @ 73,500",
            "78,500",
            "2026-11-18",
            "3,500",
            "1mo 0d",
        ]


class TestBuildParser:
    """Tests for build_parser."""

    def test_user_defaults_to_configured_owner(self):
        args = build_parser().parse_args(["cars"])
        assert args.user == config.DEFAULT_OWNER


class TestCommands:
    """End-to-end CLI runs against a temporary database."""

    @pytest.fixture
    def run(self, tmp_path, capsys):
        db = f"sqlite:///{tmp_path / 'cli.db'}"

        def _run(*argv, user="alice"):
            code = main(["--db", db, "--user", user, *argv])
            return code, capsys.readouterr().out

        return _run

    def test_add_car_and_log_oil_change(self, run):
        code, out = run("add-car", "Toyota", "Avanza", "2019", "B 1234 XYZ", "70000")
        assert code == 0
        assert "as car 1" in out

        code, out = run(
            "log", "1", "oil_change",
            "--date", "2026-07-01",
            "--mileage", "73500",
            "--description", "Synthetic oil and filter",
            "--self",
        )
        assert code == 0
        assert "saved" in out

        code, out = run("cars")
        assert "73,500" in out

        code, out = run("reminders")
        assert code == 0
        assert "Change oil" in out
        assert "78,500" in out

    def test_log_rejects_invalid_input(self, run):
        run("add-car", "Toyota", "Avanza", "2019", "B 1234 XYZ", "70000")
        code, out = run(
            "log", "1", "oil_change",
            "--mileage", "73500",
            "--description", "Oil at the shop",
            "--location", "Corner Garage",
            "--cost", "45",
        )
        assert code == 1
        assert "invoice" in out.lower()

    def test_dry_run_saves_nothing(self, run):
        run("add-car", "Toyota", "Avanza", "2019", "B 1234 XYZ", "70000")
        code, out = run(
            "log", "1", "general_service",
            "--mileage", "72000",
            "--description", "Yearly inspection",
            "--self",
            "--dry-run",
        )
        assert code == 0
        assert "dry run" in out
        code, out = run("history", "1")
        assert "No service records found." in out

    def test_history_rejects_malformed_since(self, run):
        run("add-car", "Toyota", "Avanza", "2019", "B 1234 XYZ", "70000")
        code, out = run("history", "1", "--since", "2026-13-45")
        assert code == 1
        assert out.startswith("Error:")
        assert "--since" in out

    def test_other_users_car_not_found(self, run):
        run("add-car", "Toyota", "Avanza", "2019", "B 1234 XYZ", "70000")
        code, out = run("history", "1", user="bob")
        assert code == 1
        assert "not found" in out

    def test_complete_and_dismiss(self, run):
        run("add-car", "Toyota", "Avanza", "2019", "B 1234 XYZ", "70000")
        run(
            "log", "1", "tire_rotation",
            "--mileage", "71000",
            "--description", "Rotated front to back",
            "--self",
        )
        run(
            "log", "1", "brake_service",
            "--mileage", "71000",
            "--description", "Flushed brake fluid",
            "--self",
        )
        code, out = run("complete", "1")
        assert code == 0
        code, out = run("dismiss", "2")
        assert code == 0
        code, out = run("reminders")
        assert "No open reminders." in out

    def test_summary(self, run):
        run("add-car", "Toyota", "Avanza", "2019", "B 1234 XYZ", "70000")
        code, out = run("summary")
        assert code == 0
        assert "Cars:             1" in out
