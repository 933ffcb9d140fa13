#!/usr/bin/env python3
"""Tests for reminder listing and urgency sort."""

from datetime import date, timedelta

from servicelog import (
    MaintenanceReminder,
    ReminderKind,
    Urgency,
    count_by_urgency,
    list_open_reminders,
    sort_by_urgency,
)

TODAY = date(2026, 10, 19)


def _reminder(session, car, kind=ReminderKind.OIL_CHANGE, due_date=None, due_mileage=None, **kwargs):
    reminder = MaintenanceReminder(
        car_id=car.id,
        reminder_type=kind,
        due_date=due_date,
        due_mileage=due_mileage,
        **kwargs
    )
    session.add(reminder)
    session.commit()
    return reminder


class TestListOpenReminders:
    """Tests for list_open_reminders."""

    def test_orders_by_due_date_then_mileage(self, session, make_car):
        car = make_car()
        no_date = _reminder(session, car, ReminderKind.TIRE_ROTATION, due_mileage=80000)
        later = _reminder(session, car, ReminderKind.COOLANT, due_date=TODAY + timedelta(days=30))
        sooner = _reminder(session, car, ReminderKind.BRAKE_FLUID, due_date=TODAY + timedelta(days=5))
        no_date_low = _reminder(session, car, ReminderKind.AIR_FILTER, due_mileage=75000)

        result = list_open_reminders(session, "alice")

        assert result == [sooner, later, no_date_low, no_date]

    def test_excludes_completed_and_foreign(self, session, make_car):
        car = make_car(owner_id="alice")
        other = make_car(owner_id="bob")
        mine = _reminder(session, car, due_mileage=80000)
        _reminder(session, car, ReminderKind.COOLANT, due_mileage=90000, is_completed=True)
        _reminder(session, other, due_mileage=80000)

        assert list_open_reminders(session, "alice") == [mine]

    def test_single_car_keeps_order(self, session, make_car):
        car = make_car()
        other_car = make_car()
        no_date = _reminder(session, car, ReminderKind.TIRE_ROTATION, due_mileage=80000)
        dated = _reminder(session, car, ReminderKind.BRAKE_FLUID, due_date=TODAY + timedelta(days=400))
        _reminder(session, other_car, ReminderKind.COOLANT, due_date=TODAY + timedelta(days=5))

        assert list_open_reminders(session, "alice", car_id=car.id) == [dated, no_date]


class TestSortByUrgency:
    """Tests for sort_by_urgency."""

    def test_overdue_due_soon_normal(self, session, make_car):
        car = make_car()
        normal = _reminder(session, car, ReminderKind.COOLANT, due_date=TODAY + timedelta(days=60))
        due_soon = _reminder(session, car, ReminderKind.BRAKE_FLUID, due_date=TODAY + timedelta(days=3))
        overdue = _reminder(session, car, ReminderKind.OIL_CHANGE, due_date=TODAY - timedelta(days=10))

        result = sort_by_urgency([normal, due_soon, overdue], today=TODAY)

        assert [s.reminder for s in result] == [overdue, due_soon, normal]
        assert [s.urgency for s in result] == [Urgency.OVERDUE, Urgency.DUE_SOON, Urgency.NORMAL]

    def test_stable_within_group(self, session, make_car):
        """Incoming order is kept inside each urgency group."""
        car = make_car(current_mileage=75000)
        a = _reminder(session, car, ReminderKind.COOLANT, due_date=TODAY + timedelta(days=90))
        b = _reminder(session, car, ReminderKind.AIR_FILTER, due_mileage=74000)
        c = _reminder(session, car, ReminderKind.SPARK_PLUG, due_mileage=95000)
        d = _reminder(session, car, ReminderKind.TIMING_BELT, due_mileage=70000)

        result = sort_by_urgency([a, b, c, d], today=TODAY)

        assert [s.reminder for s in result] == [b, d, a, c]

    def test_mileage_only_due_soon(self, session, make_car):
        car = make_car(current_mileage=75000)
        reminder = _reminder(session, car, ReminderKind.TIRE_ROTATION, due_mileage=75300)
        [status] = sort_by_urgency([reminder], today=TODAY)
        assert status.urgency == Urgency.DUE_SOON
        assert status.km_remaining == 300
        assert status.days_remaining is None

    def test_empty(self):
        assert sort_by_urgency([], today=TODAY) == []


class TestCountByUrgency:
    """Tests for count_by_urgency."""

    def test_counts(self, session, make_car):
        car = make_car(current_mileage=75000)
        reminders = [
            _reminder(session, car, ReminderKind.OIL_CHANGE, due_date=TODAY - timedelta(days=1)),
            _reminder(session, car, ReminderKind.COOLANT, due_mileage=75100),
            _reminder(session, car, ReminderKind.AIR_FILTER, due_mileage=99000),
            _reminder(session, car, ReminderKind.SPARK_PLUG, due_mileage=99000),
        ]
        counts = count_by_urgency(sort_by_urgency(reminders, today=TODAY))
        assert counts == {"overdue": 1, "due_soon": 1, "normal": 2}
