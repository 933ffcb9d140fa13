#!/usr/bin/env python3
"""Tests for service/reminder kinds and the mapping between them."""

import pytest

from servicelog import ReminderKind, ServiceKind, reminder_kind_for


class TestReminderKindFor:
    """Tests for the service kind -> reminder kind mapping."""

    @pytest.mark.parametrize(
        "service_kind, reminder_kind",
        [
            (ServiceKind.OIL_CHANGE, ReminderKind.OIL_CHANGE),
            (ServiceKind.BRAKE_SERVICE, ReminderKind.BRAKE_FLUID),
            (ServiceKind.TRANSMISSION, ReminderKind.TRANSMISSION_FLUID),
            (ServiceKind.TIRE_ROTATION, ReminderKind.TIRE_ROTATION),
        ],
    )
    def test_tracked_kinds(self, service_kind, reminder_kind):
        assert reminder_kind_for(service_kind) == reminder_kind

    @pytest.mark.parametrize(
        "service_kind",
        [ServiceKind.ENGINE_CHECK, ServiceKind.GENERAL_SERVICE, ServiceKind.CUSTOM],
    )
    def test_untracked_kinds_map_to_none(self, service_kind):
        assert reminder_kind_for(service_kind) is None


class TestLabels:
    """Every kind has a non-empty display label."""

    def test_service_kind_labels(self):
        for kind in ServiceKind:
            assert kind.label

    def test_reminder_kind_labels(self):
        for kind in ReminderKind:
            assert kind.label

    def test_custom_label(self):
        assert ServiceKind.CUSTOM.label == "Other"
