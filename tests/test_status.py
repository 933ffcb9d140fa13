#!/usr/bin/env python3
"""Tests for Urgency enum."""

from servicelog import Urgency


class TestUrgency:
    """Tests for Urgency enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Urgency.OVERDUE.value < Urgency.DUE_SOON.value
        assert Urgency.DUE_SOON.value < Urgency.NORMAL.value

    def test_labels(self):
        assert Urgency.OVERDUE.label == "Overdue"
        assert Urgency.DUE_SOON.label == "Due soon"
        assert Urgency.NORMAL.label == "Scheduled"
