#!/usr/bin/env python3
"""Tests for Status enum."""

from upkeep import Status


class TestStatus:
    """Tests for Status enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Status.OVERDUE.value < Status.DUE_SOON.value
        assert Status.DUE_SOON.value < Status.OK.value

    def test_rank_values(self):
        """Rank values are 0, 1, 2."""
        assert [s.value for s in Status] == [0, 1, 2]

    def test_label(self):
        assert Status.DUE_SOON.label == "DUE SOON"
        assert Status.OVERDUE.label == "OVERDUE"
