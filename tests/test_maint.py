#!/usr/bin/env python3
"""Tests for maint CLI formatting helpers and commands."""

import pytest
import yaml

from upkeep import (
    DEFAULT_CATALOG,
    DueItem,
    Interval,
    MaintenanceTaskDef,
    ServiceRecord,
    Status,
    read_current_distance,
    read_service_records,
)
from maint import (
    format_distance,
    format_remaining,
    format_time_remaining,
    format_last_done,
    truncate,
    make_status_table,
    make_history_table,
    main,
)

TASK = MaintenanceTaskDef(
    key="oil_change", title="Oil change", interval=Interval(distance=5500, days=180)
)


class TestFormatDistance:
    """Tests for format_distance."""

    def test_formats_number(self):
        assert format_distance(50000) == "50,000"
        assert format_distance(0) == "0"

    def test_none_returns_dash(self):
        assert format_distance(None) == "-"


class TestFormatRemaining:
    """Tests for format_remaining."""

    def test_none_returns_dash(self):
        assert format_remaining(DueItem(TASK, Status.OK)) == "-"

    def test_positive_remaining(self):
        assert format_remaining(DueItem(TASK, Status.OK, distance_remaining=2500)) == "2,500"

    def test_negative_remaining_overdue(self):
        item = DueItem(TASK, Status.OVERDUE, distance_remaining=-1500)
        assert format_remaining(item) == "-1,500"


class TestFormatTimeRemaining:
    """Tests for format_time_remaining."""

    def test_none_returns_dash(self):
        assert format_time_remaining(DueItem(TASK, Status.OK)) == "-"

    def test_positive_months_and_days(self):
        item = DueItem(TASK, Status.OK, time_remaining=105)
        assert format_time_remaining(item) == "3mo 15d"

    def test_positive_days_only(self):
        item = DueItem(TASK, Status.DUE_SOON, time_remaining=14)
        assert format_time_remaining(item) == "14d"

    def test_negative_overdue_months(self):
        item = DueItem(TASK, Status.OVERDUE, time_remaining=-65)
        assert format_time_remaining(item) == "-2mo 5d"

    def test_negative_overdue_days_only(self):
        item = DueItem(TASK, Status.OVERDUE, time_remaining=-10)
        assert format_time_remaining(item) == "-10d"

    def test_zero(self):
        item = DueItem(TASK, Status.OVERDUE, time_remaining=0)
        assert format_time_remaining(item) == "0d"


class TestFormatLastDone:
    """Tests for format_last_done."""

    def test_none(self):
        assert format_last_done(None) == "-"

    def test_date_and_distance(self):
        record = ServiceRecord("oil_change", 94500, "2025-01-15")
        assert format_last_done(record) == "2025-01-15 @ 94,500"

    def test_date_only(self):
        assert format_last_done(ServiceRecord("oil_change", None, "2025-01-15")) == "2025-01-15"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated_with_ellipsis(self):
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestMakeTables:
    """Tests for make_status_table and make_history_table."""

    def test_empty_status_table(self):
        assert make_status_table([], {}) == []

    def test_status_row(self):
        item = DueItem(TASK, Status.OK, distance_remaining=6000, time_remaining=120)
        last = {"oil_change": ServiceRecord("oil_change", 94500, "2025-01-15")}
        assert make_status_table([item], last) == [
            ["Oil change", "2025-01-15 @ 94,500", "6,000", "4mo 0d"]
        ]

    def test_history_row_uses_task_title(self):
        records = [ServiceRecord("oil_change", 95000, "2025-01-15")]
        assert make_history_table(records, DEFAULT_CATALOG) == [
            ["2025-01-15", "95,000", "Oil change"]
        ]

    def test_history_unknown_key_shown_as_is(self):
        records = [ServiceRecord("deleted_task", None, "2025-01-15")]
        assert make_history_table(records, DEFAULT_CATALOG)[0][2] == "deleted_task"


# =============================================================================
# Commands
# =============================================================================


@pytest.fixture
def vehicle_file(tmp_path):
    path = tmp_path / "integra.yaml"
    path.write_text(
        """
vehicle:
  name: 2024 Acura Integra
state:
  currentDistance: 14600
tasks:
  - key: oil_change
    title: Oil change
    intervalDistance: 5000
    leadDistance: 500
  - key: brake_fluid
    title: Brake fluid
    intervalDays: 1095
    leadDays: 30
history:
  - taskKey: oil_change
    date: '2025-01-15'
    distance: 10000
  - taskKey: brake_fluid
    date: '2022-05-28'
"""
    )
    return path


class TestCommands:
    """End-to-end tests for the CLI commands."""

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.yaml"), "status"]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_status(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "status", "--as-of", "2025-06-01"]) == 0
        out = capsys.readouterr().out
        assert "Vehicle: 2024 Acura Integra" in out
        assert "Current distance: 14,600" in out
        # brake fluid: 1100 days since service -> overdue, listed before due soon
        assert out.index("OVERDUE:") < out.index("Brake fluid") < out.index("DUE SOON:")
        assert out.index("DUE SOON:") < out.index("Oil change")
        assert "-5d" in out

    def test_status_due_only_hides_ok(self, vehicle_file, capsys):
        main([str(vehicle_file), "update-distance", "11000"])
        main([str(vehicle_file), "log", "brake_fluid", "--date", "2025-05-01"])
        capsys.readouterr()

        assert main([str(vehicle_file), "status", "--due-only", "--as-of", "2025-06-01"]) == 0
        out = capsys.readouterr().out
        assert "OK:" not in out
        assert "Nothing due." in out

    def test_status_bad_as_of(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "status", "--as-of", "June 1st"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_history(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history"]) == 0
        out = capsys.readouterr().out
        assert "Total services: 2" in out
        # newest first
        assert out.index("2025-01-15") < out.index("2022-05-28")

    def test_history_filter(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history", "--task", "OIL"]) == 0
        out = capsys.readouterr().out
        assert "Showing: 1 (filtered)" in out
        assert "Brake fluid" not in out

    def test_history_since(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history", "--since", "2024-01-01"]) == 0
        assert "Showing: 1 (filtered)" in capsys.readouterr().out

    def test_log_defaults_to_stored_distance(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "log", "OIL_CHANGE", "--date", "2025-06-01"]) == 0
        assert "Record saved." in capsys.readouterr().out

        last = read_service_records(vehicle_file)[-1]
        assert last == ServiceRecord("oil_change", 14600, "2025-06-01", record_id=2)

    def test_log_explicit_distance(self, vehicle_file):
        assert main([str(vehicle_file), "log", "oil_change", "--distance", "14700"]) == 0
        assert read_service_records(vehicle_file)[-1].done_at_distance == 14700

    def test_log_dry_run(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "log", "oil_change", "--dry-run"]) == 0
        assert "dry run" in capsys.readouterr().out
        assert len(read_service_records(vehicle_file)) == 2

    def test_log_unknown_task(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "log", "muffler"]) == 1
        out = capsys.readouterr().out
        assert "Unknown task key 'muffler'" in out
        assert "Key: oil_change" in out

    def test_update_distance(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "update-distance", "15000"]) == 0
        assert "Distance updated." in capsys.readouterr().out
        assert read_current_distance(vehicle_file) == 15000

    def test_update_distance_rejects_nan(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "update-distance", "nan"]) == 1
        assert read_current_distance(vehicle_file) == 14600

    def test_update_distance_dry_run(self, vehicle_file):
        assert main([str(vehicle_file), "update-distance", "15000", "--dry-run"]) == 0
        assert read_current_distance(vehicle_file) == 14600

    def test_tasks(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "tasks"]) == 0
        out = capsys.readouterr().out
        assert "Tasks: 2" in out
        assert "1095d" in out

    def test_tasks_save_pins_default_catalog(self, tmp_path, capsys):
        path = tmp_path / "v.yaml"
        path.write_text("state:\n  currentDistance: 0\n")
        assert main([str(path), "tasks", "--save"]) == 0
        data = yaml.safe_load(path.read_text())
        assert [t["key"] for t in data["tasks"]] == [t.key for t in DEFAULT_CATALOG]

    def test_init(self, tmp_path, capsys):
        path = tmp_path / "new.yaml"
        assert main([str(path), "init", "--name", "Integra", "--distance", "1200"]) == 0
        assert read_current_distance(path) == 1200

    def test_init_existing_file(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "init"]) == 1
        assert "already exists" in capsys.readouterr().out

    def test_status_bad_history_distance(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "state:\n  currentDistance: 15000\n"
            "history:\n  - taskKey: oil_change\n    date: '2025-01-15'\n    distance: '12k'\n"
        )
        assert main([str(path), "status", "--as-of", "2025-06-01"]) == 1
        assert "Error: oil_change: service distance" in capsys.readouterr().out

    def test_malformed_file(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("history: [unclosed\n")
        assert main([str(path), "status"]) == 1
        assert "Error: Cannot read" in capsys.readouterr().out
