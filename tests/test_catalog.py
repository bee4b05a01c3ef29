#!/usr/bin/env python3
"""Tests for the built-in catalog and catalog helpers."""
import pytest
from upkeep import (
    DEFAULT_CATALOG,
    Interval,
    InvalidInput,
    MaintenanceTaskDef,
    build_catalog,
    get_task,
)


class TestDefaultCatalog:
    """Tests for DEFAULT_CATALOG contents."""

    def test_is_tuple(self):
        assert isinstance(DEFAULT_CATALOG, tuple)

    def test_keys_unique(self):
        keys = [t.key for t in DEFAULT_CATALOG]
        assert len(keys) == len(set(keys))

    def test_order(self):
        assert [t.key for t in DEFAULT_CATALOG] == [
            "oil_change",
            "tire_rotation",
            "cvt_fluid",
            "engine_air_filter",
            "cabin_air_filter",
            "brake_fluid",
            "spark_plugs",
            "coolant",
        ]

    def test_oil_change_both_dimensions(self):
        oil = get_task(DEFAULT_CATALOG, "oil_change")
        assert oil.interval == Interval(distance=5500, days=180)
        assert oil.lead_distance == 500
        assert oil.lead_time == 14

    def test_brake_fluid_time_only(self):
        brake = get_task(DEFAULT_CATALOG, "brake_fluid")
        assert brake.interval.distance is None
        assert brake.interval.days == 3 * 365


class TestBuildCatalog:
    """Tests for build_catalog."""

    def test_preserves_order(self):
        tasks = [
            MaintenanceTaskDef(key="b", title="B"),
            MaintenanceTaskDef(key="a", title="A"),
        ]
        assert [t.key for t in build_catalog(tasks)] == ["b", "a"]

    def test_accepts_generator(self):
        catalog = build_catalog(MaintenanceTaskDef(key=k, title=k) for k in "xyz")
        assert len(catalog) == 3

    def test_rejects_duplicate_keys(self):
        tasks = [
            MaintenanceTaskDef(key="oil", title="Oil"),
            MaintenanceTaskDef(key="oil", title="Oil again"),
        ]
        with pytest.raises(InvalidInput, match="oil"):
            build_catalog(tasks)


class TestGetTask:
    """Tests for get_task lookup."""

    def test_case_insensitive(self):
        assert get_task(DEFAULT_CATALOG, "OIL_Change").key == "oil_change"

    def test_missing_returns_none(self):
        assert get_task(DEFAULT_CATALOG, "muffler") is None
