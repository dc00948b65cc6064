"""Tests for point-id tables."""

import pytest

from sungrow.exceptions import SunGrowConfigError
from sungrow.points import (
    DAY_ENERGY_METRICS,
    POWER_FLOW_METRICS,
    by_metric,
    default_device_type,
    point_ids_for,
    resolve_point_map,
)


def test_default_map_covers_power_flow_and_day_energy() -> None:
    point_map = resolve_point_map("storage-v2")

    for metric in ("battery_soc", "battery_charging_power", "battery_discharging_power",
                   "pv_power", "load_power", "feed_in_power", "purchased_power"):
        assert metric in point_map
    for metric in DAY_ENERGY_METRICS:
        assert metric in point_map


def test_overrides_are_applied_without_touching_table() -> None:
    point_map = resolve_point_map("storage-v2", {"pv_power": "p99999"})

    assert point_map["pv_power"] == "99999"
    assert resolve_point_map("storage-v2")["pv_power"] == "13003"


def test_unknown_version_and_metric() -> None:
    with pytest.raises(SunGrowConfigError):
        resolve_point_map("v0")
    with pytest.raises(SunGrowConfigError):
        resolve_point_map("storage-v2", {"wind_power": "1"})


def test_point_ids_for_skips_unmapped_and_duplicates() -> None:
    point_map = {"pv_power": "1", "load_power": "2", "daily_production": "1"}

    assert point_ids_for(point_map, POWER_FLOW_METRICS) == ["1", "2"]
    assert point_ids_for(point_map, ("pv_power", "daily_production")) == ["1"]


def test_by_metric() -> None:
    point_map = resolve_point_map("battery-v1")
    device_point = {"p58604": "0.93", "p58608": "1", "ps_key": "5326778_43_2_1"}

    assert by_metric(device_point, point_map) == {"battery_soc": "0.93", "battery_status": "1"}


def test_default_device_type() -> None:
    assert default_device_type("battery-v1") == "43"
    assert default_device_type("storage-v2") == "14"
