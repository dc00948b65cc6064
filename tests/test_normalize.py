"""Tests for the data normalizer."""

import pytest

from sungrow.models import DirectedEdge, NodeId
from sungrow.normalize import (
    status_label,
    to_day_energy,
    to_overview,
    to_power_flow,
    to_station_details,
)


def _flow(charging, discharging, pv, feed_in, purchased, **extra):
    return to_power_flow({
        "battery_charging_power": charging,
        "battery_discharging_power": discharging,
        "pv_power": pv,
        "feed_in_power": feed_in,
        "purchased_power": purchased,
        **extra,
    })


def _edges(snapshot):
    return [(e.from_node.value, e.to_node.value) for e in snapshot.connections]


def test_charging_with_pv_and_export() -> None:
    snapshot = _flow(150, 0, 500, 200, 0)

    assert _edges(snapshot) == [("PV", "STORAGE"), ("PV", "LOAD"), ("LOAD", "GRID")]
    assert snapshot.storage.current_power == 150
    assert snapshot.grid.current_power == 200
    assert snapshot.storage.status == "Charging"


def test_discharging_with_import() -> None:
    snapshot = _flow(0, 80, 0, 0, 300)

    assert _edges(snapshot) == [("STORAGE", "LOAD"), ("GRID", "LOAD")]
    assert snapshot.storage.current_power == 80
    assert snapshot.grid.current_power == 300
    assert snapshot.storage.status == "Discharging"


def test_all_zero_has_no_edges() -> None:
    snapshot = _flow(0, 0, 0, 0, 0)

    assert snapshot.connections == []
    for node_id in NodeId:
        assert snapshot.node(node_id).current_power == 0
    assert snapshot.storage.status == "Idle"
    assert snapshot.pv.status == "Idle"


def test_charging_takes_precedence() -> None:
    snapshot = _flow(100, 50, 0, 0, 0)

    assert _edges(snapshot) == [("PV", "STORAGE")]
    assert snapshot.storage.current_power == 100


def test_net_grid_uses_difference() -> None:
    snapshot = _flow(0, 0, 0, 100, 250)

    assert _edges(snapshot) == [("GRID", "LOAD")]
    assert snapshot.grid.current_power == 150


def test_missing_and_unparseable_values_are_zero() -> None:
    snapshot = to_power_flow({"battery_charging_power": "n/a", "pv_power": "", "load_power": None})

    assert snapshot.connections == []
    assert snapshot.storage.current_power == 0
    assert snapshot.load.current_power == 0
    assert snapshot.storage.charge_level == 0


def test_string_values_and_charge_level() -> None:
    snapshot = to_power_flow({
        "battery_soc": "0.875",
        "pv_power": "1200.5",
        "load_power": "640",
    })

    assert snapshot.storage.charge_level == 87.5
    assert snapshot.pv.current_power == 1200.5
    assert snapshot.load.current_power == 640
    assert snapshot.load.status == "Active"


def test_charge_level_is_clamped() -> None:
    assert to_power_flow({"battery_soc": "1.2"}).storage.charge_level == 100
    assert to_power_flow({"battery_soc": "-0.1"}).storage.charge_level == 0


def test_magnitudes_are_never_negative() -> None:
    snapshot = _flow(-150, 0, -20, 0, 0)

    assert snapshot.connections == []
    assert snapshot.pv.current_power == 0
    assert snapshot.storage.current_power == 0


@pytest.mark.parametrize(
    "code,label",
    [("1", "Charging"), ("2", "Discharging"), ("0", "Idle"), ("7", "Unknown(7)"), (3, "Unknown(3)")],
)
def test_status_label(code, label) -> None:
    assert status_label(code) == label


def test_status_code_overrides_derived_status() -> None:
    snapshot = _flow(0, 0, 0, 0, 0, battery_status="9")

    assert snapshot.storage.status == "Unknown(9)"


def test_battery_points_derive_power_from_voltage_and_current() -> None:
    snapshot = to_power_flow({
        "battery_soc": "0.5",
        "battery_status": "2",
        "battery_voltage": "50",
        "battery_current": "-4",
    })

    assert _edges(snapshot) == [("STORAGE", "LOAD")]
    assert snapshot.storage.current_power == 200
    assert snapshot.storage.status == "Discharging"
    assert snapshot.storage.charge_level == 50


def test_power_flow_payload_shape() -> None:
    payload = _flow(150, 0, 500, 200, 0, battery_soc="0.5").to_payload()
    flow = payload["siteCurrentPowerFlow"]

    assert flow["unit"] == "W"
    assert flow["STORAGE"] == {"currentPower": 150, "status": "Charging", "chargeLevel": 50}
    assert flow["PV"] == {"currentPower": 500, "status": "Active"}
    assert flow["connections"][0] == {"from": "PV", "to": "STORAGE"}


def test_normalizing_twice_is_identical() -> None:
    raw = {"battery_charging_power": "150", "pv_power": "500", "feed_in_power": "200", "battery_soc": "0.4"}

    assert to_power_flow(raw) == to_power_flow(raw)
    assert to_day_energy(raw) == to_day_energy(raw)
    assert raw == {"battery_charging_power": "150", "pv_power": "500", "feed_in_power": "200", "battery_soc": "0.4"}


def test_edges_are_value_objects() -> None:
    assert DirectedEdge(NodeId.PV, NodeId.LOAD) == DirectedEdge(NodeId.PV, NodeId.LOAD)


def test_day_energy_is_total() -> None:
    summary = to_day_energy({
        "daily_production": "4000",
        "daily_consumption": "2000",
        "daily_feed_in": "1000",
        "daily_self_consumption": "1500",
    })

    assert [m.type for m in summary.meters] == [
        "Production", "Consumption", "FeedIn", "Purchased", "SelfConsumption",
    ]
    assert summary.value("Purchased") == 0
    assert summary.value("Production") == 4000


def test_day_energy_payload_shape() -> None:
    payload = to_day_energy({}).to_payload()

    meters = payload["energyDetails"]["meters"]
    assert len(meters) == 5
    assert meters[3] == {"type": "Purchased", "values": [{"value": 0}]}


def test_overview() -> None:
    overview = to_overview({"day_energy": "5000", "year_energy": "200000"})

    assert overview.last_day_wh == 5000
    assert overview.last_month_wh == 0
    assert overview.to_payload()["overview"]["lastYearData"] == {"energy": 200000}


def test_station_details() -> None:
    details = to_station_details({"ps_location": "Main St 1", "design_capacity": 14050})

    assert details.peak_power_kw == 14.05
    assert details.to_payload() == {"details": {"location": {"address": "Main St 1"}, "peakPower": 14.05}}


def test_station_details_defaults() -> None:
    details = to_station_details({})

    assert details.address == "No address"
    assert details.peak_power_kw == 0


def test_non_finite_values_are_zero() -> None:
    snapshot = to_power_flow({
        "battery_soc": "NaN",
        "pv_power": "nan",
        "load_power": "inf",
        "feed_in_power": "-inf",
        "purchased_power": "Infinity",
    })

    assert snapshot.storage.charge_level == 0
    assert snapshot.pv.current_power == 0
    assert snapshot.load.current_power == 0
    assert snapshot.grid.current_power == 0
    assert snapshot.connections == []
    assert to_day_energy({"daily_production": "nan"}).value("Production") == 0
    assert to_station_details({"design_capacity": "inf"}).peak_power_kw == 0
