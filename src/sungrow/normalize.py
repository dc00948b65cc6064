"""Reshape iSolarCloud values into the normalized result models.

All functions are pure: they read metric-keyed mappings (see
``points.by_metric``) and build fresh model instances on every call.
"""

import logging
import math
from typing import Any, Mapping

from .constants import DEFAULT_ADDRESS
from .models import (
    METER_TYPES,
    DayEnergySummary,
    DirectedEdge,
    EnergyMeter,
    FlowNode,
    NodeId,
    OverviewSummary,
    PowerFlowSnapshot,
    StationDetails,
)

logger = logging.getLogger(__name__)

BATTERY_STATUS_LABELS = {
    "1": "Charging",
    "2": "Discharging",
    "0": "Idle",
}

DAY_ENERGY_FIELDS = dict(zip(METER_TYPES, (
    "daily_production",
    "daily_consumption",
    "daily_feed_in",
    "daily_purchased",
    "daily_self_consumption",
)))


def _float(values: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    """Parse a vendor value (usually a string) as float."""
    v = values.get(key)
    if v is None or v == "":
        return default
    try:
        value = float(v)
    except (ValueError, TypeError):
        return default
    # "NaN" and "inf" parse but are not readings
    if not math.isfinite(value):
        return default
    return value


def _magnitude(values: Mapping[str, Any], key: str) -> float:
    return max(_float(values, key), 0.0)


def status_label(code: Any) -> str:
    """Map a raw battery status code to a display label."""
    code = str(code).strip()
    return BATTERY_STATUS_LABELS.get(code, f"Unknown({code})")


def _split_battery_power(metrics: Mapping[str, Any]) -> tuple[float, float]:
    """Return (charging, discharging) battery power in watts.

    Battery measuring points carry no power split, only voltage, current
    and a status code; the split is derived from those when needed.
    """
    if "battery_charging_power" in metrics or "battery_discharging_power" in metrics:
        return (
            _magnitude(metrics, "battery_charging_power"),
            _magnitude(metrics, "battery_discharging_power"),
        )
    if "battery_voltage" not in metrics or "battery_current" not in metrics:
        return 0.0, 0.0
    power = abs(_float(metrics, "battery_voltage") * _float(metrics, "battery_current"))
    code = str(metrics.get("battery_status", "")).strip()
    if code == "1":
        return power, 0.0
    if code == "2":
        return 0.0, power
    return 0.0, 0.0


def to_power_flow(metrics: Mapping[str, Any]) -> PowerFlowSnapshot:
    """Build the four-node power-flow graph and infer its edges."""
    charging, discharging = _split_battery_power(metrics)
    pv_power = _magnitude(metrics, "pv_power")
    load_power = _magnitude(metrics, "load_power")

    connections: list[DirectedEdge] = []

    # Charging wins if the vendor ever reports both
    if charging > 0:
        connections.append(DirectedEdge(NodeId.PV, NodeId.STORAGE))
        storage_power = charging
        storage_status = "Charging"
    elif discharging > 0:
        connections.append(DirectedEdge(NodeId.STORAGE, NodeId.LOAD))
        storage_power = discharging
        storage_status = "Discharging"
    else:
        storage_power = 0.0
        storage_status = "Idle"

    if pv_power > 0:
        connections.append(DirectedEdge(NodeId.PV, NodeId.LOAD))

    net_grid = _magnitude(metrics, "feed_in_power") - _magnitude(metrics, "purchased_power")
    if net_grid > 0:
        connections.append(DirectedEdge(NodeId.LOAD, NodeId.GRID))
        grid_power = net_grid
    elif net_grid < 0:
        connections.append(DirectedEdge(NodeId.GRID, NodeId.LOAD))
        grid_power = -net_grid
    else:
        grid_power = 0.0

    if metrics.get("battery_status") not in (None, ""):
        storage_status = status_label(metrics["battery_status"])

    charge_level = min(max(_float(metrics, "battery_soc") * 100, 0.0), 100.0)

    return PowerFlowSnapshot(
        pv=FlowNode(pv_power, "Active" if pv_power > 0 else "Idle"),
        storage=FlowNode(storage_power, storage_status, charge_level),
        load=FlowNode(load_power, "Active" if load_power > 0 else "Idle"),
        grid=FlowNode(grid_power, "Active" if grid_power > 0 else "Idle"),
        connections=connections,
    )


def to_day_energy(metrics: Mapping[str, Any]) -> DayEnergySummary:
    """Daily meters, always all five, absent values as 0."""
    return DayEnergySummary(
        meters=[
            EnergyMeter(meter_type, _magnitude(metrics, field_name))
            for meter_type, field_name in DAY_ENERGY_FIELDS.items()
        ]
    )


def to_overview(metrics: Mapping[str, Any]) -> OverviewSummary:
    return OverviewSummary(
        last_day_wh=_magnitude(metrics, "day_energy"),
        last_month_wh=_magnitude(metrics, "month_energy"),
        last_year_wh=_magnitude(metrics, "year_energy"),
    )


def to_station_details(record: Mapping[str, Any]) -> StationDetails:
    """Map a getPowerStationDetail ``result_data`` record.

    ``design_capacity`` is reported in watts.
    """
    address = record.get("ps_location") or DEFAULT_ADDRESS
    capacity_w = _float(record, "design_capacity")
    if "design_capacity" not in record:
        logger.debug("Station record has no design_capacity")
    return StationDetails(address=address, peak_power_kw=capacity_w / 1000)
