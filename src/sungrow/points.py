"""Versioned point-id tables for iSolarCloud device real-time data.

Point ids are opaque vendor codes. Requests send them bare ("13141"),
responses key the values with a "p" prefix ("p13141").
"""

import logging
from typing import Any, Mapping

from .constants import DeviceType
from .exceptions import SunGrowConfigError

logger = logging.getLogger(__name__)

POWER_FLOW_METRICS = (
    "battery_soc",
    "battery_status",
    "battery_charging_power",
    "battery_discharging_power",
    "battery_voltage",
    "battery_current",
    "pv_power",
    "load_power",
    "feed_in_power",
    "purchased_power",
)

DAY_ENERGY_METRICS = (
    "daily_production",
    "daily_consumption",
    "daily_feed_in",
    "daily_purchased",
    "daily_self_consumption",
)

OVERVIEW_METRICS = (
    "day_energy",
    "month_energy",
    "year_energy",
)

KNOWN_METRICS = frozenset(POWER_FLOW_METRICS + DAY_ENERGY_METRICS + OVERVIEW_METRICS)

POINT_MAPS: dict[str, dict[str, str]] = {
    # Battery measuring points (device type 43): no power split, only
    # state of charge, status code, voltage and current.
    "battery-v1": {
        "battery_soc": "58604",
        "battery_status": "58608",
        "battery_voltage": "58601",
        "battery_current": "58602",
    },
    # Energy storage system (device type 14): full four-node flow.
    "storage-v2": {
        "battery_soc": "13141",
        "battery_charging_power": "13126",
        "battery_discharging_power": "13150",
        "pv_power": "13003",
        "load_power": "13119",
        "feed_in_power": "13121",
        "purchased_power": "13149",
        "daily_production": "13112",
        "daily_consumption": "13199",
        "daily_feed_in": "13122",
        "daily_purchased": "13147",
        "daily_self_consumption": "13116",
        "day_energy": "13112",
    },
}


# Device type whose points each table describes
POINT_MAP_DEVICE_TYPES = {
    "battery-v1": DeviceType.BATTERY,
    "storage-v2": DeviceType.ENERGY_STORAGE,
}


def default_device_type(version: str) -> str:
    return POINT_MAP_DEVICE_TYPES.get(version, DeviceType.ENERGY_STORAGE)


def resolve_point_map(version: str, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the point map for ``version`` with configured overrides applied."""
    if version not in POINT_MAPS:
        raise SunGrowConfigError(
            f"Unknown point map version '{version}'. "
            f"Known versions: {', '.join(POINT_MAPS)}"
        )
    point_map = dict(POINT_MAPS[version])
    for metric, point_id in (overrides or {}).items():
        if metric not in KNOWN_METRICS:
            raise SunGrowConfigError(f"Unknown metric '{metric}' in pointIds")
        point_map[metric] = str(point_id).lstrip("p")
    return point_map


def point_ids_for(point_map: Mapping[str, str], metrics: tuple[str, ...]) -> list[str]:
    """Point ids to request for a metric group, without duplicates."""
    ids = []
    for metric in metrics:
        point_id = point_map.get(metric)
        if point_id and point_id not in ids:
            ids.append(point_id)
    return ids


def by_metric(device_point: Mapping[str, Any], point_map: Mapping[str, str]) -> dict[str, Any]:
    """Translate a point-keyed ``device_point`` into a metric-keyed dict.

    Metrics whose point is missing from the response are left out.
    """
    metrics = {}
    for metric, point_id in point_map.items():
        for key in (f"p{point_id}", point_id):
            if key in device_point:
                metrics[metric] = device_point[key]
                break
    logger.debug("Mapped %d of %d points to metrics", len(metrics), len(point_map))
    return metrics
