"""Real-time point endpoints: power flow, day energy and overview."""

from .config import SunGrowConfig
from .exceptions import SunGrowConfigError
from .models import DayEnergySummary, OverviewSummary, PowerFlowSnapshot
from .normalize import to_day_energy, to_overview, to_power_flow
from .points import (
    DAY_ENERGY_METRICS,
    OVERVIEW_METRICS,
    POWER_FLOW_METRICS,
    by_metric,
    point_ids_for,
)
from .telemetry import TelemetryClient


async def _fetch_metrics(
    telemetry: TelemetryClient, config: SunGrowConfig, point_map: dict[str, str], metrics: tuple[str, ...]
) -> dict:
    group = {metric: point_map[metric] for metric in metrics if metric in point_map}
    if not group:
        raise SunGrowConfigError(f"No point ids configured for {', '.join(metrics)}")
    device_point = await telemetry.fetch_realtime_points(
        point_ids_for(group, metrics), config.ps_key, config.device_type
    )
    return by_metric(device_point, group)


async def get_power_flow(
    telemetry: TelemetryClient, config: SunGrowConfig, point_map: dict[str, str]
) -> PowerFlowSnapshot:
    """Fetch PV, battery, load and grid points and build the flow graph."""
    metrics = await _fetch_metrics(telemetry, config, point_map, POWER_FLOW_METRICS)
    return to_power_flow(metrics)


async def get_day_energy(
    telemetry: TelemetryClient, config: SunGrowConfig, point_map: dict[str, str]
) -> DayEnergySummary:
    """Fetch today's cumulative meters."""
    metrics = await _fetch_metrics(telemetry, config, point_map, DAY_ENERGY_METRICS)
    return to_day_energy(metrics)


async def get_overview(
    telemetry: TelemetryClient, config: SunGrowConfig, point_map: dict[str, str]
) -> OverviewSummary:
    """Fetch day, month and year energy totals."""
    metrics = await _fetch_metrics(telemetry, config, point_map, OVERVIEW_METRICS)
    return to_overview(metrics)
