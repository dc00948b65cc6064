"""Main SunGrow client: public interface and orchestration."""

import logging

from .auth import SessionManager
from .config import SunGrowConfig
from .energy import (
    get_day_energy as _get_day_energy,
    get_overview as _get_overview,
    get_power_flow as _get_power_flow,
)
from .exceptions import SunGrowConfigError
from .models import DayEnergySummary, OverviewSummary, PowerFlowSnapshot, StationDetails
from .points import resolve_point_map
from .station import fetch_station_details as _fetch_station_details
from .telemetry import TelemetryClient
from .transport import OpenApiTransport

logger = logging.getLogger(__name__)


class SunGrow:
    """Async client for one iSolarCloud plant.

    Usage::

        api = SunGrow(load_config("sungrow.json"))
        flow = await api.get_power_flow()
    """

    def __init__(
        self,
        config: SunGrowConfig,
        transport: OpenApiTransport | None = None,
        session: SessionManager | None = None,
    ):
        self.config = config
        self.point_map = resolve_point_map(config.point_map_version, config.point_ids)

        if session is not None:
            # Shared session: its token and any login in flight carry over
            self._transport = transport or session.transport
            self._transport.config = config
            session.config = config
            self.session = session
        else:
            self._transport = transport or OpenApiTransport(config)
            self.session = SessionManager(self._transport, config)
        self.telemetry = TelemetryClient(self._transport, self.session, config)

    async def ensure_session(self) -> str:
        return await self.session.ensure_session()

    # ── Station ──────────────────────────────────────────────────────────

    async def get_station_details(self) -> StationDetails:
        if not self.config.plant_sn:
            raise SunGrowConfigError("No plantSN in config.")
        return await _fetch_station_details(self.telemetry, self.config.plant_sn)

    # ── Real-time points ─────────────────────────────────────────────────

    async def get_power_flow(self) -> PowerFlowSnapshot:
        self._require_ps_key()
        return await _get_power_flow(self.telemetry, self.config, self.point_map)

    async def get_day_energy(self) -> DayEnergySummary:
        self._require_ps_key()
        return await _get_day_energy(self.telemetry, self.config, self.point_map)

    async def get_overview(self) -> OverviewSummary:
        self._require_ps_key()
        return await _get_overview(self.telemetry, self.config, self.point_map)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _require_ps_key(self) -> None:
        if not self.config.ps_key:
            raise SunGrowConfigError("No psKey in config.")
