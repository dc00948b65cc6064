"""Station detail endpoint."""

import logging

from .models import StationDetails
from .normalize import to_station_details
from .telemetry import TelemetryClient

logger = logging.getLogger(__name__)


async def fetch_station_details(telemetry: TelemetryClient, plant_sn: str) -> StationDetails:
    """Fetch and normalize the plant's address and peak power."""
    record = await telemetry.fetch_station_detail(plant_sn)

    logger.debug("Station name: %s", record.get("ps_name"))
    logger.debug("Station location: %s", record.get("ps_location"))
    logger.debug("Design capacity: %s W", record.get("design_capacity"))

    return to_station_details(record)
