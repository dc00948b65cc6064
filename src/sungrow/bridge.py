"""Notification bridge between the widget view layer and the SunGrow client.

Every data request is answered with exactly one ``..._DATA_RECEIVED`` or
``SUN_GROW_ERROR`` notification, except when the vendor returned no data
for the cycle; then nothing is sent and the view keeps its last values.
"""

import logging
from typing import Any, Awaitable, Callable

from .client import SunGrow
from .config import SunGrowConfig, parse_config
from .constants import Notification
from .exceptions import SunGrowConfigError, SunGrowEmptyResultError, SunGrowError

logger = logging.getLogger(__name__)

SendCallback = Callable[[str, dict], Awaitable[None]]
# Called as factory(config, session=...); session is None for a fresh login
ClientFactory = Callable[..., SunGrow]

# request notification -> (SunGrow method name, reply notification)
REQUESTS = {
    Notification.DETAILS_REQUESTED: ("get_station_details", Notification.DETAILS_RECEIVED),
    Notification.CURRENT_POWER_REQUESTED: ("get_power_flow", Notification.CURRENT_POWER_RECEIVED),
    Notification.OVERVIEW_REQUESTED: ("get_overview", Notification.OVERVIEW_RECEIVED),
    Notification.DAY_ENERGY_REQUESTED: ("get_day_energy", Notification.DAY_ENERGY_RECEIVED),
}


class NotificationBridge:
    """Dispatches view-layer notifications to a SunGrow client."""

    def __init__(self, send: SendCallback, client_factory: ClientFactory = SunGrow):
        self._send = send
        self._client_factory = client_factory
        self.client: SunGrow | None = None

    async def handle(self, notification: str, payload: Any = None) -> None:
        if notification == Notification.CONFIG:
            await self._handle_config(payload)
            return

        if notification not in REQUESTS:
            logger.debug("Ignoring notification %s", notification)
            return
        method_name, reply = REQUESTS[notification]

        try:
            if isinstance(payload, dict) and payload.get("config"):
                self.apply_config(payload["config"])
            if self.client is None:
                raise SunGrowConfigError("No configuration received.")
            result = await getattr(self.client, method_name)()
        except SunGrowEmptyResultError as e:
            logger.debug("No data this cycle for %s: %s", notification, e)
            return
        except SunGrowError as e:
            logger.error("%s failed: %s", method_name, e)
            await self.send_error(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error in %s", method_name)
            await self.send_error(str(e) or e.__class__.__name__)
            return

        await self._send(reply, result.to_payload())

    def apply_config(self, data: dict | SunGrowConfig) -> SunGrow:
        """Validate config and (re)build the client when it changed.

        Changes that do not touch the account or endpoint keep the same
        session object, including a login that is still in flight.
        """
        config = data if isinstance(data, SunGrowConfig) else parse_config(data)
        current = self.client
        if current is not None and current.config == config:
            return current

        if current is not None and current.config.connection_key() == config.connection_key():
            client = self._client_factory(config, session=current.session)
        else:
            if current is not None:
                logger.info("Connection settings changed, starting a new session")
            client = self._client_factory(config, session=None)
        self.client = client
        return client

    async def send_error(self, message: str) -> None:
        await self._send(Notification.ERROR, {"message": message})

    async def _handle_config(self, payload: Any) -> None:
        try:
            if not isinstance(payload, dict):
                raise SunGrowConfigError("Config payload must be an object.")
            client = self.apply_config(payload)
            logger.info("Received config for plant %s", client.config.plant_sn or client.config.plant_id)
            await client.ensure_session()
        except SunGrowError as e:
            logger.error("Initial login failed: %s", e)
            await self.send_error(str(e))
