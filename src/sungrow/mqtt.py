"""MQTT host for the notification bridge.

Runs the bridge as a standalone "data process" behind a broker:

Requests:      {prefix}/request/{notification}       (JSON payload)
Notifications: {prefix}/notification/{notification}  (JSON payload)
"""

import asyncio
import json
import logging

import aiomqtt

from .bridge import NotificationBridge
from .config import SunGrowConfig

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "sungrow"
RECONNECT_DELAY_S = 30


def request_topic(prefix: str, notification: str = "+") -> str:
    return f"{prefix}/request/{notification}"


def notification_topic(prefix: str, notification: str) -> str:
    return f"{prefix}/notification/{notification}"


def notification_from_topic(prefix: str, topic: str) -> str | None:
    """Return the notification name of a request topic, or None."""
    head = f"{prefix}/request/"
    if not topic.startswith(head) or len(topic) == len(head):
        return None
    return topic[len(head):]


class BridgeMQTT:
    """Serves the notification bridge over MQTT.

    Usage::

        host = BridgeMQTT("broker.local", config=load_config("sungrow.json"))
        await host.listen()
    """

    def __init__(
        self,
        broker: str,
        port: int = 1883,
        prefix: str = DEFAULT_PREFIX,
        username: str | None = None,
        password: str | None = None,
        config: SunGrowConfig | None = None,
    ):
        self.broker = broker
        self.port = port
        self.prefix = prefix
        self.username = username
        self.password = password

        self._mqtt_client: aiomqtt.Client | None = None
        self._connected = False
        self.bridge = NotificationBridge(self.publish)
        if config is not None:
            self.bridge.apply_config(config)

    @property
    def connected(self) -> bool:
        return self._connected

    async def publish(self, notification: str, payload: dict) -> None:
        if not self._mqtt_client or not self._connected:
            logger.warning("MQTT not connected, dropping %s", notification)
            return
        await self._mqtt_client.publish(
            notification_topic(self.prefix, notification), json.dumps(payload)
        )

    async def _dispatch(self, topic: str, raw: bytes | bytearray | str | None) -> None:
        notification = notification_from_topic(self.prefix, topic)
        if notification is None:
            return
        payload = None
        if raw:
            try:
                payload = json.loads(raw)
            except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
                logger.warning("Non-JSON MQTT message on %s", topic)
                return
        await self.bridge.handle(notification, payload)

    async def listen(self) -> None:
        """Connect and serve requests indefinitely, reconnecting on errors."""
        while True:
            try:
                async with aiomqtt.Client(
                    hostname=self.broker,
                    port=self.port,
                    username=self.username,
                    password=self.password,
                ) as client:
                    self._mqtt_client = client
                    self._connected = True
                    logger.info("MQTT connected to %s:%d", self.broker, self.port)

                    await client.subscribe(request_topic(self.prefix))
                    logger.info("Subscribed to %s", request_topic(self.prefix))

                    async for message in client.messages:
                        topic = str(message.topic)
                        logger.debug("MQTT message on topic: %s", topic)
                        await self._dispatch(topic, message.payload)

            except aiomqtt.MqttError as e:
                self._connected = False
                self._mqtt_client = None
                logger.error("MQTT connection lost: %s; reconnecting in %ds", e, RECONNECT_DELAY_S)
                await asyncio.sleep(RECONNECT_DELAY_S)
            except asyncio.CancelledError:
                self._connected = False
                self._mqtt_client = None
                logger.info("MQTT listen task cancelled")
                raise
