"""Telemetry client: request shaping and response validation."""

import logging

from .auth import SessionManager
from .config import SunGrowConfig
from .constants import (
    DEVICE_REALTIME_PATH,
    LANG,
    RESULT_OK,
    STATION_DETAIL_PATH,
    TOKEN_EXPIRED_CODES,
)
from .exceptions import SunGrowAPIError, SunGrowEmptyResultError, SunGrowTokenExpiredError
from .transport import OpenApiTransport

logger = logging.getLogger(__name__)


class TelemetryClient:
    """Issues authenticated OpenAPI queries.

    A request refused because the token expired is retried once after a
    fresh login; any further failure propagates to the caller.
    """

    def __init__(self, transport: OpenApiTransport, session: SessionManager, config: SunGrowConfig):
        self.transport = transport
        self.session = session
        self.config = config

    def _body(self, token: str, payload: dict) -> dict:
        return {
            "appkey": self.config.app_key,
            "lang": LANG,
            "sys_code": self.config.sys_code,
            "token": token,
            **payload,
        }

    async def _call(self, path: str, payload: dict) -> dict:
        token = await self.session.ensure_session()
        status, data = await self.transport.post(path, self._body(token, payload))

        if status == 401:
            logger.warning("%s: HTTP 401, token expired", path)
            self.session.invalidate(token)
            raise SunGrowTokenExpiredError(f"{path}: token expired (status {status})")
        if not 200 <= status < 300:
            raise SunGrowAPIError(f"{path}: HTTP error! status: {status}", status_code=status)

        result_code = data.get("result_code")
        if result_code in TOKEN_EXPIRED_CODES:
            logger.warning("%s: result_code=%s, token expired", path, result_code)
            self.session.invalidate(token)
            raise SunGrowTokenExpiredError(f"{path}: {data.get('result_msg') or 'token expired'}")
        if result_code != RESULT_OK:
            raise SunGrowAPIError(
                f"{path} error: {data.get('result_msg') or 'Unknown error'}",
                status_code=status,
                result_code=result_code,
            )
        return data

    async def request(self, path: str, payload: dict) -> dict:
        """POST an endpoint payload and return the validated response body."""
        try:
            return await self._call(path, payload)
        except SunGrowTokenExpiredError:
            logger.info("Re-login and retry %s", path)
            return await self._call(path, payload)

    async def fetch_station_detail(self, sn: str) -> dict:
        """Fetch the plant record.

        POST {portal}/openapi/getPowerStationDetail
        """
        data = await self.request(STATION_DETAIL_PATH, {"is_get_ps_remarks": "1", "sn": sn})
        result_data = data.get("result_data")
        if not result_data:
            logger.warning("No result_data in station detail response")
            raise SunGrowEmptyResultError("No station detail data")
        return result_data

    async def fetch_realtime_points(self, point_ids: list[str], ps_key: str, device_type: str) -> dict:
        """Fetch the current values of ``point_ids`` for one device.

        POST {portal}/openapi/getDeviceRealTimeData
        Returns the point-keyed ``device_point`` mapping.
        """
        payload = {
            "device_type": device_type,
            "point_id_list": point_ids,
            "ps_key_list": [ps_key],
        }
        data = await self.request(DEVICE_REALTIME_PATH, payload)
        device_points = (data.get("result_data") or {}).get("device_point_list") or []
        device_point = device_points[0].get("device_point") if device_points else None
        if not device_point:
            logger.warning("No device_point in real-time response for %s", ps_key)
            raise SunGrowEmptyResultError(f"No device_point for {ps_key}")
        return device_point
