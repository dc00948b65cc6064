"""JSON-over-HTTP transport for the iSolarCloud OpenAPI."""

import asyncio
import logging

import aiohttp

from .config import SunGrowConfig
from .constants import ACCESS_KEY_HEADER
from .exceptions import SunGrowAPIError

logger = logging.getLogger(__name__)


class OpenApiTransport:
    """POSTs JSON bodies to OpenAPI endpoints.

    Returns ``(status, body)`` for every HTTP response, leaving status and
    result-code interpretation to the caller. Only transport failures raise.
    """

    def __init__(self, config: SunGrowConfig):
        self.config = config

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            ACCESS_KEY_HEADER: self.config.secret_key.get_secret_value(),
        }

    async def post(self, path: str, body: dict) -> tuple[int, dict | None]:
        url = self.config.url(path)
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
        logger.debug("POST %s", url)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=body, headers=self.headers) as response:
                    if not 200 <= response.status < 300:
                        logger.debug("POST %s -> status=%s", path, response.status)
                        return response.status, None
                    try:
                        data = await response.json(content_type=None)
                    except ValueError as e:
                        raise SunGrowAPIError(
                            f"{path}: invalid JSON response: {e}", status_code=response.status
                        ) from e
                    if not isinstance(data, dict):
                        raise SunGrowAPIError(
                            f"{path}: unexpected response: {data!r}", status_code=response.status
                        )
                    return response.status, data
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SunGrowAPIError(f"{path}: request failed: {e}") from e
