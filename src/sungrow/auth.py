"""Authentication: iSolarCloud login and session token management."""

import asyncio
import logging

from .config import SunGrowConfig
from .constants import LANG, LOGIN_PATH, RESULT_OK
from .exceptions import SunGrowAPIError, SunGrowAuthError
from .transport import OpenApiTransport

logger = logging.getLogger(__name__)


async def login(transport: OpenApiTransport, config: SunGrowConfig) -> str:
    """Log in with the configured account and return the session token.

    POST {portal}/openapi/login
    """
    config.require_credentials()
    body = {
        "appkey": config.app_key,
        "user_account": config.user_name,
        "user_password": config.user_password.get_secret_value(),
        "lang": LANG,
        "sys_code": config.sys_code,
        "token": "",
    }
    try:
        status, data = await transport.post(LOGIN_PATH, body)
    except SunGrowAPIError as e:
        raise SunGrowAuthError(f"Login failed: {e}") from e

    if not 200 <= status < 300:
        raise SunGrowAuthError(f"Login HTTP error! status: {status}")
    if data.get("result_code") != RESULT_OK:
        raise SunGrowAuthError(f"Login error: {data.get('result_msg') or 'Unknown error'}")

    result_data = data.get("result_data") or {}
    token = result_data.get("token")
    if not token:
        raise SunGrowAuthError(f"Login error: no token in response for user '{config.user_name}'")
    return token


class SessionManager:
    """Owns the session token and serializes logins.

    At most one login is in flight at a time. Callers arriving while it
    runs await the same future and see its token or its error.
    """

    def __init__(self, transport: OpenApiTransport, config: SunGrowConfig):
        self.transport = transport
        self.config = config
        self.token: str | None = None
        self._login_future: asyncio.Future | None = None

    @property
    def login_in_flight(self) -> bool:
        return self._login_future is not None and not self._login_future.done()

    async def ensure_session(self) -> str:
        """Return a usable token, logging in if there is none."""
        if self.token:
            return self.token

        if self.login_in_flight:
            logger.debug("Login in flight, waiting for it to finish")
            try:
                token = await asyncio.wait_for(
                    asyncio.shield(self._login_future), timeout=self.config.login_timeout
                )
            except asyncio.TimeoutError:
                raise SunGrowAuthError("login timed out") from None
            return self.token or token

        return await self._login()

    async def _login(self) -> str:
        future = asyncio.get_running_loop().create_future()
        self._login_future = future
        try:
            token = await login(self.transport, self.config)
        except Exception as e:
            logger.error("iSolarCloud login failed: %s", e)
            future.set_exception(e)
            # Mark retrieved so an unawaited failure is not reported by asyncio
            future.exception()
            raise
        except BaseException:
            future.cancel()
            raise
        else:
            self.token = token
            future.set_result(token)
            logger.info("iSolarCloud login successful for user '%s'", self.config.user_name)
            return token
        finally:
            self._login_future = None

    def invalidate(self, stale_token: str | None = None) -> None:
        """Drop the cached token so the next call logs in again.

        With ``stale_token``, the token is only dropped if it is still the
        cached one.
        """
        if stale_token is not None and self.token != stale_token:
            return
        if self.token:
            logger.info("Session token invalidated")
        self.token = None
