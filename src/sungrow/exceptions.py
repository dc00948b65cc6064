"""Exception hierarchy for the SunGrow client."""


class SunGrowError(Exception):
    """Base exception for all SunGrow errors."""


class SunGrowConfigError(SunGrowError):
    """Missing or invalid credentials, endpoint or plant settings."""


class SunGrowAuthError(SunGrowError):
    """Login rejected by iSolarCloud or not completed."""


class SunGrowTokenExpiredError(SunGrowAuthError):
    """A previously valid token was refused; re-login and retry once."""


class SunGrowAPIError(SunGrowError):
    """Non-auth API failure."""

    def __init__(self, message: str, status_code: int | None = None, result_code: str | None = None):
        self.status_code = status_code
        self.result_code = result_code
        super().__init__(message)


class SunGrowEmptyResultError(SunGrowError):
    """The response carried no data for this cycle."""
