"""Pydantic configuration model for the SunGrow client and bridge."""

import json
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import DEFAULT_PORTAL_URL, DEFAULT_SYS_CODE, PORTAL_URLS, SYS_CODES
from .exceptions import SunGrowConfigError
from .points import default_device_type


class SunGrowConfig(BaseModel):
    """Account, plant and polling settings.

    Field aliases match the keys of the widget's config message, so the
    payload of ``SUN_GROW_CONFIG`` can be validated as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    region: str | None = None
    portal_url: str = Field(DEFAULT_PORTAL_URL, alias="portalUrl")
    app_key: str = Field("", alias="appKey")
    secret_key: SecretStr = Field(SecretStr(""), alias="secretKey")
    user_name: str | None = Field(None, alias="userName")
    user_password: SecretStr | None = Field(None, alias="userPassword")

    plant_id: str = Field("", alias="plantId")
    plant_sn: str = Field("", alias="plantSN")
    ps_key: str = Field("", alias="psKey")
    device_type: str = Field("", alias="deviceType")
    sys_code: str = Field(DEFAULT_SYS_CODE, alias="sysCode")

    point_map_version: str = Field("storage-v2", alias="pointMapVersion")
    point_ids: dict[str, str] = Field(default_factory=dict, alias="pointIds")

    request_timeout: float = Field(30.0, gt=0, alias="requestTimeout")
    login_timeout: float = Field(30.0, gt=0, alias="loginTimeout")

    @field_validator("portal_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("sys_code")
    @classmethod
    def _known_sys_code(cls, value: str) -> str:
        if value not in SYS_CODES:
            raise ValueError(f"sys_code must be one of {', '.join(SYS_CODES)}")
        return value

    @field_validator("plant_id", "plant_sn", "ps_key", "device_type", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> Any:
        # The widget config may carry numeric plant ids
        if isinstance(value, int):
            return str(value)
        return value

    @model_validator(mode="after")
    def _apply_defaults(self) -> "SunGrowConfig":
        if self.region is not None:
            if self.region not in PORTAL_URLS:
                raise ValueError(
                    f"Unsupported region '{self.region}'. "
                    f"Supported regions: {', '.join(PORTAL_URLS)}"
                )
            # An explicit portalUrl wins over the region shortcut
            if "portal_url" not in self.model_fields_set:
                self.portal_url = PORTAL_URLS[self.region]
        if not self.device_type:
            self.device_type = default_device_type(self.point_map_version)
        return self

    def url(self, path: str) -> str:
        return f"{self.portal_url}/{path}"

    def connection_key(self) -> tuple:
        """Settings whose change invalidates the current session."""
        return (
            self.portal_url,
            self.app_key,
            self.secret_key.get_secret_value(),
            self.user_name,
            self.user_password.get_secret_value() if self.user_password else None,
            self.sys_code,
        )

    def require_credentials(self) -> None:
        """Raise SunGrowConfigError unless a login can be attempted."""
        if not self.portal_url:
            raise SunGrowConfigError("No portalUrl provided in config.")
        if not self.user_name or not self.user_password or not self.user_password.get_secret_value():
            raise SunGrowConfigError("No user/password provided in config for iSolarCloud login.")


def parse_config(data: dict[str, Any]) -> SunGrowConfig:
    """Validate a raw config mapping, converting validation errors."""
    try:
        return SunGrowConfig.model_validate(data)
    except ValidationError as e:
        # Built without input values so secrets never reach logs or the view
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors(include_input=False, include_url=False)
        )
        raise SunGrowConfigError(f"Invalid configuration: {problems}") from None


def load_config(path: str | Path) -> SunGrowConfig:
    """Load configuration from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise SunGrowConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise SunGrowConfigError(f"Config file {path} must contain a JSON object")
    return parse_config(data)
