"""Constants for the Sungrow iSolarCloud OpenAPI."""

DEFAULT_PORTAL_URL = "https://gateway.isolarcloud.eu"

PORTAL_URLS = {
    "eu": "https://gateway.isolarcloud.eu",
    "cn": "https://gateway.isolarcloud.com",
    "intl": "https://gateway.isolarcloud.com.hk",
    "au": "https://augateway.isolarcloud.com",
}

LOGIN_PATH = "openapi/login"
STATION_DETAIL_PATH = "openapi/getPowerStationDetail"
DEVICE_REALTIME_PATH = "openapi/getDeviceRealTimeData"

LANG = "_en_US"

# "207" for the web portal key set, "901" for the app key set
SYS_CODES = ("207", "901")
DEFAULT_SYS_CODE = "207"

# Vendor success marker, always the string "1"
RESULT_OK = "1"

# Result codes reported with HTTP 200 that mean the token is no longer valid
TOKEN_EXPIRED_CODES = frozenset({"E00003"})

ACCESS_KEY_HEADER = "x-access-key"


class DeviceType:
    """iSolarCloud device type codes."""
    ENERGY_STORAGE = "14"
    BATTERY = "43"


DEFAULT_ADDRESS = "No address"


class Notification:
    """Notification names exchanged with the widget view layer."""
    PREFIX = "MMM-SunGrow-NOTIFICATION_SUNGROW_"

    CONFIG = "SUN_GROW_CONFIG"
    ERROR = "SUN_GROW_ERROR"

    DETAILS_REQUESTED = PREFIX + "DETAILS_DATA_REQUESTED"
    CURRENT_POWER_REQUESTED = PREFIX + "CURRENTPOWER_DATA_REQUESTED"
    OVERVIEW_REQUESTED = PREFIX + "OVERVIEW_DATA_REQUESTED"
    DAY_ENERGY_REQUESTED = PREFIX + "DAY_ENERGY_DATA_REQUESTED"

    DETAILS_RECEIVED = PREFIX + "DETAILS_DATA_RECEIVED"
    CURRENT_POWER_RECEIVED = PREFIX + "CURRENTPOWER_DATA_RECEIVED"
    OVERVIEW_RECEIVED = PREFIX + "OVERVIEW_DATA_RECEIVED"
    DAY_ENERGY_RECEIVED = PREFIX + "DAY_ENERGY_DATA_RECEIVED"
