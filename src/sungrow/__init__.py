"""Async Python client for the Sungrow iSolarCloud OpenAPI."""

from .auth import SessionManager
from .bridge import NotificationBridge
from .client import SunGrow
from .config import SunGrowConfig, load_config, parse_config
from .exceptions import (
    SunGrowAPIError,
    SunGrowAuthError,
    SunGrowConfigError,
    SunGrowEmptyResultError,
    SunGrowError,
    SunGrowTokenExpiredError,
)
from .models import (
    DayEnergySummary,
    DirectedEdge,
    FlowNode,
    NodeId,
    OverviewSummary,
    PowerFlowSnapshot,
    StationDetails,
)
from .mqtt import BridgeMQTT
from .telemetry import TelemetryClient

__version__ = "0.1.0"

__all__ = [
    "SunGrow",
    "SunGrowConfig",
    "SessionManager",
    "TelemetryClient",
    "NotificationBridge",
    "BridgeMQTT",
    "load_config",
    "parse_config",
    "NodeId",
    "DirectedEdge",
    "FlowNode",
    "PowerFlowSnapshot",
    "DayEnergySummary",
    "OverviewSummary",
    "StationDetails",
    "SunGrowError",
    "SunGrowConfigError",
    "SunGrowAuthError",
    "SunGrowTokenExpiredError",
    "SunGrowAPIError",
    "SunGrowEmptyResultError",
]
