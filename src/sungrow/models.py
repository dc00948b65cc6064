"""Normalized result shapes handed to the view layer."""

from dataclasses import dataclass, field
from enum import Enum


class NodeId(str, Enum):
    PV = "PV"
    STORAGE = "STORAGE"
    LOAD = "LOAD"
    GRID = "GRID"


@dataclass(frozen=True)
class DirectedEdge:
    """Energy moving from one node to another."""

    from_node: NodeId
    to_node: NodeId

    def to_payload(self) -> dict:
        return {"from": self.from_node.value, "to": self.to_node.value}


@dataclass
class FlowNode:
    """One node of the power-flow graph.

    ``current_power`` is a magnitude in watts; direction lives in the edges.
    """

    current_power: float = 0.0
    status: str = "Unknown"
    charge_level: float | None = None

    def to_payload(self) -> dict:
        payload = {"currentPower": self.current_power, "status": self.status}
        if self.charge_level is not None:
            payload["chargeLevel"] = self.charge_level
        return payload


@dataclass
class PowerFlowSnapshot:
    pv: FlowNode = field(default_factory=FlowNode)
    storage: FlowNode = field(default_factory=lambda: FlowNode(charge_level=0.0))
    load: FlowNode = field(default_factory=FlowNode)
    grid: FlowNode = field(default_factory=FlowNode)
    connections: list[DirectedEdge] = field(default_factory=list)
    unit: str = "W"

    def node(self, node_id: NodeId) -> FlowNode:
        return {
            NodeId.PV: self.pv,
            NodeId.STORAGE: self.storage,
            NodeId.LOAD: self.load,
            NodeId.GRID: self.grid,
        }[node_id]

    def to_payload(self) -> dict:
        return {
            "siteCurrentPowerFlow": {
                NodeId.PV.value: self.pv.to_payload(),
                NodeId.STORAGE.value: self.storage.to_payload(),
                NodeId.LOAD.value: self.load.to_payload(),
                NodeId.GRID.value: self.grid.to_payload(),
                "connections": [edge.to_payload() for edge in self.connections],
                "unit": self.unit,
            }
        }


METER_TYPES = ("Production", "Consumption", "FeedIn", "Purchased", "SelfConsumption")


@dataclass(frozen=True)
class EnergyMeter:
    type: str
    value_wh: float = 0.0


@dataclass
class DayEnergySummary:
    """Cumulative energy of the current day per meter, in watt-hours."""

    meters: list[EnergyMeter] = field(default_factory=list)

    def value(self, meter_type: str) -> float:
        for meter in self.meters:
            if meter.type == meter_type:
                return meter.value_wh
        raise KeyError(meter_type)

    def to_payload(self) -> dict:
        return {
            "energyDetails": {
                "meters": [
                    {"type": meter.type, "values": [{"value": meter.value_wh}]}
                    for meter in self.meters
                ]
            }
        }


@dataclass
class OverviewSummary:
    last_day_wh: float = 0.0
    last_month_wh: float = 0.0
    last_year_wh: float = 0.0

    def to_payload(self) -> dict:
        return {
            "overview": {
                "lastDayData": {"energy": self.last_day_wh},
                "lastMonthData": {"energy": self.last_month_wh},
                "lastYearData": {"energy": self.last_year_wh},
            }
        }


@dataclass
class StationDetails:
    address: str
    peak_power_kw: float

    def to_payload(self) -> dict:
        return {
            "details": {
                "location": {"address": self.address},
                "peakPower": self.peak_power_kw,
            }
        }
