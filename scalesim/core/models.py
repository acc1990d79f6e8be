from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional


CONNECTION_TYPES = ("sync", "async", "database", "cache")
LOAD_PATTERNS = ("constant", "spike", "ramp", "wave")


def _number(data: Dict[str, object], *keys: str, default: float = 0.0) -> float:
    for key in keys:
        if key in data and data[key] is not None:
            value = data[key]
            if isinstance(value, bool):
                raise ValueError(f"{key} must be a number.")
            try:
                return float(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{key} must be a number.") from exc
    return default


def _int(data: Dict[str, object], key: str, default: int = 0) -> int:
    value = _number(data, key, default=default)
    if not math.isfinite(value):
        raise ValueError(f"{key} must be a finite number.")
    return int(value)


@dataclass(frozen=True)
class ComponentSpec:
    cpu: float = 1.0
    memory: float = 1.0
    storage: float = 10.0
    network: float = 100.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, object]]) -> "ComponentSpec":
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("specs must be an object.")
        return cls(
            cpu=_number(data, "cpu", default=1.0),
            memory=_number(data, "memory", default=1.0),
            storage=_number(data, "storage", default=10.0),
            network=_number(data, "network", default=100.0),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "cpu": self.cpu,
            "memory": self.memory,
            "storage": self.storage,
            "network": self.network,
        }


@dataclass(frozen=True)
class ScalingPolicy:
    min: int = 1
    max: int = 1
    auto: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, object]]) -> "ScalingPolicy":
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("scaling must be an object.")
        return cls(
            min=_int(data, "min", default=1),
            max=_int(data, "max", default=1),
            auto=bool(data.get("auto", False)),
        )

    def to_dict(self) -> Dict[str, object]:
        return {"min": self.min, "max": self.max, "auto": self.auto}


@dataclass(frozen=True)
class ComponentConnection:
    source: str
    target: str
    type: str = "sync"
    weight: float = 1.0

    @classmethod
    def from_dict(cls, data: Dict[str, object], default_source: str = "") -> "ComponentConnection":
        if not isinstance(data, dict):
            raise ValueError("Connections must be objects.")
        source = str(data.get("from", data.get("source", default_source)) or "").strip()
        target = str(data.get("to", data.get("target", "")) or "").strip()
        if not target:
            raise ValueError("Connections must include a target id.")
        return cls(
            source=source or default_source,
            target=target,
            type=str(data.get("type", "sync") or "sync").strip().lower(),
            weight=_number(data, "weight", default=1.0),
        )

    def to_dict(self) -> Dict[str, object]:
        return {"from": self.source, "to": self.target, "type": self.type, "weight": self.weight}


@dataclass(frozen=True)
class ComponentConfig:
    id: str
    type: str
    name: str = ""
    specs: ComponentSpec = field(default_factory=ComponentSpec)
    scaling: ScalingPolicy = field(default_factory=ScalingPolicy)
    connections: List[ComponentConnection] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ComponentConfig":
        if not isinstance(data, dict):
            raise ValueError("Components must be objects.")
        component_id = str(data.get("id", "") or "").strip()
        if not component_id:
            raise ValueError("Each component must include a non-empty id.")
        component_type = str(data.get("type", "") or "").strip()
        connections_raw = data.get("connections", []) or []
        if not isinstance(connections_raw, list):
            raise ValueError("connections must be a list.")
        return cls(
            id=component_id,
            type=component_type,
            name=str(data.get("name", "") or component_id),
            specs=ComponentSpec.from_dict(data.get("specs")),
            scaling=ScalingPolicy.from_dict(data.get("scaling")),
            connections=[
                ComponentConnection.from_dict(item, default_source=component_id)
                for item in connections_raw
            ],
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "specs": self.specs.to_dict(),
            "scaling": self.scaling.to_dict(),
            "connections": [connection.to_dict() for connection in self.connections],
        }


@dataclass(frozen=True)
class LoadPattern:
    requests_per_second: float
    users: int = 0
    duration: float = 60.0
    ramp_up: float = 0.0
    pattern: str = "constant"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, object]]) -> "LoadPattern":
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("load must be an object.")
        pattern = str(data.get("pattern", "constant") or "constant").strip().lower()
        if pattern not in LOAD_PATTERNS:
            raise ValueError(f"pattern must be one of {', '.join(LOAD_PATTERNS)}.")
        return cls(
            requests_per_second=_number(data, "requestsPerSecond", "requests_per_second"),
            users=_int(data, "users"),
            duration=_number(data, "duration", default=60.0),
            ramp_up=_number(data, "rampUp", "ramp_up"),
            pattern=pattern,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "users": self.users,
            "duration": self.duration,
            "rampUp": self.ramp_up,
            "requestsPerSecond": self.requests_per_second,
            "pattern": self.pattern,
        }


@dataclass(frozen=True)
class ComponentMetrics:
    id: str
    type: str
    cpu: float
    memory: float
    latency: float
    throughput: float
    error_rate: float
    connections: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "cpu": self.cpu,
            "memory": self.memory,
            "latency": self.latency,
            "throughput": self.throughput,
            "errorRate": self.error_rate,
            "connections": self.connections,
        }


@dataclass(frozen=True)
class SystemMetrics:
    total_latency: float
    total_throughput: float
    total_error_rate: float
    total_cost: float
    bottlenecks: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    components: List[ComponentMetrics] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalLatency": self.total_latency,
            "totalThroughput": self.total_throughput,
            "totalErrorRate": self.total_error_rate,
            "totalCost": self.total_cost,
            "bottlenecks": list(self.bottlenecks),
            "recommendations": list(self.recommendations),
            "components": [component.to_dict() for component in self.components],
        }


def parse_components(raw: object) -> List[ComponentConfig]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("components must be a list.")
    return [ComponentConfig.from_dict(item) for item in raw]
