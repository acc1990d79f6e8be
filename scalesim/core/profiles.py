from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class TypeProfile:
    base_latency_ms: float
    base_throughput_rps: float
    cpu_intensity: float


DEFAULT_PROFILE = TypeProfile(base_latency_ms=50, base_throughput_rps=1000, cpu_intensity=0.7)
DEFAULT_MEMORY_PER_REQUEST_MB = 1.0
DEFAULT_BASE_MEMORY_USAGE = 20.0
DEFAULT_BASE_ERROR_RATE = 0.1
DEFAULT_HOURLY_COST = 0.10
DEFAULT_CONNECTION_MULTIPLIER = 1.0

TYPE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "apigateway": "api-gateway",
        "gateway": "api-gateway",
        "loadbalancer": "load-balancer",
        "lb": "load-balancer",
        "service": "microservice",
        "server": "microservice",
        "db": "database",
        "messagequeue": "message-queue",
        "queue": "message-queue",
        "mlmodel": "ml-model",
        "modelserving": "ml-model",
        "postgres": "postgresql",
        "mongo": "mongodb",
    }
)

TYPE_PROFILES: Mapping[str, TypeProfile] = MappingProxyType(
    {
        "api-gateway": TypeProfile(5, 5000, 0.6),
        "load-balancer": TypeProfile(2, 10000, 0.4),
        "microservice": TypeProfile(50, 1000, 0.8),
        "database": TypeProfile(10, 2000, 0.7),
        "cache": TypeProfile(1, 50000, 0.3),
        "message-queue": TypeProfile(3, 20000, 0.5),
        "ml-model": TypeProfile(200, 100, 0.9),
        "cdn": TypeProfile(20, 5000, 0.2),
        "elasticsearch": TypeProfile(30, 3000, 0.8),
        "mongodb": TypeProfile(15, 5000, 0.6),
        "postgresql": TypeProfile(8, 8000, 0.7),
        "redis": TypeProfile(0.5, 100000, 0.2),
        "kafka": TypeProfile(5, 15000, 0.6),
        "nginx": TypeProfile(1, 10000, 0.3),
    }
)

# MB held per in-flight request
MEMORY_PER_REQUEST_MB: Mapping[str, float] = MappingProxyType(
    {
        "api-gateway": 0.1,
        "microservice": 2,
        "database": 0.5,
        "cache": 0.01,
        "ml-model": 50,
        "elasticsearch": 5,
        "mongodb": 1,
        "postgresql": 0.8,
        "redis": 0.005,
        "kafka": 0.1,
    }
)

# percent of capacity used at idle
BASE_MEMORY_USAGE: Mapping[str, float] = MappingProxyType(
    {
        "api-gateway": 15,
        "microservice": 25,
        "database": 40,
        "cache": 20,
        "ml-model": 60,
        "elasticsearch": 50,
        "mongodb": 35,
        "postgresql": 30,
        "redis": 10,
        "kafka": 25,
    }
)

BASE_ERROR_RATES: Mapping[str, float] = MappingProxyType(
    {
        "api-gateway": 0.1,
        "microservice": 0.2,
        "database": 0.05,
        "cache": 0.01,
        "ml-model": 0.5,
        "message-queue": 0.02,
    }
)

HOURLY_COSTS: Mapping[str, float] = MappingProxyType(
    {
        "api-gateway": 0.05,
        "load-balancer": 0.025,
        "microservice": 0.10,
        "database": 0.15,
        "cache": 0.08,
        "ml-model": 0.50,
        "elasticsearch": 0.20,
        "mongodb": 0.12,
        "postgresql": 0.10,
        "redis": 0.05,
        "kafka": 0.15,
    }
)

CONNECTION_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {
        "sync": 1.0,
        "async": 0.8,
        "database": 1.2,
        "cache": 1.5,
    }
)

CRITICAL_PATH_TYPES = frozenset({"api-gateway", "microservice", "database"})


def normalize_type(component_type: object) -> str:
    if not component_type:
        return ""
    key = str(component_type).strip().lower().replace("_", "-").replace(" ", "-")
    return TYPE_ALIASES.get(key.replace("-", ""), key)


def get_profile(component_type: object) -> TypeProfile:
    return TYPE_PROFILES.get(normalize_type(component_type), DEFAULT_PROFILE)


def memory_per_request_mb(component_type: object) -> float:
    return MEMORY_PER_REQUEST_MB.get(normalize_type(component_type), DEFAULT_MEMORY_PER_REQUEST_MB)


def base_memory_usage(component_type: object) -> float:
    return BASE_MEMORY_USAGE.get(normalize_type(component_type), DEFAULT_BASE_MEMORY_USAGE)


def base_error_rate(component_type: object) -> float:
    return BASE_ERROR_RATES.get(normalize_type(component_type), DEFAULT_BASE_ERROR_RATE)


def base_hourly_cost(component_type: object) -> float:
    return HOURLY_COSTS.get(normalize_type(component_type), DEFAULT_HOURLY_COST)


def connection_multiplier(connection_type: object) -> float:
    key = str(connection_type or "sync").strip().lower()
    return CONNECTION_MULTIPLIERS.get(key, DEFAULT_CONNECTION_MULTIPLIER)


def is_critical_path_type(component_type: object) -> bool:
    return normalize_type(component_type) in CRITICAL_PATH_TYPES
