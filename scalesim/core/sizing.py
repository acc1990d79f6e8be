from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

from .profiles import normalize_type


BASE_RESOURCES: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "database": {"cpu": 2, "memory": 4096, "storage": 100, "network": 100},
        "cache": {"cpu": 1, "memory": 2048, "storage": 10, "network": 100},
        "microservice": {"cpu": 1, "memory": 1024, "storage": 5, "network": 50},
        "api-gateway": {"cpu": 2, "memory": 2048, "storage": 10, "network": 200},
        "load-balancer": {"cpu": 1, "memory": 512, "storage": 5, "network": 500},
        "message-queue": {"cpu": 2, "memory": 2048, "storage": 50, "network": 100},
        "ml-model": {"cpu": 4, "memory": 8192, "storage": 20, "network": 100},
    }
)

# USD per hour: per core, per GB memory, per GB storage
PRICING: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "aws": {"cpu": 0.05, "memory": 0.01, "storage": 0.001},
        "gcp": {"cpu": 0.048, "memory": 0.009, "storage": 0.0009},
        "azure": {"cpu": 0.052, "memory": 0.011, "storage": 0.0011},
    }
)


def calculate_resource_requirements(component_type: str, expected_rps: float) -> Dict[str, float]:
    """Size a component for ``expected_rps``; memory in MB.

    The per-type base allocation covers 1000 rps and scales linearly above
    that. Unknown types are sized as microservices.
    """
    base = BASE_RESOURCES.get(normalize_type(component_type), BASE_RESOURCES["microservice"])
    scale = max(1.0, expected_rps / 1000)
    return {
        "cpu": round(base["cpu"] * scale, 2),
        "memory": round(base["memory"] * scale),
        "storage": round(base["storage"] * scale),
        "network": round(base["network"] * scale),
    }


def estimate_hourly_cost(resources: Mapping[str, float], provider: str = "aws") -> float:
    rates = PRICING.get(str(provider).lower(), PRICING["aws"])
    cpu_cost = float(resources.get("cpu", 0)) * rates["cpu"]
    memory_cost = float(resources.get("memory", 0)) / 1024 * rates["memory"]
    storage_cost = float(resources.get("storage", 0)) * rates["storage"]
    return round(cpu_cost + memory_cost + storage_cost, 2)
