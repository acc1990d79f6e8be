from __future__ import annotations

import math
from typing import Optional

from .jitter import Jitter, NoJitter
from .models import ComponentConfig
from .profiles import base_error_rate, base_memory_usage, get_profile, memory_per_request_mb


MAX_PERCENT = 100.0
MAX_ERROR_RATE = 10.0
MAX_VALUE = 1e12

CPU_JITTER_WIDTH = 10.0
LATENCY_JITTER_RATIO = 0.2

_NO_JITTER = NoJitter()


def finite(value: float, default: float = 0.0) -> float:
    """Replace NaN with ``default`` and cap infinities at ``MAX_VALUE``."""
    if value is None or math.isnan(value):
        return default
    return max(-MAX_VALUE, min(MAX_VALUE, value))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, finite(value, lower)))


def _saturation_ratio(load: float, capacity: float) -> float:
    if capacity > 0:
        return load / capacity
    return MAX_VALUE if load > 0 else 0.0


def cpu_utilization(
    component: ComponentConfig, load: float, jitter: Optional[Jitter] = None
) -> float:
    """CPU % before the upper clamp; may exceed 100 under overload."""
    jitter = jitter or _NO_JITTER
    profile = get_profile(component.type)
    ratio = _saturation_ratio(load, component.specs.cpu * 1000)
    utilization = ratio * 100 * profile.cpu_intensity
    return max(0.0, finite(utilization + jitter.spread(CPU_JITTER_WIDTH)))


def active_requests(component: ComponentConfig, load: float) -> float:
    return max(0.0, load) * (get_profile(component.type).base_latency_ms / 1000)


def memory_utilization(component: ComponentConfig, load: float) -> float:
    base_usage = base_memory_usage(component.type)
    in_flight_mb = active_requests(component, load) * memory_per_request_mb(component.type)
    usage = _saturation_ratio(in_flight_mb, component.specs.memory * 1024) * 100
    return max(base_usage, finite(usage + base_usage, base_usage))


def latency(
    component: ComponentConfig,
    load: float,
    cpu: float,
    memory: float,
    jitter: Optional[Jitter] = None,
) -> float:
    jitter = jitter or _NO_JITTER
    value = get_profile(component.type).base_latency_ms

    if cpu > 70:
        value *= 1 + (cpu - 70) / 100
    if memory > 80:
        value *= 1 + (memory - 80) / 50
    if load > component.specs.network * 100:
        value *= 1.5

    value = finite(value)
    value += jitter.spread(value * LATENCY_JITTER_RATIO)
    return max(1.0, value)


def throughput(component: ComponentConfig, load: float, cpu: float) -> float:
    max_throughput = get_profile(component.type).base_throughput_rps * component.specs.cpu
    if cpu > 80:
        max_throughput *= max(0.1, (100 - cpu) / 20)
    return max(0.0, finite(min(load, max_throughput)))


def error_rate(component_type: str, cpu: float, memory: float) -> float:
    rate = base_error_rate(component_type)
    if cpu > 85:
        rate += (cpu - 85) * 0.1
    if memory > 90:
        rate += (memory - 90) * 0.2
    return clamp(rate, 0.0, MAX_ERROR_RATE)


def active_connections(component: ComponentConfig, load: float) -> float:
    return max(0.0, finite(min(load * 0.1, component.specs.network / 10)))
