from .jitter import Jitter, NoJitter
from .load_patterns import generate_load_pattern, load_at
from .models import (
    ComponentConfig,
    ComponentConnection,
    ComponentMetrics,
    ComponentSpec,
    LoadPattern,
    ScalingPolicy,
    SystemMetrics,
)
from .simulation_engine import simulate_system, simulate_timeline
from .topology_validator import validate_topology

__all__ = [
    "ComponentConfig",
    "ComponentConnection",
    "ComponentMetrics",
    "ComponentSpec",
    "Jitter",
    "LoadPattern",
    "NoJitter",
    "ScalingPolicy",
    "SystemMetrics",
    "generate_load_pattern",
    "load_at",
    "simulate_system",
    "simulate_timeline",
    "validate_topology",
]
