from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .calculators import MAX_PERCENT, clamp, finite
from .models import ComponentConfig, ComponentMetrics
from .profiles import base_hourly_cost, is_critical_path_type


LATENCY_MODES = ("type_filter", "path")


@dataclass(frozen=True)
class SystemTotals:
    total_latency: float
    total_throughput: float
    total_error_rate: float
    total_cost: float


def type_filter_latency(metrics: Sequence[ComponentMetrics]) -> float:
    return sum(metric.latency for metric in metrics if is_critical_path_type(metric.type))


def _visit(
    node_id: str,
    adjacency: Dict[str, List[str]],
    latencies: Dict[str, float],
    visiting: set,
    memo: Dict[str, float],
) -> float:
    if node_id in memo:
        return memo[node_id]
    visiting.add(node_id)
    longest_tail = 0.0
    for neighbor in adjacency.get(node_id, []):
        if neighbor in visiting:
            continue
        longest_tail = max(longest_tail, _visit(neighbor, adjacency, latencies, visiting, memo))
    visiting.remove(node_id)
    memo[node_id] = latencies[node_id] + longest_tail
    return memo[node_id]


def path_latency(
    metrics: Sequence[ComponentMetrics], components: Sequence[ComponentConfig]
) -> float:
    """Longest latency-weighted path through the connection graph.

    Edges pointing back into the current walk are skipped, so cyclic
    topologies still produce a finite figure.
    """
    latencies = {metric.id: metric.latency for metric in metrics}
    adjacency: Dict[str, List[str]] = defaultdict(list)
    indegree: Dict[str, int] = {node_id: 0 for node_id in latencies}
    for component in components:
        for connection in component.connections:
            source = connection.source or component.id
            if source not in latencies or connection.target not in latencies:
                continue
            if source == connection.target:
                continue
            adjacency[source].append(connection.target)
            indegree[connection.target] += 1

    starts = [node_id for node_id, degree in indegree.items() if degree == 0] or list(latencies)
    memo: Dict[str, float] = {}
    return max(
        (_visit(node_id, adjacency, latencies, set(), memo) for node_id in starts),
        default=0.0,
    )


def combine_error_rates(rates: Sequence[float]) -> float:
    """Combine per-component error percentages as independent failures."""
    success = 1.0
    for rate in rates:
        success *= 1 - clamp(rate, 0.0, MAX_PERCENT) / 100
    return clamp((1 - success) * 100, 0.0, MAX_PERCENT)


def component_cost(metric: ComponentMetrics) -> float:
    return base_hourly_cost(metric.type) * (1 + (metric.cpu / 100) * 0.5)


def aggregate(
    metrics: Sequence[ComponentMetrics],
    components: Optional[Sequence[ComponentConfig]] = None,
    latency_mode: str = "type_filter",
) -> SystemTotals:
    if not metrics:
        return SystemTotals(0.0, 0.0, 0.0, 0.0)

    if latency_mode == "path" and components is not None:
        total_latency = path_latency(metrics, components)
    else:
        total_latency = type_filter_latency(metrics)

    return SystemTotals(
        total_latency=finite(total_latency),
        total_throughput=finite(min(metric.throughput for metric in metrics)),
        total_error_rate=combine_error_rates([metric.error_rate for metric in metrics]),
        total_cost=finite(sum(component_cost(metric) for metric in metrics)),
    )
