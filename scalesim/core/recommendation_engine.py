from typing import List, Optional, Sequence

from .models import ComponentMetrics
from .profiles import normalize_type


CPU_BOTTLENECK = 80.0
MEMORY_BOTTLENECK = 85.0
LATENCY_BOTTLENECK_MS = 1000.0
ERROR_RATE_BOTTLENECK = 1.0

SLOW_SERVICE_MS = 500.0
UNRELIABLE_ERROR_RATE = 0.5
SYSTEM_BOTTLENECK_LIMIT = 2


def identify_bottlenecks(metrics: Sequence[ComponentMetrics]) -> List[str]:
    bottlenecks: List[str] = []

    for metric in metrics:
        if metric.cpu > CPU_BOTTLENECK:
            bottlenecks.append(f"{metric.id}: High CPU utilization ({metric.cpu:.1f}%)")
        if metric.memory > MEMORY_BOTTLENECK:
            bottlenecks.append(f"{metric.id}: High memory usage ({metric.memory:.1f}%)")
        if metric.latency > LATENCY_BOTTLENECK_MS:
            bottlenecks.append(f"{metric.id}: High latency ({metric.latency:.0f}ms)")
        if metric.error_rate > ERROR_RATE_BOTTLENECK:
            bottlenecks.append(f"{metric.id}: High error rate ({metric.error_rate:.1f}%)")

    return bottlenecks


def generate_recommendations(
    metrics: Sequence[ComponentMetrics],
    bottlenecks: Sequence[str],
    warnings: Optional[Sequence[str]] = None,
) -> List[str]:
    recommendations: List[str] = []

    for metric in metrics:
        component_type = normalize_type(metric.type)
        if metric.cpu > CPU_BOTTLENECK:
            recommendations.append(f"Scale out {metric.id} to reduce CPU load")
            recommendations.append(f"Consider adding horizontal pod autoscaling for {metric.id}")

        if metric.memory > MEMORY_BOTTLENECK:
            recommendations.append(f"Increase memory allocation for {metric.id}")
            if component_type == "database":
                recommendations.append(f"Optimize queries and add connection pooling for {metric.id}")

        if metric.latency > SLOW_SERVICE_MS and component_type == "microservice":
            recommendations.append(f"Add caching layer in front of {metric.id}")
            recommendations.append(f"Consider async processing for {metric.id}")

        if metric.error_rate > UNRELIABLE_ERROR_RATE:
            recommendations.append(f"Implement circuit breaker pattern for {metric.id}")
            recommendations.append(f"Add retry logic with exponential backoff for {metric.id}")

    if len(bottlenecks) > SYSTEM_BOTTLENECK_LIMIT:
        recommendations.append("Consider implementing a service mesh for better observability")
        recommendations.append("Add distributed tracing to identify performance issues")

    for warning in warnings or []:
        lowered = warning.lower()
        if "cache" in lowered:
            recommendations.append("Add a cache tier in front of hot read paths.")
        if "single instance" in lowered:
            recommendations.append("Run at least two replicas of stateless services.")
        if "exposed" in lowered:
            recommendations.append("Route traffic to data stores through a service layer.")

    return list(dict.fromkeys(recommendations))
