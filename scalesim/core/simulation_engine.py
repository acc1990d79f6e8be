import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from . import calculators
from .aggregator import aggregate
from .architecture_review import review_architecture
from .jitter import Jitter, resolve_jitter
from .load_patterns import load_at, sample_times
from .load_propagation import incoming_load
from .models import ComponentConfig, ComponentMetrics, LoadPattern, SystemMetrics
from .recommendation_engine import generate_recommendations, identify_bottlenecks

logger = logging.getLogger(__name__)


def component_metrics(
    component: ComponentConfig,
    all_components: Sequence[ComponentConfig],
    load: LoadPattern,
    jitter: Jitter,
    multiplier_mode: str = "first",
) -> ComponentMetrics:
    rps = max(0.0, calculators.finite(incoming_load(component, all_components, load, multiplier_mode)))

    cpu = calculators.cpu_utilization(component, rps, jitter)
    memory = calculators.memory_utilization(component, rps)

    return ComponentMetrics(
        id=component.id,
        type=component.type,
        cpu=calculators.clamp(cpu, 0.0, calculators.MAX_PERCENT),
        memory=calculators.clamp(memory, 0.0, calculators.MAX_PERCENT),
        latency=calculators.latency(component, rps, cpu, memory, jitter),
        throughput=calculators.throughput(component, rps, cpu),
        error_rate=calculators.error_rate(component.type, cpu, memory),
        connections=calculators.active_connections(component, rps),
    )


def simulate_system(
    components: Sequence[ComponentConfig],
    load: LoadPattern,
    jitter: Optional[Jitter] = None,
    *,
    latency_mode: str = "type_filter",
    multiplier_mode: str = "first",
    review: bool = False,
) -> SystemMetrics:
    """Estimate how ``components`` behave under ``load``.

    Components are evaluated in input order, each from its own config, its
    inbound connections and the global load. Pass a seeded ``Jitter`` (or
    ``NoJitter``) for reproducible output. With ``review`` enabled, heuristic
    architecture warnings add to the recommendations.
    """
    jitter = resolve_jitter(jitter)
    components = list(components)

    metrics = [
        component_metrics(component, components, load, jitter, multiplier_mode)
        for component in components
    ]
    totals = aggregate(metrics, components, latency_mode=latency_mode)
    bottlenecks = identify_bottlenecks(metrics)
    warnings = review_architecture(components) if review else []
    recommendations = generate_recommendations(metrics, bottlenecks, warnings)

    logger.debug(
        "Simulated %d components at %.1f rps: latency=%.1fms throughput=%.1f",
        len(metrics),
        load.requests_per_second,
        totals.total_latency,
        totals.total_throughput,
    )
    if bottlenecks:
        logger.info("Detected %d bottlenecks: %s", len(bottlenecks), "; ".join(bottlenecks))

    return SystemMetrics(
        total_latency=totals.total_latency,
        total_throughput=totals.total_throughput,
        total_error_rate=totals.total_error_rate,
        total_cost=totals.total_cost,
        bottlenecks=bottlenecks,
        recommendations=recommendations,
        components=metrics,
    )


def simulate_timeline(
    components: Sequence[ComponentConfig],
    load: LoadPattern,
    jitter: Optional[Jitter] = None,
    **options,
) -> Dict[str, object]:
    """Run the engine once per sample of the load pattern's request-rate curve."""
    jitter = resolve_jitter(jitter)
    components = list(components)

    points: List[Dict[str, object]] = []
    for time in sample_times(load.duration):
        rps = load_at(load.pattern, load.requests_per_second, load.duration, time)
        sample = replace(load, requests_per_second=rps)
        metrics = simulate_system(components, sample, jitter, **options)
        points.append({"time": time, "requestsPerSecond": rps, "metrics": metrics})

    if not points:
        peak = {"maxLatency": 0.0, "minThroughput": 0.0, "maxErrorRate": 0.0, "maxCost": 0.0}
    else:
        results = [point["metrics"] for point in points]
        peak = {
            "maxLatency": max(result.total_latency for result in results),
            "minThroughput": min(result.total_throughput for result in results),
            "maxErrorRate": max(result.total_error_rate for result in results),
            "maxCost": max(result.total_cost for result in results),
        }

    logger.debug("Simulated %s timeline with %d samples", load.pattern, len(points))
    return {"points": points, "peak": peak}
