import pytest

from scalesim.core.aggregator import aggregate, combine_error_rates, path_latency
from scalesim.core.jitter import NoJitter
from scalesim.core.models import ComponentMetrics, LoadPattern, parse_components
from scalesim.core.simulation_engine import simulate_system


def _metric(metric_id, metric_type, latency=10.0, throughput=100.0, error_rate=0.0, cpu=0.0):
    return ComponentMetrics(
        id=metric_id,
        type=metric_type,
        cpu=cpu,
        memory=20.0,
        latency=latency,
        throughput=throughput,
        error_rate=error_rate,
        connections=1.0,
    )


def test_combined_error_rate_matches_sequential_fold():
    rates = [0.1, 5.55, 2.0, 10.0, 0.05]

    folded = 0.0
    for rate in rates:
        folded = folded + rate - folded * rate / 100

    assert combine_error_rates(rates) == pytest.approx(folded)
    assert combine_error_rates(list(reversed(rates))) == pytest.approx(folded)
    assert combine_error_rates([]) == 0


def test_aggregate_uses_critical_path_types_and_min_throughput():
    metrics = [
        _metric("gateway", "api-gateway", latency=5, throughput=400),
        _metric("lb", "load-balancer", latency=2, throughput=300),
        _metric("svc", "microservice", latency=50, throughput=120),
        _metric("cache", "cache", latency=1, throughput=900),
        _metric("db", "database", latency=10, throughput=250),
    ]

    totals = aggregate(metrics)

    assert totals.total_latency == 65
    assert totals.total_throughput == 120
    assert totals.total_cost == pytest.approx(0.05 + 0.025 + 0.10 + 0.08 + 0.15)


def test_cost_grows_with_cpu():
    idle = aggregate([_metric("svc", "microservice", cpu=0)])
    busy = aggregate([_metric("svc", "microservice", cpu=100)])
    assert idle.total_cost == pytest.approx(0.10)
    assert busy.total_cost == pytest.approx(0.15)


def test_path_latency_follows_longest_chain():
    components = parse_components(
        [
            {"id": "lb", "type": "load-balancer", "specs": {"cpu": 4}, "connections": [{"to": "svc", "type": "sync", "weight": 1.0}]},
            {
                "id": "svc",
                "type": "microservice",
                "specs": {"cpu": 4},
                "connections": [
                    {"to": "db", "type": "database", "weight": 1.0},
                    {"to": "cache", "type": "cache", "weight": 1.0},
                ],
            },
            {"id": "db", "type": "database", "specs": {"cpu": 4}},
            {"id": "cache", "type": "cache", "specs": {"cpu": 4}},
        ]
    )
    load = LoadPattern(requests_per_second=10)

    type_filtered = simulate_system(components, load, NoJitter())
    path_based = simulate_system(components, load, NoJitter(), latency_mode="path")

    assert type_filtered.total_latency == 60
    assert path_based.total_latency == 62
    assert path_based.total_throughput == type_filtered.total_throughput


def test_path_latency_tolerates_cycles():
    components = parse_components(
        [
            {"id": "a", "type": "microservice", "connections": [{"to": "b", "type": "sync", "weight": 1.0}]},
            {"id": "b", "type": "microservice", "connections": [{"to": "a", "type": "sync", "weight": 1.0}]},
        ]
    )
    metrics = [_metric("a", "microservice", latency=50), _metric("b", "microservice", latency=50)]

    assert path_latency(metrics, components) == 100
