import pytest

from scalesim.core.jitter import Jitter, NoJitter
from scalesim.core.load_propagation import incoming_load
from scalesim.core.models import LoadPattern, parse_components
from scalesim.core.simulation_engine import simulate_system


def _components(raw):
    return parse_components(raw)


def test_single_entry_point():
    components = _components(
        [
            {
                "id": "gateway",
                "type": "api_gateway",
                "specs": {"cpu": 2, "memory": 2, "storage": 10, "network": 1000},
            }
        ]
    )
    load = LoadPattern(requests_per_second=100)

    result = simulate_system(components, load, NoJitter())
    gateway = result.components[0]

    assert incoming_load(components[0], components, load) == 100
    assert gateway.cpu == pytest.approx(3.0)
    assert gateway.memory == pytest.approx(15 + 0.05 / 2048 * 100)
    assert gateway.latency == 5
    assert gateway.throughput == 100
    assert gateway.error_rate == pytest.approx(0.1)
    assert gateway.connections == 10
    assert result.total_latency == 5
    assert result.total_throughput == 100
    assert result.total_error_rate == pytest.approx(0.1)
    assert result.total_cost == pytest.approx(0.05 * (1 + 0.03 * 0.5))
    assert result.bottlenecks == []
    assert result.recommendations == []


def test_database_cpu_bottleneck():
    components = _components(
        [{"id": "db", "type": "database", "specs": {"cpu": 1, "memory": 4, "network": 1000}}]
    )
    load = LoadPattern(requests_per_second=2000)

    result = simulate_system(components, load, NoJitter())
    db = result.components[0]

    assert db.cpu == 100
    assert db.throughput == pytest.approx(200)
    assert db.latency == pytest.approx(17)
    assert db.error_rate == pytest.approx(5.55)
    assert "db: High CPU utilization (100.0%)" in result.bottlenecks
    assert "db: High error rate (5.5%)" in result.bottlenecks or "db: High error rate (5.6%)" in result.bottlenecks
    assert "Scale out db to reduce CPU load" in result.recommendations
    assert "Implement circuit breaker pattern for db" in result.recommendations
    assert "Consider implementing a service mesh for better observability" not in result.recommendations


def test_database_bottleneck_survives_jitter():
    components = _components([{"id": "db", "type": "database", "specs": {"cpu": 1}}])
    load = LoadPattern(requests_per_second=2000)

    for seed in range(10):
        result = simulate_system(components, load, Jitter(seed=seed))
        assert result.components[0].cpu >= 80
        assert any(b.startswith("db: High CPU") for b in result.bottlenecks)


def test_incoming_load_uses_global_rate_and_first_edge():
    components = _components(
        [
            {"id": "gateway", "type": "api-gateway", "connections": [{"to": "svc", "type": "sync", "weight": 1.0}]},
            {"id": "svc", "type": "microservice", "connections": [{"to": "db", "type": "database", "weight": 0.5}]},
            {"id": "db", "type": "database"},
        ]
    )
    load = LoadPattern(requests_per_second=100)

    assert incoming_load(components[0], components, load) == 100
    assert incoming_load(components[1], components, load) == 100
    assert incoming_load(components[2], components, load) == pytest.approx(60)


def test_incoming_load_mixed_edge_types():
    components = _components(
        [
            {"id": "a", "type": "microservice", "connections": [{"to": "c", "type": "cache", "weight": 0.5}]},
            {"id": "b", "type": "microservice", "connections": [{"to": "c", "type": "sync", "weight": 1.0}]},
            {"id": "c", "type": "cache"},
        ]
    )
    load = LoadPattern(requests_per_second=100)

    assert incoming_load(components[2], components, load) == pytest.approx(100 * 0.75 * 1.5)
    weighted = incoming_load(components[2], components, load, multiplier_mode="weighted")
    assert weighted == pytest.approx(100 * 0.75 * (1.5 * 0.5 + 1.0) / 1.5)


def test_dangling_connection_is_ignored():
    components = _components(
        [{"id": "svc", "type": "microservice", "connections": [{"to": "ghost", "type": "sync", "weight": 1.0}]}]
    )
    result = simulate_system(components, LoadPattern(requests_per_second=10), NoJitter())
    assert [metric.id for metric in result.components] == ["svc"]
    assert result.components[0].throughput == 10


def test_unknown_types_fall_back_to_defaults():
    components = _components(
        [
            {
                "id": "x",
                "type": "quantum-thing",
                "specs": {"cpu": 1},
                "connections": [{"to": "y", "type": "wormhole", "weight": 0.5}],
            },
            {"id": "y", "type": "microservice"},
        ]
    )
    load = LoadPattern(requests_per_second=100)

    result = simulate_system(components, load, NoJitter())

    assert result.components[0].cpu == pytest.approx(7.0)
    assert result.components[0].latency == 50
    assert result.components[0].error_rate == pytest.approx(0.1)
    assert incoming_load(components[1], components, load) == pytest.approx(50)


def test_empty_system():
    result = simulate_system([], LoadPattern(requests_per_second=100))
    assert result.total_throughput == 0
    assert result.total_latency == 0
    assert result.total_error_rate == 0
    assert result.total_cost == 0
    assert result.bottlenecks == []
    assert result.components == []


def test_outputs_are_clamped_under_overload():
    components = _components(
        [
            {"id": "model", "type": "ml-model", "specs": {"cpu": 1, "memory": 1, "network": 10}},
            {"id": "zero", "type": "microservice", "specs": {"cpu": 0, "memory": 0, "network": 0}},
        ]
    )
    load = LoadPattern(requests_per_second=100000)

    for seed in range(5):
        result = simulate_system(components, load, Jitter(seed=seed))
        for metric in result.components:
            assert 0 <= metric.cpu <= 100
            assert 0 <= metric.memory <= 100
            assert 0 <= metric.error_rate <= 10
            assert metric.latency >= 1
        assert 0 <= result.total_error_rate <= 100


def test_throughput_never_exceeds_incoming_load():
    components = _components(
        [
            {"id": "gateway", "type": "api-gateway", "specs": {"cpu": 1}, "connections": [{"to": "svc", "type": "sync", "weight": 0.7}]},
            {"id": "svc", "type": "microservice", "specs": {"cpu": 2}, "connections": [{"to": "cache", "type": "cache", "weight": 0.4}]},
            {"id": "cache", "type": "cache", "specs": {"cpu": 1}},
        ]
    )
    for rps in (1, 100, 5000, 250000):
        load = LoadPattern(requests_per_second=rps)
        result = simulate_system(components, load, Jitter(seed=rps))
        for component, metric in zip(components, result.components):
            assert metric.throughput <= incoming_load(component, components, load) + 1e-9
        assert result.total_throughput == min(metric.throughput for metric in result.components)


def test_runs_are_reproducible():
    components = _components(
        [
            {"id": "gateway", "type": "api-gateway", "connections": [{"to": "svc", "type": "sync", "weight": 1.0}]},
            {"id": "svc", "type": "microservice", "specs": {"cpu": 1}},
        ]
    )
    load = LoadPattern(requests_per_second=900)

    assert simulate_system(components, load, NoJitter()).to_dict() == simulate_system(components, load, NoJitter()).to_dict()
    assert simulate_system(components, load, Jitter(seed=42)).to_dict() == simulate_system(components, load, Jitter(seed=42)).to_dict()


def test_system_level_recommendations_after_many_bottlenecks():
    components = _components(
        [
            {"id": "svc-a", "type": "microservice", "specs": {"cpu": 1}},
            {"id": "svc-b", "type": "microservice", "specs": {"cpu": 1}},
        ]
    )
    result = simulate_system(components, LoadPattern(requests_per_second=5000), NoJitter())

    assert len(result.bottlenecks) > 2
    assert "Consider implementing a service mesh for better observability" in result.recommendations
    assert "Add distributed tracing to identify performance issues" in result.recommendations
    assert len(result.recommendations) == len(set(result.recommendations))


def test_result_serializes_with_wire_names():
    components = _components([{"id": "svc", "type": "microservice"}])
    payload = simulate_system(components, LoadPattern(requests_per_second=10), NoJitter()).to_dict()

    assert set(payload) == {
        "totalLatency",
        "totalThroughput",
        "totalErrorRate",
        "totalCost",
        "bottlenecks",
        "recommendations",
        "components",
    }
    assert set(payload["components"][0]) == {
        "id",
        "type",
        "cpu",
        "memory",
        "latency",
        "throughput",
        "errorRate",
        "connections",
    }
