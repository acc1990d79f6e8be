import pytest

from scalesim.core.jitter import NoJitter
from scalesim.core.load_patterns import MAX_POINTS, generate_load_pattern, load_at
from scalesim.core.models import LoadPattern, parse_components
from scalesim.core.simulation_engine import simulate_timeline


def test_constant_pattern():
    series = generate_load_pattern("constant", 100, 60)
    assert len(series) == 60
    assert set(series) == {100}


def test_spike_pattern():
    series = generate_load_pattern("spike", 100, 100)
    assert len(series) == 100
    assert series[50] == 300
    assert series[10] == 100
    assert series[30] == 100
    assert series[31] == 300
    assert series[70] == 100
    assert load_at("spike", 100, 100, 50) == 300


def test_ramp_pattern():
    series = generate_load_pattern("ramp", 200, 100)
    assert series[0] == 0
    assert series[50] == pytest.approx(100)
    assert series == sorted(series)


def test_wave_pattern_oscillates():
    series = generate_load_pattern("wave", 100, 30)
    assert series[0] == pytest.approx(100)
    assert all(50 <= value <= 150 for value in series)
    assert min(series) < 60
    assert max(series) > 140


def test_sample_count_is_capped():
    assert len(generate_load_pattern("constant", 10, 3600)) == MAX_POINTS
    assert generate_load_pattern("constant", 10, 0) == []
    assert generate_load_pattern("unknown", 10, 5) == [10] * 5


def test_timeline_runs_engine_per_sample():
    components = parse_components([{"id": "svc", "type": "microservice", "specs": {"cpu": 4}}])
    load = LoadPattern(requests_per_second=100, duration=10, pattern="spike")

    timeline = simulate_timeline(components, load, NoJitter())

    assert len(timeline["points"]) == 10
    assert timeline["points"][5]["requestsPerSecond"] == 300
    assert timeline["points"][5]["metrics"].total_throughput == 300
    assert timeline["peak"]["minThroughput"] == 100


def test_timeline_without_duration_is_empty():
    timeline = simulate_timeline([], LoadPattern(requests_per_second=100, duration=0))
    assert timeline["points"] == []
    assert timeline["peak"]["maxLatency"] == 0


def test_fractional_duration_keeps_one_second_spacing():
    series = generate_load_pattern("ramp", 100, 2.5)
    assert len(series) == 3
    assert series == pytest.approx([0, 40, 80])
    assert generate_load_pattern("constant", 10, 0.5) == [10]
    assert generate_load_pattern("constant", 10, float("nan")) == []
