from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..config import Config
from ..core.aggregator import LATENCY_MODES
from ..core.jitter import Jitter
from ..core.load_patterns import generate_load_pattern
from ..core.load_propagation import MULTIPLIER_MODES
from ..core.models import LOAD_PATTERNS, LoadPattern, parse_components
from ..core.simulation_engine import simulate_system, simulate_timeline
from ..core.sizing import calculate_resource_requirements, estimate_hourly_cost
from ..core.topology_validator import validate_topology

logger = logging.getLogger(__name__)

Response = Tuple[Dict[str, object], int]


def _payload(payload: object) -> Dict[str, object]:
    return payload if isinstance(payload, dict) else {}


def _float(value: object, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number.")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number.") from exc


class SimulationService:
    def __init__(self, config: type = Config) -> None:
        self._config = config

    def validate(self, payload: Dict[str, object]) -> Response:
        payload = _payload(payload)
        try:
            components = parse_components(payload.get("components"))
        except ValueError as exc:
            return {"valid": False, "errors": [str(exc)], "warnings": []}, 200
        return validate_topology(components), 200

    def run_simulation(self, payload: Dict[str, object]) -> Response:
        payload = _payload(payload)
        try:
            components, load, options, jitter = self._parse_run(payload)
        except ValueError as exc:
            logger.warning("Rejected simulation payload: %s", exc)
            return {"error": str(exc)}, 400

        validation = validate_topology(components)
        if self._strict(payload) and not validation["valid"]:
            return {"error": "Topology is invalid.", "validation": validation}, 422

        result = simulate_system(components, load, jitter, review=True, **options)
        response = result.to_dict()
        response["validation"] = validation
        return response, 200

    def run_timeline(self, payload: Dict[str, object]) -> Response:
        payload = _payload(payload)
        try:
            components, load, options, jitter = self._parse_run(payload)
        except ValueError as exc:
            logger.warning("Rejected timeline payload: %s", exc)
            return {"error": str(exc)}, 400

        timeline = simulate_timeline(components, load, jitter, **options)
        points = [
            {
                "time": point["time"],
                "requestsPerSecond": point["requestsPerSecond"],
                "metrics": point["metrics"].to_dict(),
            }
            for point in timeline["points"]
        ]
        return {"points": points, "peak": timeline["peak"]}, 200

    def load_pattern(self, payload: Dict[str, object]) -> Response:
        payload = _payload(payload)
        pattern = str(payload.get("pattern", "constant")).lower()
        if pattern not in LOAD_PATTERNS:
            return {"error": f"pattern must be one of {', '.join(LOAD_PATTERNS)}."}, 400
        try:
            base_rps = _float(payload.get("requestsPerSecond", 0), "requestsPerSecond")
            duration = _float(payload.get("duration", 60), "duration")
        except ValueError as exc:
            return {"error": str(exc)}, 400
        return {"pattern": pattern, "series": generate_load_pattern(pattern, base_rps, duration)}, 200

    def sizing(self, payload: Dict[str, object]) -> Response:
        payload = _payload(payload)
        component_type = str(payload.get("type", "") or "")
        provider = str(payload.get("provider", "aws") or "aws")
        try:
            expected_rps = _float(payload.get("expectedRps", 0), "expectedRps")
        except ValueError as exc:
            return {"error": str(exc)}, 400
        resources = calculate_resource_requirements(component_type, expected_rps)
        return {
            "type": component_type,
            "resources": resources,
            "hourlyCost": estimate_hourly_cost(resources, provider),
        }, 200

    def _parse_run(self, payload: Dict[str, object]):
        components = parse_components(payload.get("components"))
        load = LoadPattern.from_dict(payload.get("load"))

        latency_mode = str(payload.get("latency_mode") or self._config.LATENCY_MODE)
        multiplier_mode = str(payload.get("multiplier_mode") or self._config.MULTIPLIER_MODE)
        if latency_mode not in LATENCY_MODES:
            raise ValueError(f"latency_mode must be one of {', '.join(LATENCY_MODES)}.")
        if multiplier_mode not in MULTIPLIER_MODES:
            raise ValueError(f"multiplier_mode must be one of {', '.join(MULTIPLIER_MODES)}.")

        options = {"latency_mode": latency_mode, "multiplier_mode": multiplier_mode}
        return components, load, options, Jitter(seed=self._seed(payload))

    def _seed(self, payload: Dict[str, object]) -> Optional[int]:
        seed = payload.get("seed")
        if seed is None:
            return self._config.SIMULATION_SEED
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise ValueError("seed must be an integer.")
        return seed

    def _strict(self, payload: Dict[str, object]) -> bool:
        strict = payload.get("strict")
        if strict is None:
            return bool(self._config.STRICT_TOPOLOGY)
        return bool(strict)
