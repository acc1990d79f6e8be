from __future__ import annotations

from flask import Blueprint, jsonify, request

from ...services.simulation_service import SimulationService

simulation_routes = Blueprint("simulation_routes", __name__)


@simulation_routes.route("/simulate", methods=["POST"])
def simulate_route():
    payload = request.get_json(silent=True) or {}
    result, status = SimulationService().run_simulation(payload)
    return jsonify(result), status


@simulation_routes.route("/api/validate", methods=["POST"])
def validate_route():
    payload = request.get_json(silent=True) or {}
    result, status = SimulationService().validate(payload)
    return jsonify(result), status


@simulation_routes.route("/api/timeline", methods=["POST"])
def timeline_route():
    payload = request.get_json(silent=True) or {}
    result, status = SimulationService().run_timeline(payload)
    return jsonify(result), status


@simulation_routes.route("/api/load-pattern", methods=["POST"])
def load_pattern_route():
    payload = request.get_json(silent=True) or {}
    result, status = SimulationService().load_pattern(payload)
    return jsonify(result), status


@simulation_routes.route("/api/sizing", methods=["POST"])
def sizing_route():
    payload = request.get_json(silent=True) or {}
    result, status = SimulationService().sizing(payload)
    return jsonify(result), status
