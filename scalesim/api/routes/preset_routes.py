from __future__ import annotations

from flask import Blueprint, jsonify

from ...services.preset_service import PresetService

preset_routes = Blueprint("preset_routes", __name__)
preset_service = PresetService()


@preset_routes.route("/api/presets", methods=["GET"])
def list_presets():
    presets = preset_service.list_presets()
    return jsonify({"presets": presets})


@preset_routes.route("/api/presets/<name>")
def get_preset(name: str):
    payload, status = preset_service.get_preset(name)
    return jsonify(payload), status
