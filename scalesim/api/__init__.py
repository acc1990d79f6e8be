from __future__ import annotations

from .routes.preset_routes import preset_routes
from .routes.simulation_routes import simulation_routes


def register_routes(app) -> None:
    app.register_blueprint(preset_routes)
    app.register_blueprint(simulation_routes)
