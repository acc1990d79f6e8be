from __future__ import annotations

import logging

from flask import Flask

from .api import register_routes
from .config import Config


def create_app(config: type = Config) -> Flask:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = Flask(__name__)
    app.config.from_object(config)
    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
