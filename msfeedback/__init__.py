import os
import time

from flask import Flask, g, request

from config import get_config
from msfeedback.extensions import db, migrate, cors, limiter
from msfeedback.observability import init_logging


def create_app(config_name=None):
    app = Flask(__name__)
    config_cls = get_config(config_name)
    app.config.from_object(config_cls)
    app.config["STARTED_AT"] = time.monotonic()

    if app.config.get("APP_ENV") in ("staging", "production"):
        missing = [key for key in ("SECRET_KEY", "DATABASE_URL") if not _env_set(key)]
        if missing:
            raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")

    init_logging(app)

    # Import models so metadata is complete for create_all and migrations
    from msfeedback import models  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    cors.init_app(app,
                  origins=app.config["CORS_ORIGINS"],
                  supports_credentials=True,
                  allow_headers=["Content-Type", "Authorization", "X-API-Key"],
                  methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                  expose_headers=["Content-Type", "Authorization"])

    from msfeedback.utils.error_handlers import register_error_handlers
    from msfeedback.routes import register_routes
    from msfeedback.cli import register_cli

    register_error_handlers(app)
    register_routes(app)
    register_cli(app)
    _register_request_logging(app)

    app.logger.info("MSFeedback started (env=%s)", app.config.get("APP_ENV"))
    return app


def _env_set(key):
    return bool(os.getenv(key))


def _register_request_logging(app):
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        app.logger.info("%s %s %s %.1fms", request.method, request.path, response.status_code, elapsed_ms)
        return response
