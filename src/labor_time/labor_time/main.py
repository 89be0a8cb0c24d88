from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import DomainError, NotFoundError, ValidationError
from .core.logging_config import configure_logging, get_logger
from .reports.controller import register as register_reports

logger = get_logger("main")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(exc: NotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return jsonify({"error": str(exc)}), 422


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info(
        "application starting",
        extra={"settings": settings_module, "timezone": getattr(settings, "APP_TIMEZONE", None)},
    )

    if container is None:
        container = build_container(settings)

    _register_error_handlers(app)
    register_attendance(app, container)
    register_reports(app, container)

    return app
