from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import RecordNotFound, UpstreamUnavailable, ValidationError
from .statistics.controller import register as register_statistics

logger = logging.getLogger(__name__)


def _load_settings() -> Any:
    from config import get_settings_module

    return importlib.import_module(get_settings_module())


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(RecordNotFound)
    def _not_found(e: RecordNotFound):
        return jsonify({"success": False, "message": str(e), "entity": e.entity, "id": e.identifier}), 404

    @app.errorhandler(UpstreamUnavailable)
    def _upstream(e: UpstreamUnavailable):
        return jsonify({"success": False, "message": str(e), "operation": e.operation, "retryable": True}), 503


def create_app(settings: Optional[Any] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = settings or _load_settings()

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY", "dev-secret-key")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = container or build_container(settings)
    logger.info("attendance-ledger started (backend=%s)", getattr(settings, "STORE_BACKEND", "memory"))

    register_error_handlers(app)
    register_attendance(app, container)
    register_statistics(app, container)

    return app
