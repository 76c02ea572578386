from __future__ import annotations

import logging
from typing import Optional

from flask import Flask

from .attendance.controller import register as register_attendance
from .container import build_container
from .issuer.controller import register as register_issuer
from .settings import AppSettings, settings_from_env

logger = logging.getLogger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> Flask:
    settings = settings or settings_from_env()
    logging.basicConfig(level=settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing

    container = build_container(settings=settings)
    app.extensions["qr_attendance"] = container

    register_attendance(app, container)
    if settings.issuer_enabled:
        register_issuer(app, container)

    logger.info(
        "qr-attendance ready (devices=%s, logs=%s, expiry=%smin)",
        settings.devices_file,
        settings.log_dir,
        settings.token_expiry_minutes,
    )
    return app
