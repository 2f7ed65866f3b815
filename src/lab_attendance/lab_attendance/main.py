from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .reports.controller import register as register_reports
from .rooms.controller import register as register_rooms

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 16 * 1024 * 1024))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    storage_config = getattr(settings, "STORAGE_CONFIG")
    if app.config["DEBUG"]:
        logger.debug(
            "settings=%s api=%s local=%s",
            settings_module,
            storage_config.get("api_base_url"),
            storage_config.get("local_storage_path"),
        )

    if container is None:
        container = build_container(storage_config=storage_config)
        source = container.persistence.load()
        logger.info("Entity store loaded (source=%s)", source)
        if bool(getattr(settings, "AUTO_SEED", False)):
            container.room_service.seed_defaults()

    app.extensions["lab_attendance"] = container

    register_rooms(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
