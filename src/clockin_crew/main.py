from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.web import json_error
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import SCHEMA_PATH, apply_schema, ensure_demo_profiles, list_tables
from .profiles.controller import register as register_profiles
from .reports.controller import register as register_reports
from .team.controller import register as register_team

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(app.config["DEBUG"])

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "[clockin-crew] settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("[clockin-crew] schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_profiles(db_config)

        container = build_container(
            db_config=db_config,
            cutoff_hour=int(getattr(settings, "LATE_CUTOFF_HOUR", 9)),
            recent_limit=int(getattr(settings, "RECENT_LIMIT", 7)),
        )

    @app.errorhandler(500)
    def internal_error(_error):
        return json_error("Unexpected server error", 500)

    register_profiles(app, container)
    register_attendance(app, container)
    register_team(app, container)
    register_reports(app, container)

    return app
