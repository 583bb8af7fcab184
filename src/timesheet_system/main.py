from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container_from_settings
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables

from .activities.controller import register as register_activities
from .activity_log.controller import register as register_activity_log
from .employees.controller import register as register_employees
from .export.controller import register as register_export
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    default_level = "DEBUG" if app.config["DEBUG"] else "INFO"
    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", default_level)).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    logger.info(
        "settings=%s backend=%s db=%s@%s:%s/%s",
        settings_module,
        backend,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    if container is None:
        container = build_container_from_settings(settings)
    app.extensions["timesheet_container"] = container

    register_users(app, container)
    register_employees(app, container)
    register_activities(app, container)
    register_activity_log(app, container)
    register_export(app, container)

    if bool(getattr(settings, "SYNC_ROSTER_ON_STARTUP", False)):
        try:
            report = container.roster_sync.run()
            logger.info(
                "Roster sync: removed=%d duplicates=%d created=%d errors=%d",
                len(report.removed_unlisted),
                len(report.removed_duplicates),
                len(report.created),
                len(report.errors),
            )
        except DomainError:
            logger.exception("Roster sync failed; starting with the stored roster")

    return app
