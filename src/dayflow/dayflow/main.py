from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_ABSENT_CUTOFF_HOUR, MAX_NOTIFICATIONS, NOTIFICATION_STORAGE_KEY
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .notifications.controller import register as register_notifications

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    db_config = getattr(settings, "DB_CONFIG")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("settings=%s", settings_module)

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            apply_schema(conn, str(db_config.get("database")), schema_path=schema_path)

        container = build_container(
            db_config=db_config,
            storage_key=getattr(settings, "NOTIFICATION_STORAGE_KEY", NOTIFICATION_STORAGE_KEY),
            max_notifications=int(getattr(settings, "MAX_NOTIFICATIONS", MAX_NOTIFICATIONS)),
            absent_cutoff_hour=int(getattr(settings, "ABSENT_CUTOFF_HOUR", DEFAULT_ABSENT_CUTOFF_HOUR)),
        )

    register_attendance(app, container)
    register_notifications(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
