from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container, build_store
from .core.enums import StoreBackend
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json.ensure_ascii = False

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if container is None:
        container = _container_from_settings(settings, settings_module)

    register_attendance(app, container)
    return app


def _container_from_settings(settings, settings_module: str) -> Container:
    store_backend = getattr(settings, "STORE_BACKEND", StoreBackend.MYSQL.value)
    db_config = getattr(settings, "DB_CONFIG", None)
    tz_name = getattr(settings, "TIMEZONE")

    if store_backend == StoreBackend.MYSQL.value and bool(getattr(settings, "AUTO_INIT_DB", False)):
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(conn, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(conn)))

    logger.info("settings=%s store=%s tz=%s", settings_module, store_backend, tz_name)

    store = build_store(
        store_backend=store_backend,
        db_config=db_config,
        sheet_csv_path=getattr(settings, "SHEET_CSV_PATH", None),
        tz_name=tz_name,
    )
    return build_container(
        store=store,
        tz_name=tz_name,
        cache_ttl_seconds=float(getattr(settings, "VIEW_CACHE_TTL_SECONDS")),
        sheet_backup_path=getattr(settings, "SHEET_BACKUP_PATH", None) or None,
    )
