from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_cors, register_error_handlers
from .common.logging_config import setup_logging
from .container import Container, build_container
from .core.enums import StoreBackend
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .sales.controller import register as register_sales
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CORS_ORIGINS"] = getattr(settings, "CORS_ORIGINS", "*")
    app.json.sort_keys = False

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FORMAT", "text"))

    backend = StoreBackend(getattr(settings, "STORE_BACKEND", StoreBackend.MEMORY.value))
    db_config = dict(getattr(settings, "DB_CONFIG", {}))

    if container is None:
        if backend is StoreBackend.MYSQL and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(backend=backend, db_config=db_config)

    logger.info("settings=%s backend=%s", settings_module, container.backend.value)
    app.extensions["records_system"] = container

    register_error_handlers(app)
    register_cors(app)
    register_users(app, container)
    register_sales(app, container)
    register_employees(app, container)

    return app
