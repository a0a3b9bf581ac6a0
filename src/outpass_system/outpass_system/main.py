from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_utils import configure_logging
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .outpasses.controller import register as register_outpasses


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger = configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    storage_backend = str(getattr(settings, "STORAGE_BACKEND", "memory"))
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("settings=%s storage=%s", settings_module, storage_backend)

    if storage_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        storage_backend=storage_backend,
        db_config=db_config,
        holidays=getattr(settings, "HOLIDAYS", None),
    )
    app.extensions["outpass_container"] = container

    register_outpasses(app, container)

    return app
