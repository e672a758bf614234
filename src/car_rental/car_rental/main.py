from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .branches.controller import register as register_branches
from .cars.controller import register as register_cars
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .rents.controller import register as register_rents
from .reservations.controller import register as register_reservations
from .security.basic_auth import register as register_security
from .users.controller import register as register_users

logger = logging.getLogger("car_rental")

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Without an explicit ``container`` the MySQL-backed one is built from the
    settings module's ``DB_CONFIG`` (optionally creating and seeding the schema).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["AUTH_REQUIRED"] = bool(getattr(settings, "AUTH_REQUIRED", True))
    db_config = getattr(settings, "DB_CONFIG")

    logger.info("settings=%s auth_required=%s", settings_module, app.config["AUTH_REQUIRED"])

    if container is None:
        logger.info(
            "db=%s@%s:%s/%s",
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")
        container = build_container(db_config=db_config)

    register_error_handlers(app)
    register_security(app, container.auth_service)

    @app.get("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    register_cars(app, container)
    register_branches(app, container)
    register_users(app, container)
    register_reservations(app, container)
    register_rents(app, container)

    return app
