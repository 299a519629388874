from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, ensure_demo_employees, list_tables

from .core.constants import DEFAULT_BUSINESS_TIMEZONE, DEFAULT_CURRENCY_SYMBOL
from .container import Container, build_container
from .auth.controller import register as register_auth
from .employees.controller import register as register_employees
from .invoices.controller import register as register_invoices
from .payroll.controller import register as register_payroll
from .time_entries.controller import register as register_time_entries

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. Pass a container to run against other repositories (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["BUSINESS_TIMEZONE"] = getattr(settings, "BUSINESS_TIMEZONE", DEFAULT_BUSINESS_TIMEZONE)
    app.config["CURRENCY_SYMBOL"] = getattr(settings, "CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL)
    admin_passkey = getattr(settings, "ADMIN_PASSKEY", "")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.debug(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_employees(db_config)
            logger.info("demo employees ready")

        container = build_container(
            db_config=db_config,
            admin_passkey=admin_passkey,
            business_timezone=app.config["BUSINESS_TIMEZONE"],
        )

    register_auth(app, container)
    register_employees(app, container)
    register_time_entries(app, container)
    register_payroll(app, container)
    register_invoices(app, container)

    return app
