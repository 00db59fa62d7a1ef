from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .allocations.controller import register as register_allocations
from .attendance.controller import register as register_attendance
from .audit.controller import register as register_audit
from .auth.controller import register as register_auth
from .common.web import register_error_handlers, register_request_context
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_binding, list_tables
from .leaves.controller import register as register_leaves
from .residents.controller import register as register_residents
from .rooms.controller import register as register_rooms
from .search.controller import register as register_search

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        admin_identity = getattr(settings, "BOOTSTRAP_ADMIN_IDENTITY", "")
        if admin_identity:
            ensure_admin_binding(db_config, admin_identity)

        container = build_container(
            db_config=db_config,
            write_isolation=getattr(settings, "WRITE_ISOLATION", "READ COMMITTED"),
            read_isolation=getattr(settings, "READ_ISOLATION", "REPEATABLE READ"),
        )

    register_request_context(app, container.role_resolver)
    register_error_handlers(app)

    register_auth(app, container)
    register_residents(app, container)
    register_rooms(app, container)
    register_allocations(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_audit(app, container)
    register_search(app, container)

    return app
