from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import load_settings

from .common.http import fail
from .container import build_container
from .database.bootstrap import apply_schema
from .payroll.controller import register as register_payroll
from .shifts.controller import register as register_shifts

log = logging.getLogger(__name__)


def create_app(container=None) -> Flask:
    """Flask application factory.

    ``container`` lets tests inject in-memory repositories; otherwise the MySQL
    container is built from the settings module picked by APP_ENV.
    """
    load_dotenv(override=False)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        log.info(
            "settings=%s db=%s@%s:%s/%s",
            settings.__name__,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)

        container = build_container(
            db_config=db_config,
            payroll_defaults=getattr(settings, "PAYROLL_DEFAULTS", None),
        )

    register_shifts(app, container)
    register_payroll(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return fail("Không tìm thấy", status=404, code="NOT_FOUND")

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return fail("Phương thức không được hỗ trợ", status=405, code="METHOD_NOT_ALLOWED")

    return app
