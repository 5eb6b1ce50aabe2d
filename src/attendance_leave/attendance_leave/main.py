from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container, build_memory_container
from .core.enums import Role
from .core.policy import Policy
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .employees.model import Employee
from .leaves.controller import register as register_leaves

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def memory_employees(settings) -> list[Employee]:
    """Directory entries for ``STORAGE = "memory"``, from ``MEMORY_EMPLOYEES``."""
    return [
        Employee(
            employee_id=int(row["id"]),
            name=row["name"],
            email=str(row["email"]).lower(),
            role=Role(row.get("role", Role.EMPLOYEE.value)),
            is_active=bool(row.get("is_active", True)),
        )
        for row in getattr(settings, "MEMORY_EMPLOYEES", ())
    ]


def create_app(*, settings_module: str | None = None, container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        policy = Policy.from_settings(settings)
        storage = str(getattr(settings, "STORAGE", "mysql")).lower()
        if storage == "memory":
            container = build_memory_container(policy=policy, employees=memory_employees(settings))
        else:
            db_config = getattr(settings, "DB_CONFIG")
            if bool(getattr(settings, "AUTO_INIT_DB", False)):
                apply_schema(db_config, schema_path=SCHEMA_PATH)
                logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
            container = build_container(db_config=db_config, policy=policy)
        logger.info(
            "settings=%s storage=%s timezone=%s late_cutoff=%s",
            settings_module,
            storage,
            policy.timezone,
            policy.late_cutoff.strftime("%H:%M"),
        )

    app.extensions["attendance_leave"] = container

    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)

    return app
