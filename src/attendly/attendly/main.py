from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .ai.controller import register as register_ai
from .attendance.controller import register as register_attendance
from .container import Container, build_container, build_repository
from .database.bootstrap import apply_schema, list_tables
from .reschedule.controller import register as register_reschedule
from .settings.controller import register as register_settings
from .statistics.controller import register as register_statistics
from .subjects.controller import register as register_subjects
from .timetable.controller import register as register_timetable

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(app.config["DEBUG"])

    if container is None:
        storage_backend = str(getattr(settings, "STORAGE_BACKEND", "file"))
        db_config = getattr(settings, "DB_CONFIG", {})
        if storage_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        repository = build_repository(
            storage_backend=storage_backend,
            data_file=str(getattr(settings, "DATA_FILE", "attendly-data.json")),
            db_config=db_config,
            owner_id=str(getattr(settings, "SNAPSHOT_OWNER", "local")),
        )
        container = build_container(
            repository=repository,
            gemini_api_key=str(getattr(settings, "GEMINI_API_KEY", "") or ""),
            gemini_model=str(getattr(settings, "GEMINI_MODEL", "gemini-2.5-flash")),
            llm_timeout=float(getattr(settings, "LLM_TIMEOUT", 25.0)),
        )

    logger.info("Starting attendly settings=%s storage=%s", settings_module, type(container.repository).__name__)

    # load before attaching so the restored snapshot is not written straight back
    container.sync_service.load_into(container.store)
    container.sync_service.attach(container.store)
    app.extensions["attendly"] = container

    register_subjects(app, container)
    register_timetable(app, container)
    register_reschedule(app, container)
    register_attendance(app, container)
    register_statistics(app, container)
    register_settings(app, container)
    register_ai(app, container)

    return app
