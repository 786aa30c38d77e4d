from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .analysis.controller import register as register_analysis
from .analysis.service import StudentAnalyzer
from .attendance.controller import register as register_attendance
from .categories.controller import register as register_categories
from .common.web import register_error_handlers
from .config import get_settings_module
from .container import build_container, build_store
from .database.store import KeyValueStore
from .points.controller import register as register_points
from .positions.controller import register as register_positions
from .ratings.controller import register as register_ratings
from .recap.controller import register as register_recap
from .school.controller import register as register_settings
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(
    settings_module: Optional[str] = None,
    *,
    store: Optional[KeyValueStore] = None,
    analyzer: Optional[StudentAnalyzer] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = getattr(settings, "STORAGE_BACKEND", "memory")
    if store is None:
        store = build_store(
            backend=backend,
            db_config=getattr(settings, "DB_CONFIG", {}),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        )
    container = build_container(
        store=store,
        analyzer=analyzer,
        seed_demo_teacher=bool(getattr(settings, "AUTO_SEED_DB", False)),
    )
    app.extensions["gradewise.container"] = container
    logger.info("Started with settings=%s storage=%s", settings_module, backend)

    register_error_handlers(app)
    register_users(app, container)
    register_students(app, container)
    register_positions(app, container)
    register_categories(app, container)
    register_ratings(app, container)
    register_attendance(app, container)
    register_points(app, container)
    register_settings(app, container)
    register_recap(app, container)
    register_analysis(app, container)

    return app
