"""Database and service wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelDebtRepository
from .services.planning import DebtPlanningService

EXTENSION_KEY = "debtsage"


def init_db(app: Flask) -> None:
    """Create the engine, schema, and planning service for *app*."""

    config: BaseConfig = app.config["DEBTSAGE_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)
    repository = SQLModelDebtRepository(create_session_factory(engine))

    app.extensions[EXTENSION_KEY] = DebtPlanningService(repository)
    app.extensions[f"{EXTENSION_KEY}.engine"] = engine


def get_planning_service() -> DebtPlanningService:
    """Return the planning service bound to the current app."""

    service = current_app.extensions.get(EXTENSION_KEY)
    if service is None:  # pragma: no cover - misconfigured app
        raise RuntimeError("Database engine not initialized")
    return service
