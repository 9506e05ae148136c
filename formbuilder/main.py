from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from formbuilder.config import AppConfig, load_config
from formbuilder.db.base import StorageError, get_engine
from formbuilder.db.migrations_runner import apply_migrations
from formbuilder.http.problem import (
    handle_http_exception,
    handle_request_validation_error,
    handle_storage_error,
    handle_unexpected_error,
)
from formbuilder.http.request_id import RequestIdMiddleware
from formbuilder.logging_setup import configure_logging
from formbuilder.middleware.cors import apply_cors
from formbuilder.routes import api_router

logger = logging.getLogger(__name__)


def _health_check() -> dict:
    try:
        with get_engine().connect() as conn:
            conn.execute(sql_text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("health_check_db_unavailable", exc_info=True)
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "ok", "database": "ok"}


def _lifespan_for(config: AppConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.database.auto_apply_migrations:
            applied = apply_migrations(get_engine(config.database.dsn), config.database.migrations_dir)
            logger.info("startup_migrations applied=%s", applied)
        else:
            logger.info("startup_migrations skipped (AUTO_APPLY_MIGRATIONS disabled)")
        yield

    return lifespan


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the FastAPI application with routers and error handlers."""
    config = config or load_config()
    configure_logging(config.logging.level)

    app = FastAPI(
        title="Form Builder Service",
        version="0.1.0",
        lifespan=_lifespan_for(config),
    )

    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StorageError, handle_storage_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    apply_cors(app)
    app.add_middleware(RequestIdMiddleware)

    @app.get("/health", summary="Liveness and database reachability", tags=["Health"])
    def health() -> dict:
        return _health_check()

    app.include_router(api_router)
    logger.info("app_created dialect_url=%s", config.database.dsn.split("://", 1)[0])
    return app
