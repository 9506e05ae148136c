"""SQLAlchemy engine management.

Targets SQLite by default (file-backed under ./data) and any SQLAlchemy URL
supplied through configuration. No declarative models are defined here;
repositories issue SQL text statements against the tables created by the
migrations runner.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from formbuilder.config import load_config

logger = logging.getLogger(__name__)


# Module-level cached Engine to ensure a single shared engine per URL
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def _ensure_sqlite_parent(url: str) -> None:
    database = make_url(url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def get_engine(url: str | None = None) -> Engine:
    """Return a singleton SQLAlchemy Engine for the given URL.

    Without an explicit URL the cached Engine is reused, so repositories
    share whatever engine the application bootstrapped. For SQLite in-memory
    URLs, use a StaticPool to keep a single connection alive across sessions
    and threads during tests.
    """
    global _ENGINE, _ENGINE_URL
    if url is None and _ENGINE is not None:
        return _ENGINE
    resolved_url = url or load_config().database.dsn

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        kwargs: dict = {"future": True, "pool_pre_ping": True}
        if resolved_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in resolved_url:
                kwargs["poolclass"] = StaticPool
            else:
                _ensure_sqlite_parent(resolved_url)
        if _ENGINE is not None:
            _ENGINE.dispose()
        _ENGINE = create_engine(resolved_url, **kwargs)
        _ENGINE_URL = resolved_url
        logger.info("db_engine_created dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


def reset_engine() -> None:
    """Dispose the cached Engine so the next call re-reads configuration."""
    global _ENGINE, _ENGINE_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _ENGINE_URL = None


class StorageError(RuntimeError):
    """A repository read or write failed at the database layer."""
