from __future__ import annotations

"""Functional test bootstrap.

Points the service at a file-backed SQLite database under tmp/ before any
application module creates an engine, applies the SQL migrations once per
session and empties both tables before every test.
"""

import os
import pathlib
from typing import Any, Callable, Dict, List

import pytest

_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
# Migrations are applied explicitly below, not at app startup
os.environ["AUTO_APPLY_MIGRATIONS"] = "0"

from sqlalchemy import text as sql_text  # noqa: E402

from formbuilder.db.base import get_engine, reset_engine  # noqa: E402
from formbuilder.db.migrations_runner import apply_migrations  # noqa: E402
from formbuilder.logic.events import get_buffered_events  # noqa: E402
from formbuilder.models.form import Form, Question  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def functional_sqlite_bootstrap():
    """Session-level bootstrap: apply migrations once for the shared DB."""
    reset_engine()
    engine = get_engine(os.environ["TEST_DATABASE_URL"])
    apply_migrations(engine, _ROOT / "migrations")
    yield
    reset_engine()


@pytest.fixture(autouse=True)
def empty_tables():
    with get_engine().begin() as conn:
        conn.execute(sql_text("DELETE FROM form_response"))
        conn.execute(sql_text("DELETE FROM form"))
    get_buffered_events(clear=True)
    yield


@pytest.fixture
def make_question() -> Callable[..., Question]:
    """Build a valid question; keyword overrides use snake_case field names."""

    def _make(qid: str, question_type: str = "free_text", **fields: Any) -> Question:
        data: Dict[str, Any] = {
            "id": qid,
            "title": f"Question {qid}",
            "code": qid.upper(),
            "question_type": question_type,
            "order": 1,
        }
        data.update(fields)
        return Question(**data)

    return _make


@pytest.fixture
def make_form() -> Callable[..., Form]:
    def _make(questions: List[Question], form_id: str = "form-1", **fields: Any) -> Form:
        data: Dict[str, Any] = {"id": form_id, "title": "Customer survey", "questions": questions}
        data.update(fields)
        return Form(**data)

    return _make


def options(*texts: str) -> List[Dict[str, Any]]:
    return [{"id": f"opt-{i}", "answer": text, "order": i + 1} for i, text in enumerate(texts)]


@pytest.fixture
def choice_options() -> Callable[..., List[Dict[str, Any]]]:
    return options
