"""Form persistence.

Each form is stored as one JSON document and replaced wholesale on save.
Deleting a form removes its responses in the same transaction.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from formbuilder.db.base import StorageError, get_engine
from formbuilder.models.form import Form

logger = logging.getLogger(__name__)


def load_forms() -> List[Form]:
    """Return every stored form ordered by position, then creation time."""
    try:
        with get_engine().connect() as conn:
            rows = conn.execute(
                sql_text("SELECT document FROM form ORDER BY position ASC, created_at ASC")
            ).fetchall()
    except SQLAlchemyError as exc:
        logger.error("load_forms_failed", exc_info=True)
        raise StorageError("failed to load forms") from exc
    return [Form.model_validate_json(row[0]) for row in rows]


def load_form(form_id: str) -> Optional[Form]:
    try:
        with get_engine().connect() as conn:
            row = conn.execute(
                sql_text("SELECT document FROM form WHERE form_id = :id"),
                {"id": form_id},
            ).fetchone()
    except SQLAlchemyError as exc:
        logger.error("load_form_failed form_id=%s", form_id, exc_info=True)
        raise StorageError(f"failed to load form {form_id}") from exc
    if row is None:
        return None
    return Form.model_validate_json(row[0])


def save_form(form: Form) -> bool:
    """Insert or fully replace a form. Returns True when a new row was created."""
    params = {
        "id": form.id,
        "title": form.title,
        "position": form.order,
        "created_at": form.created_at.isoformat(),
        "document": form.model_dump_json(by_alias=True),
    }
    try:
        with get_engine().begin() as conn:
            updated = conn.execute(
                sql_text(
                    """
                    UPDATE form
                       SET title = :title, position = :position,
                           created_at = :created_at, document = :document
                     WHERE form_id = :id
                    """
                ),
                params,
            ).rowcount
            if updated:
                logger.info("form_replaced form_id=%s", form.id)
                return False
            conn.execute(
                sql_text(
                    """
                    INSERT INTO form (form_id, title, position, created_at, document)
                    VALUES (:id, :title, :position, :created_at, :document)
                    """
                ),
                params,
            )
    except SQLAlchemyError as exc:
        logger.error("save_form_failed form_id=%s", form.id, exc_info=True)
        raise StorageError(f"failed to save form {form.id}") from exc
    logger.info("form_created form_id=%s", form.id)
    return True


def delete_form(form_id: str) -> bool:
    """Delete a form and all of its responses. Returns True if the form existed."""
    try:
        with get_engine().begin() as conn:
            removed_responses = conn.execute(
                sql_text("DELETE FROM form_response WHERE form_id = :id"),
                {"id": form_id},
            ).rowcount
            removed = conn.execute(
                sql_text("DELETE FROM form WHERE form_id = :id"),
                {"id": form_id},
            ).rowcount
    except SQLAlchemyError as exc:
        logger.error("delete_form_failed form_id=%s", form_id, exc_info=True)
        raise StorageError(f"failed to delete form {form_id}") from exc
    logger.info("form_deleted form_id=%s existed=%s responses_removed=%s", form_id, bool(removed), removed_responses)
    return bool(removed)


__all__ = ["load_forms", "load_form", "save_form", "delete_form"]
