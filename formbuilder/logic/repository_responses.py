"""Response persistence (append-only)."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from formbuilder.db.base import StorageError, get_engine
from formbuilder.models.form import FormResponse

logger = logging.getLogger(__name__)


def load_responses(form_id: Optional[str] = None) -> List[FormResponse]:
    """Return stored responses in submission order, optionally for one form."""
    query = "SELECT document FROM form_response"
    params: dict = {}
    if form_id is not None:
        query += " WHERE form_id = :form_id"
        params["form_id"] = form_id
    query += " ORDER BY submitted_at ASC, response_id ASC"
    try:
        with get_engine().connect() as conn:
            rows = conn.execute(sql_text(query), params).fetchall()
    except SQLAlchemyError as exc:
        logger.error("load_responses_failed form_id=%s", form_id, exc_info=True)
        raise StorageError("failed to load responses") from exc
    return [FormResponse.model_validate_json(row[0]) for row in rows]


def save_response(response: FormResponse) -> None:
    """Append a response. Re-using an existing id is a hard failure."""
    try:
        with get_engine().begin() as conn:
            conn.execute(
                sql_text(
                    """
                    INSERT INTO form_response (response_id, form_id, submitted_at, document)
                    VALUES (:id, :form_id, :submitted_at, :document)
                    """
                ),
                {
                    "id": response.id,
                    "form_id": response.form_id,
                    "submitted_at": response.submitted_at.isoformat(),
                    "document": response.model_dump_json(by_alias=True),
                },
            )
    except SQLAlchemyError as exc:
        logger.error("save_response_failed response_id=%s form_id=%s", response.id, response.form_id, exc_info=True)
        raise StorageError(f"failed to save response {response.id}") from exc
    logger.info("response_saved response_id=%s form_id=%s", response.id, response.form_id)


__all__ = ["load_responses", "save_response"]
