"""Response submission and listing endpoints."""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Query

from formbuilder.http.problem import problem_response
from formbuilder.logic.answer_validation import validate_response
from formbuilder.logic.events import RESPONSE_SUBMITTED, publish
from formbuilder.logic.problem_factory import problem_form_not_found, problem_response_invalid
from formbuilder.logic.repository_forms import load_form
from formbuilder.logic.repository_responses import load_responses, save_response
from formbuilder.models.form import FormResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/api/responses",
    summary="List responses, optionally for one form",
    operation_id="listResponses",
    response_model=List[FormResponse],
)
def list_responses(form_id: Optional[str] = Query(default=None, alias="formId")):
    return load_responses(form_id)


@router.post(
    "/api/responses",
    summary="Submit a response",
    operation_id="submitResponse",
    status_code=201,
    response_model=FormResponse,
)
def submit_response(response: FormResponse):
    form = load_form(response.form_id)
    if form is None:
        return problem_response(problem_form_not_found(response.form_id))
    result = validate_response(response, form)
    if not result.is_valid:
        logger.info("response_rejected form_id=%s errors=%d", response.form_id, len(result.errors))
        return problem_response(problem_response_invalid(result))
    if not response.id:
        response = response.model_copy(update={"id": uuid.uuid4().hex})
    save_response(response)
    publish(RESPONSE_SUBMITTED, {"response_id": response.id, "form_id": response.form_id})
    return response


__all__ = ["router"]
