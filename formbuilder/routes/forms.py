"""Form definition endpoints: CRUD, field checks, visibility and results."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter

from formbuilder.http.problem import problem_response
from formbuilder.logic.events import FORM_DELETED, FORM_SAVED, publish
from formbuilder.logic.fill_session import FillSession
from formbuilder.logic.problem_factory import problem_form_invalid, problem_form_not_found
from formbuilder.logic.repository_forms import delete_form, load_form, load_forms, save_form
from formbuilder.logic.repository_responses import load_responses
from formbuilder.logic.results import summarize_form
from formbuilder.logic.validation import find_dangling_conditionals, validate_field, validate_form
from formbuilder.models.form import Form
from formbuilder.models.response_types import (
    DeleteResult,
    FieldCheckRequest,
    FieldCheckResult,
    ResultsSummary,
    VisibilityRequest,
    VisibilityView,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/forms", summary="List forms", operation_id="listForms", response_model=List[Form])
def list_forms():
    return load_forms()


@router.post("/api/forms", summary="Create or replace a form", operation_id="saveForm", response_model=Form)
def upsert_form(form: Form):
    result = validate_form(form)
    if not result.is_valid:
        logger.info("form_rejected form_id=%s errors=%d", form.id, len(result.errors))
        return problem_response(problem_form_invalid(result))
    for warning in find_dangling_conditionals(form):
        logger.warning("form_dangling_conditional form_id=%s field=%s message=%s", form.id, warning.field, warning.message)
    created = save_form(form)
    publish(FORM_SAVED, {"form_id": form.id, "created": created})
    return form


@router.post(
    "/api/forms/validate-field",
    summary="Check a single editor field",
    operation_id="validateField",
    response_model=FieldCheckResult,
)
def check_field(payload: FieldCheckRequest):
    return FieldCheckResult(field=payload.field, error=validate_field(payload.field, payload.value))


@router.get("/api/forms/{form_id}", summary="Get a form", operation_id="getForm", response_model=Form)
def get_form(form_id: str):
    form = load_form(form_id)
    if form is None:
        return problem_response(problem_form_not_found(form_id))
    return form


@router.delete(
    "/api/forms/{form_id}",
    summary="Delete a form and its responses",
    operation_id="deleteForm",
    response_model=DeleteResult,
)
def remove_form(form_id: str):
    existed = delete_form(form_id)
    publish(FORM_DELETED, {"form_id": form_id, "existed": existed})
    return DeleteResult(success=True)


@router.post(
    "/api/forms/{form_id}/visibility",
    summary="Compute visible questions and progress for in-progress answers",
    operation_id="computeVisibility",
    response_model=VisibilityView,
)
def compute_visibility(form_id: str, payload: VisibilityRequest):
    form = load_form(form_id)
    if form is None:
        return problem_response(problem_form_not_found(form_id))
    session = FillSession(form, payload.answers)
    return VisibilityView(
        form_id=form.id,
        visible_question_ids=[q.id for q in session.visible_questions()],
        progress=session.progress(),
    )


@router.get(
    "/api/forms/{form_id}/results",
    summary="Aggregate submitted responses",
    operation_id="getFormResults",
    response_model=ResultsSummary,
)
def get_results(form_id: str):
    form = load_form(form_id)
    if form is None:
        return problem_response(problem_form_not_found(form_id))
    return summarize_form(form, load_responses(form_id))


__all__ = ["router"]
