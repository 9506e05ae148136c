"""Centralised construction of problem+json payloads.

Route modules build error bodies through these helpers instead of embedding
titles and codes inline.
"""

from __future__ import annotations

from typing import Dict
import logging

from formbuilder.models.response_types import ValidationResult

logger = logging.getLogger(__name__)


def _problem(title: str, status: int, detail: str, code: str) -> Dict[str, object]:
    problem: Dict[str, object] = {
        "title": title,
        "status": status,
        "detail": detail,
        "code": code,
    }
    logger.info("error_handler.handle code=%s status=%s", code, status)
    return problem


def problem_form_not_found(form_id: str) -> Dict[str, object]:
    """Return a 404 problem for an unknown form id."""
    return _problem("Form not found", 404, f"form {form_id} does not exist", "FORM_NOT_FOUND")


def problem_form_invalid(result: ValidationResult) -> Dict[str, object]:
    """Return a 422 problem carrying every structural error of a form."""
    problem = _problem("Invalid form", 422, "Form definition failed validation", "FORM_INVALID")
    problem["errors"] = [e.model_dump() for e in result.errors]
    return problem


def problem_response_invalid(result: ValidationResult) -> Dict[str, object]:
    """Return a 422 problem carrying every answer error of a submission."""
    problem = _problem("Invalid response", 422, "Response failed validation", "RESPONSE_INVALID")
    problem["errors"] = [e.model_dump() for e in result.errors]
    return problem


def problem_storage_failure() -> Dict[str, object]:
    """Return a 500 problem for a failed repository operation."""
    return _problem("Storage failure", 500, "The operation could not be persisted", "STORAGE_FAILURE")


__all__ = [
    "problem_form_not_found",
    "problem_form_invalid",
    "problem_response_invalid",
    "problem_storage_failure",
]
