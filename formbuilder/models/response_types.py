"""Pydantic models for validation results and API response bodies."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from formbuilder.models.form import Answer


class FieldError(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    errors: List[FieldError] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[FieldError]) -> "ValidationResult":
        return cls(is_valid=len(errors) == 0, errors=list(errors))


class Progress(BaseModel):
    answered: int
    visible: int
    percent: int


class FieldCheckRequest(BaseModel):
    field: str
    value: str = ""


class FieldCheckResult(BaseModel):
    field: str
    error: Optional[str] = None


class VisibilityRequest(BaseModel):
    answers: List[Answer] = Field(default_factory=list)


class VisibilityView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    form_id: str
    visible_question_ids: List[str]
    progress: Progress


class QuestionStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question_id: str
    code: str
    type: str
    data: Any


class ResultsSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    form_id: str
    response_count: int
    questions: List[QuestionStats] = Field(default_factory=list)


class DeleteResult(BaseModel):
    success: bool


__all__ = [
    "FieldError",
    "ValidationResult",
    "Progress",
    "FieldCheckRequest",
    "FieldCheckResult",
    "VisibilityRequest",
    "VisibilityView",
    "QuestionStats",
    "ResultsSummary",
    "DeleteResult",
]
