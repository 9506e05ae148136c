"""Pydantic models for forms, questions and submitted responses.

Wire names are camelCase (``questionType``, ``dependsOn``, ``submittedAt``)
while Python attributes stay snake_case; both spellings are accepted on input.
The models deliberately carry no length or pattern constraints: those rules
are reported as structured errors by `formbuilder.logic.validation`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from formbuilder.models.question_type import QuestionType


# Scalar or multi-select value recorded for a single question
AnswerValue = Union[bool, int, float, str, List[str], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnswerOption(_CamelModel):
    id: str = ""
    question_id: str = ""
    answer: str = ""
    order: int = 1
    open_answer: bool = False


class Conditional(_CamelModel):
    depends_on: str = ""
    # equals | not-equals | contains; unknown operators never match
    operator: str = "equals"
    value: str = ""


class Question(_CamelModel):
    id: str
    form_id: str = ""
    title: str = ""
    code: str = ""
    description: Optional[str] = None
    answer_orientation: str = "vertical"
    order: int = 1
    required: bool = False
    sub_question: bool = False
    question_type: QuestionType = QuestionType.FREE_TEXT
    options: Optional[List[AnswerOption]] = None
    conditional: Optional[Conditional] = None


class Form(_CamelModel):
    id: str
    title: str = ""
    description: Optional[str] = None
    order: int = 1
    questions: List[Question] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    is_active: bool = True

    def find_question(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


class Answer(_CamelModel):
    question_id: str
    value: AnswerValue = None


class FormResponse(_CamelModel):
    id: str = ""
    form_id: str
    answers: List[Answer] = Field(default_factory=list)
    submitted_at: datetime = Field(default_factory=_utcnow)

    def find_answer(self, question_id: str) -> Optional[Answer]:
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None


__all__ = [
    "AnswerValue",
    "AnswerOption",
    "Conditional",
    "Question",
    "Form",
    "Answer",
    "FormResponse",
]
