"""Type-aware validation of submitted answers.

`validate_answer_value` checks one value against its question's declared type
and option set, returning at most one message. `validate_response` enforces
required-question coverage over a whole submission.

Only required questions are checked: an answer to an optional question is
accepted as-is, even when its value does not fit the question type.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional

from formbuilder.logic.answer_canonical import coerce_number
from formbuilder.models.form import Form, FormResponse, Question
from formbuilder.models.question_type import QuestionType
from formbuilder.models.response_types import FieldError, ValidationResult

FREE_TEXT_MAX = 1000

REQUIRED_MESSAGE = "This question is required"


def _option_texts(question: Question) -> set[str]:
    return {option.answer for option in (question.options or [])}


def _check_free_text(value: Any, question: Question) -> Optional[str]:
    if not isinstance(value, str):
        return "Value must be text"
    if len(value.strip()) < 1:
        return "The answer cannot be empty"
    if len(value) > FREE_TEXT_MAX:
        return f"The answer must be at most {FREE_TEXT_MAX} characters"
    return None


def _check_integer(value: Any, question: Question) -> Optional[str]:
    number = coerce_number(value)
    if math.isnan(number) or math.isinf(number) or not number.is_integer():
        return "Value must be an integer"
    return None


def _check_decimal(value: Any, question: Question) -> Optional[str]:
    if math.isnan(coerce_number(value)):
        return "Value must be a number"
    return None


def _check_yes_no(value: Any, question: Question) -> Optional[str]:
    if not isinstance(value, bool):
        return "Value must be Yes or No"
    return None


def _check_single_choice(value: Any, question: Question) -> Optional[str]:
    if not isinstance(value, str):
        return "Select an option"
    if value not in _option_texts(question):
        return "Selected option is not valid"
    return None


def _check_multiple_choice(value: Any, question: Question) -> Optional[str]:
    if not isinstance(value, (list, tuple)) or len(value) == 0:
        return "Select at least one option"
    allowed = _option_texts(question)
    for selected in value:
        if not isinstance(selected, str) or selected not in allowed:
            return "One of the selected options is not valid"
    return None


_CHECKS: Dict[QuestionType, Callable[[Any, Question], Optional[str]]] = {
    QuestionType.FREE_TEXT: _check_free_text,
    QuestionType.INTEGER: _check_integer,
    QuestionType.DECIMAL_NUMBER: _check_decimal,
    QuestionType.YES_NO: _check_yes_no,
    QuestionType.SINGLE_CHOICE: _check_single_choice,
    QuestionType.MULTIPLE_CHOICE: _check_multiple_choice,
}
assert set(_CHECKS) == set(QuestionType), "every question type needs an answer check"


def validate_answer_value(value: Any, question: Question) -> Optional[str]:
    """Return an error message for ``value`` or None when it fits ``question``."""
    if value is None or value == "":
        return REQUIRED_MESSAGE
    return _CHECKS[QuestionType(question.question_type)](value, question)


def validate_response(response: FormResponse, form: Optional[Form]) -> ValidationResult:
    """Validate a submission against its form.

    A missing form yields a single ``formId`` error. For every required
    question, a missing answer is reported without running the value checks.
    """
    errors: List[FieldError] = []
    if form is None:
        errors.append(FieldError(field="formId", message="Form not found"))
        return ValidationResult.from_errors(errors)

    for question in form.questions:
        if not question.required:
            continue
        field = f"question_{question.code}"
        answer = response.find_answer(question.id)
        if answer is None:
            errors.append(
                FieldError(field=field, message=f'The question "{question.title}" is required')
            )
            continue
        message = validate_answer_value(answer.value, question)
        if message:
            errors.append(FieldError(field=field, message=message))

    return ValidationResult.from_errors(errors)


__all__ = [
    "FREE_TEXT_MAX",
    "REQUIRED_MESSAGE",
    "validate_answer_value",
    "validate_response",
]
