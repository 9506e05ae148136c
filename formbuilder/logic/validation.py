"""Structural validation for form definitions.

Three layers share the same message vocabulary:

- `validate_field` checks a single editor field (title, code, description)
  and is meant for per-keystroke feedback.
- `validate_question` checks one question against its siblings.
- `validate_form` aggregates form-level rules and every question's errors,
  prefixing question fields with ``questions[i].``.

Validators never raise; every violation is collected so callers can render
all of them at once. Note that limits differ between layers: a form or field
description may hold 500 characters, a question description only 300.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from formbuilder.models.form import Form, Question
from formbuilder.models.question_type import CHOICE_TYPES
from formbuilder.models.response_types import FieldError, ValidationResult

CODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

FORM_TITLE_MIN = 3
FORM_TITLE_MAX = 100
FORM_DESCRIPTION_MAX = 500
QUESTION_TITLE_MIN = 3
QUESTION_TITLE_MAX = 200
QUESTION_DESCRIPTION_MAX = 300


def _code_is_well_formed(code: str) -> bool:
    return CODE_PATTERN.match(code) is not None


def validate_field(field: str, value: Optional[str]) -> Optional[str]:
    """Return an error message for a single editor field, or None.

    Unknown field names pass through without error.
    """
    text = value or ""
    if field == "title":
        trimmed = text.strip()
        if not trimmed:
            return "Title is required"
        if len(trimmed) < FORM_TITLE_MIN:
            return f"Minimum {FORM_TITLE_MIN} characters"
        if len(trimmed) > FORM_TITLE_MAX:
            return f"Maximum {FORM_TITLE_MAX} characters"
        return None
    if field == "code":
        if not text.strip():
            return "Code is required"
        if not _code_is_well_formed(text):
            return "Only letters, numbers, _ and -"
        return None
    if field == "description":
        if text and len(text) > FORM_DESCRIPTION_MAX:
            return f"Maximum {FORM_DESCRIPTION_MAX} characters"
        return None
    return None


def _validate_question_title(question: Question) -> List[FieldError]:
    trimmed = (question.title or "").strip()
    if not trimmed:
        return [FieldError(field="title", message="Question title is required")]
    errors: List[FieldError] = []
    if len(trimmed) < QUESTION_TITLE_MIN:
        errors.append(
            FieldError(
                field="title",
                message=f"Question title must be at least {QUESTION_TITLE_MIN} characters",
            )
        )
    if len(trimmed) > QUESTION_TITLE_MAX:
        errors.append(
            FieldError(
                field="title",
                message=f"Question title must be at most {QUESTION_TITLE_MAX} characters",
            )
        )
    return errors


def _validate_question_code(question: Question, siblings: Iterable[Question]) -> List[FieldError]:
    errors: List[FieldError] = []
    code = question.code or ""
    if not code.strip():
        errors.append(FieldError(field="code", message="Question code is required"))
    if code and not _code_is_well_formed(code):
        errors.append(
            FieldError(
                field="code",
                message="Code may only contain letters, numbers, underscore (_) and hyphen (-)",
            )
        )
    # Compare by identifier so a question never collides with itself
    duplicate = next(
        (q for q in siblings if q.id != question.id and q.code == question.code),
        None,
    )
    if duplicate is not None:
        errors.append(
            FieldError(
                field="code",
                message="Duplicate code. Use a unique code for each question",
            )
        )
    return errors


def _validate_question_options(question: Question) -> List[FieldError]:
    if question.question_type not in CHOICE_TYPES:
        return []
    options = question.options or []
    if len(options) == 0:
        return [FieldError(field="options", message="Choice questions must have at least one option")]
    if len(options) < 2:
        return [FieldError(field="options", message="Choice questions must have at least two options")]
    return [
        FieldError(field=f"options[{index}].answer", message="Option text cannot be empty")
        for index, option in enumerate(options)
        if not (option.answer or "").strip()
    ]


def _validate_question_conditional(question: Question) -> List[FieldError]:
    conditional = question.conditional
    if conditional is None:
        return []
    errors: List[FieldError] = []
    if not conditional.depends_on:
        errors.append(
            FieldError(
                field="conditional.dependsOn",
                message="Select a question for the condition",
            )
        )
    if not (conditional.value or "").strip():
        errors.append(
            FieldError(field="conditional.value", message="Condition value is required")
        )
    return errors


def validate_question(question: Question, all_questions: Iterable[Question]) -> List[FieldError]:
    """Validate one question's internal consistency.

    ``all_questions`` is the full question list of the owning form and is
    only used for duplicate-code detection. The conditional's ``dependsOn``
    target is not resolved here; see `find_dangling_conditionals`.
    """
    errors: List[FieldError] = []
    errors.extend(_validate_question_title(question))
    errors.extend(_validate_question_code(question, list(all_questions)))
    if question.order < 1:
        errors.append(FieldError(field="order", message="Order must be greater than zero"))
    if question.description and len(question.description) > QUESTION_DESCRIPTION_MAX:
        errors.append(
            FieldError(
                field="description",
                message=f"Description must be at most {QUESTION_DESCRIPTION_MAX} characters",
            )
        )
    errors.extend(_validate_question_options(question))
    errors.extend(_validate_question_conditional(question))
    return errors


def validate_form(form: Form) -> ValidationResult:
    """Validate a whole form definition and return every error found."""
    errors: List[FieldError] = []

    title = (form.title or "").strip()
    if not title:
        errors.append(FieldError(field="title", message="Form title is required"))
    elif len(title) < FORM_TITLE_MIN:
        errors.append(
            FieldError(field="title", message=f"Title must be at least {FORM_TITLE_MIN} characters")
        )
    elif len(title) > FORM_TITLE_MAX:
        errors.append(
            FieldError(field="title", message=f"Title must be at most {FORM_TITLE_MAX} characters")
        )

    if form.description and len(form.description) > FORM_DESCRIPTION_MAX:
        errors.append(
            FieldError(
                field="description",
                message=f"Description must be at most {FORM_DESCRIPTION_MAX} characters",
            )
        )

    if not form.questions:
        errors.append(FieldError(field="questions", message="The form must have at least one question"))

    for index, question in enumerate(form.questions):
        for error in validate_question(question, form.questions):
            errors.append(
                FieldError(field=f"questions[{index}].{error.field}", message=error.message)
            )

    return ValidationResult.from_errors(errors)


def find_dangling_conditionals(form: Form) -> List[FieldError]:
    """Report conditionals whose ``dependsOn`` names no question of the form.

    Not part of `validate_form`: a dangling reference is tolerated there and
    simply keeps the dependent question hidden at fill time.
    """
    known_ids = {q.id for q in form.questions}
    errors: List[FieldError] = []
    for index, question in enumerate(form.questions):
        conditional = question.conditional
        if conditional is None or not conditional.depends_on:
            continue
        field = f"questions[{index}].conditional.dependsOn"
        if conditional.depends_on == question.id:
            errors.append(FieldError(field=field, message="A question cannot depend on itself"))
        elif conditional.depends_on not in known_ids:
            errors.append(
                FieldError(
                    field=field,
                    message=f"Condition refers to unknown question {conditional.depends_on!r}",
                )
            )
    return errors


__all__ = [
    "CODE_PATTERN",
    "validate_field",
    "validate_question",
    "validate_form",
    "find_dangling_conditionals",
]
