"""Conditional visibility evaluation.

A question without a conditional is always visible. A question with a
conditional stays hidden until its controlling question has an answer, and is
then shown when the stringified answer satisfies the operator:

- ``equals``: exact text equality
- ``not-equals``: text inequality
- ``contains``: case-insensitive substring match

Any other operator never matches. A ``dependsOn`` that names no question of
the form therefore also keeps the question hidden.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from formbuilder.logic.answer_canonical import stringify_answer_value
from formbuilder.models.form import Answer, Conditional, Form, Question

logger = logging.getLogger(__name__)

OPERATOR_EQUALS = "equals"
OPERATOR_NOT_EQUALS = "not-equals"
OPERATOR_CONTAINS = "contains"

_OPERATORS: Dict[str, Callable[[str, str], bool]] = {
    OPERATOR_EQUALS: lambda answer, expected: answer == expected,
    OPERATOR_NOT_EQUALS: lambda answer, expected: answer != expected,
    OPERATOR_CONTAINS: lambda answer, expected: expected.lower() in answer.lower(),
}


def _find_answer(answers: Iterable[Answer], question_id: str) -> Optional[Answer]:
    for answer in answers:
        if answer.question_id == question_id:
            return answer
    return None


def conditional_matches(conditional: Conditional, answer: Optional[Answer]) -> bool:
    """Return True if the controlling ``answer`` satisfies ``conditional``."""
    if answer is None:
        return False
    compare = _OPERATORS.get(conditional.operator)
    if compare is None:
        logger.debug("visibility_unknown_operator operator=%r", conditional.operator)
        return False
    return compare(stringify_answer_value(answer.value), conditional.value or "")


def is_question_visible(question: Question, answers: Iterable[Answer]) -> bool:
    conditional = question.conditional
    if conditional is None:
        return True
    return conditional_matches(conditional, _find_answer(answers, conditional.depends_on))


def should_show_question(question_id: str, answers: Iterable[Answer], form: Form) -> bool:
    """Return True if the question should currently be shown to a respondent.

    Unknown question ids carry no conditional and are reported visible.
    """
    question = form.find_question(question_id)
    if question is None:
        return True
    return is_question_visible(question, list(answers))


def visible_questions(form: Form, answers: Iterable[Answer]) -> List[Question]:
    """Return the currently visible questions in form order."""
    recorded = list(answers)
    return [q for q in form.questions if is_question_visible(q, recorded)]


def compute_visible_set(form: Form, answers: Iterable[Answer]) -> set[str]:
    return {q.id for q in visible_questions(form, answers)}


def compute_visibility_delta(
    pre_visible: Iterable[str],
    post_visible: Iterable[str],
) -> tuple[list[str], list[str]]:
    """Return ``(now_visible, now_hidden)`` question ids, each sorted."""
    pre_set = set(pre_visible)
    post_set = set(post_visible)
    return sorted(post_set - pre_set), sorted(pre_set - post_set)


__all__ = [
    "OPERATOR_EQUALS",
    "OPERATOR_NOT_EQUALS",
    "OPERATOR_CONTAINS",
    "conditional_matches",
    "is_question_visible",
    "should_show_question",
    "visible_questions",
    "compute_visible_set",
    "compute_visibility_delta",
]
