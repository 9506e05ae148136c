"""Aggregation of submitted responses for the results view.

Produces raw per-question figures only (counts, average/min/max); charting
and presentation are left to the client.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterable, List

from formbuilder.logic.answer_canonical import stringify_answer_value
from formbuilder.models.form import Answer, Form, FormResponse, Question
from formbuilder.models.question_type import QuestionType
from formbuilder.models.response_types import QuestionStats, ResultsSummary


def _answers_for(question: Question, responses: Iterable[FormResponse]) -> List[Answer]:
    found: List[Answer] = []
    for response in responses:
        answer = response.find_answer(question.id)
        if answer is not None:
            found.append(answer)
    return found


def _choice_counts(answers: List[Answer]) -> Dict[str, Any]:
    counts: Dict[str, int] = {}
    for answer in answers:
        key = stringify_answer_value(answer.value)
        counts[key] = counts.get(key, 0) + 1
    return {"type": "choices", "data": counts}


def _yes_no_counts(answers: List[Answer]) -> Dict[str, Any]:
    yes = sum(1 for a in answers if a.value is True)
    no = sum(1 for a in answers if a.value is False)
    return {"type": "boolean", "data": {"yes": yes, "no": no}}


def _one_decimal(value: float) -> float:
    if not math.isfinite(value):
        return value
    # Half up on the exact binary value
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _scale(answers: List[Answer]) -> Dict[str, Any]:
    values = [
        a.value
        for a in answers
        if isinstance(a.value, (int, float)) and not isinstance(a.value, bool)
    ]
    if not values:
        return {"type": "scale", "data": {"average": None, "min": None, "max": None}}
    return {
        "type": "scale",
        "data": {
            "average": _one_decimal(sum(values) / len(values)),
            "min": min(values),
            "max": max(values),
        },
    }


def _text_count(answers: List[Answer]) -> Dict[str, Any]:
    return {"type": "text", "data": len(answers)}


_AGGREGATORS: Dict[QuestionType, Callable[[List[Answer]], Dict[str, Any]]] = {
    QuestionType.SINGLE_CHOICE: _choice_counts,
    QuestionType.YES_NO: _yes_no_counts,
    QuestionType.INTEGER: _scale,
    QuestionType.DECIMAL_NUMBER: _scale,
    QuestionType.FREE_TEXT: _text_count,
    QuestionType.MULTIPLE_CHOICE: _text_count,
}
assert set(_AGGREGATORS) == set(QuestionType), "every question type needs an aggregator"


def question_stats(question: Question, responses: Iterable[FormResponse]) -> Dict[str, Any]:
    """Aggregate all recorded answers to ``question``.

    Returns ``{"type": ..., "data": ...}`` where type is one of
    ``choices``, ``boolean``, ``scale`` or ``text``.
    """
    answers = _answers_for(question, responses)
    return _AGGREGATORS[QuestionType(question.question_type)](answers)


def format_answer(question: Question, value: Any) -> str:
    """Render a recorded value for the per-response table."""
    if question.question_type == QuestionType.YES_NO:
        return "Yes" if value else "No"
    if question.question_type == QuestionType.MULTIPLE_CHOICE and isinstance(value, (list, tuple)):
        return ", ".join(stringify_answer_value(item) for item in value)
    return stringify_answer_value(value)


def summarize_form(form: Form, responses: Iterable[FormResponse]) -> ResultsSummary:
    rows = [r for r in responses if r.form_id == form.id]
    questions = []
    for question in form.questions:
        stats = question_stats(question, rows)
        questions.append(
            QuestionStats(
                question_id=question.id,
                code=question.code,
                type=stats["type"],
                data=stats["data"],
            )
        )
    return ResultsSummary(form_id=form.id, response_count=len(rows), questions=questions)


__all__ = ["question_stats", "format_answer", "summarize_form"]
