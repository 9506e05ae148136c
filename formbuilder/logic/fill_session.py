"""In-progress answer accumulator for one respondent filling one form."""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from formbuilder.logic.answer_validation import validate_response
from formbuilder.logic.visibility_rules import (
    compute_visibility_delta,
    compute_visible_set,
    visible_questions,
)
from formbuilder.models.form import Answer, AnswerValue, Form, FormResponse, Question
from formbuilder.models.response_types import Progress, ValidationResult

logger = logging.getLogger(__name__)


class FillSession:
    """Holds the answers recorded so far for a single form.

    One answer is kept per question (last write wins) in first-answered
    order. Visibility and progress are recomputed from the current answers on
    every call, so the progress denominator grows and shrinks as controlling
    answers change.
    """

    def __init__(self, form: Form, answers: Optional[List[Answer]] = None) -> None:
        self.form = form
        self._answers: Dict[str, Answer] = {}
        for answer in answers or []:
            self._answers[answer.question_id] = answer

    @property
    def answers(self) -> List[Answer]:
        return list(self._answers.values())

    def get(self, question_id: str) -> Optional[Answer]:
        return self._answers.get(question_id)

    def record(self, question_id: str, value: AnswerValue) -> tuple[list[str], list[str]]:
        """Record an answer and return ``(now_visible, now_hidden)`` question ids."""
        before = compute_visible_set(self.form, self.answers)
        self._answers[question_id] = Answer(question_id=question_id, value=value)
        now_visible, now_hidden = compute_visibility_delta(
            before, compute_visible_set(self.form, self.answers)
        )
        if now_visible or now_hidden:
            logger.debug(
                "fill_session_visibility_changed form_id=%s question_id=%s now_visible=%s now_hidden=%s",
                self.form.id,
                question_id,
                now_visible,
                now_hidden,
            )
        return now_visible, now_hidden

    def clear(self, question_id: str) -> None:
        self._answers.pop(question_id, None)

    def visible_questions(self) -> List[Question]:
        return visible_questions(self.form, self.answers)

    def progress(self) -> Progress:
        answered = len(self._answers)
        visible = len(self.visible_questions())
        # Half-up rounding, so 12.5% reports as 13
        percent = math.floor(answered / visible * 100 + 0.5) if visible else 0
        return Progress(answered=answered, visible=visible, percent=percent)

    def build_response(
        self,
        response_id: Optional[str] = None,
        submitted_at: Optional[datetime] = None,
    ) -> FormResponse:
        return FormResponse(
            id=response_id or uuid.uuid4().hex,
            form_id=self.form.id,
            answers=self.answers,
            submitted_at=submitted_at or datetime.now(timezone.utc),
        )

    def validate(self) -> ValidationResult:
        draft = FormResponse(id="", form_id=self.form.id, answers=self.answers)
        return validate_response(draft, self.form)


__all__ = ["FillSession"]
