"""QuestionType enumeration for the six supported question types.

Values match the persisted JSON tokens. Consumers that branch on the type
keep a dispatch table keyed by every member. `CHOICE_TYPES` groups the
types that carry an option list.
"""

from __future__ import annotations

from enum import Enum


class QuestionType(str, Enum):
    FREE_TEXT = "free_text"
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    YES_NO = "yes_no"
    INTEGER = "integer"
    DECIMAL_NUMBER = "decimal_number"


CHOICE_TYPES = frozenset({QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE})


__all__ = ["QuestionType", "CHOICE_TYPES"]
