"""Answer grading: exact, case- and whitespace-insensitive match against the canonical answer."""

from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple, Optional

from ...shared.utils import to_points


class GradeResult(NamedTuple):
    is_correct: Optional[bool]
    points_earned: Optional[Decimal]


UNGRADED = GradeResult(is_correct=None, points_earned=None)


def normalize_answer(text: str | None) -> str:
    return (text or "").strip().lower()


def grade(question, submitted_answer: str, point_value) -> GradeResult:
    """Grade one submitted answer.

    ``question`` only needs a ``correct_answer`` attribute. Questions without a
    canonical answer (coding challenges, open free text) are left ungraded and
    both fields come back as ``None``; a blank ``correct_answer`` counts as
    absent. Otherwise grading is all-or-nothing: full ``point_value`` on a
    match, zero on a miss.
    """
    correct_answer = getattr(question, "correct_answer", None)
    if correct_answer is None or not correct_answer.strip():
        return UNGRADED
    if normalize_answer(submitted_answer) == normalize_answer(correct_answer):
        return GradeResult(is_correct=True, points_earned=to_points(point_value))
    return GradeResult(is_correct=False, points_earned=to_points(0))
