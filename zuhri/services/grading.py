from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional

from zuhri.core.constants import HONORS_THRESHOLDS


@dataclass
class GradeOutcome:
    score: float
    correct_answers: int
    total_questions: int
    points_earned: float
    total_points: float
    passed: bool


def round_half_up(value: float, digits: int = 0) -> float:
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def round_percentage(value: float) -> float:
    return round_half_up(value, 2)


def _normalize_answer(value) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()


def grade_answers(questions: Iterable, answers: Dict[str, str], passing_grade: float) -> GradeOutcome:
    """Score submitted answers against the exam's questions.

    Each question carries ``id``, ``correct_answer`` and ``points``. Answers are
    keyed by question id as a string; unanswered questions count as wrong and
    ids that do not belong to the exam are ignored.
    """
    answers = {str(key): value for key, value in (answers or {}).items()}
    correct = 0
    total = 0
    points_earned = 0.0
    total_points = 0.0

    for question in questions:
        total += 1
        points = float(question.points or 0)
        total_points += points
        submitted = _normalize_answer(answers.get(str(question.id)))
        if submitted is not None and submitted == _normalize_answer(question.correct_answer):
            correct += 1
            points_earned += points

    # Whole percentage points, half-up: 2 of 3 scores 67.
    score = round_half_up(points_earned / total_points * 100) if total_points > 0 else 0.0
    return GradeOutcome(
        score=score,
        correct_answers=correct,
        total_questions=total,
        points_earned=points_earned,
        total_points=total_points,
        passed=score >= float(passing_grade),
    )


def honors_for_grade(grade: float) -> Optional[str]:
    for threshold, text in HONORS_THRESHOLDS:
        if grade >= threshold:
            return text
    return None
