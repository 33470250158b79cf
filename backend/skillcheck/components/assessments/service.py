"""Assessment business logic: question placement, answer submission, result queries."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models.assessment_question import AssessmentQuestion
from ...models.candidate_answer import CandidateAnswer
from ...models.candidate_assessment import CandidateAssessment, CandidateAssessmentStatus
from ...shared.utils import to_points, utcnow
from ..scoring.grading import grade
from . import lifecycle
from .errors import (
    ConflictError,
    DuplicateQuestionError,
    InvalidTransitionError,
    NotFoundError,
    TimeLimitExceededError,
)
from .repository import (
    candidate_assessment_to_response,
    find_answer,
    find_assessment_by_id,
    find_assessment_question_link,
    find_candidate_assessment,
    find_question_by_id,
    list_answers,
    list_candidate_assessments_for_assessment,
    list_candidate_assessments_for_candidate,
    resolve_answer_target,
)

logger = logging.getLogger("skillcheck.assessments")


# ---------------------------------------------------------------------------
# Question placement
# ---------------------------------------------------------------------------

def add_question_to_assessment(
    db: Session,
    assessment_id: int,
    question_id: int,
    order_index: int,
    points: int = 1,
) -> AssessmentQuestion:
    if find_assessment_by_id(db, assessment_id) is None:
        raise NotFoundError(f"Assessment with id {assessment_id} not found")
    if find_question_by_id(db, question_id) is None:
        raise NotFoundError(f"Question with id {question_id} not found")
    if find_assessment_question_link(db, assessment_id, question_id) is not None:
        raise DuplicateQuestionError("Question is already part of this assessment")

    link = AssessmentQuestion(
        assessment_id=assessment_id,
        question_id=question_id,
        order_index=order_index,
        points=points,
    )
    db.add(link)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if find_assessment_question_link(db, assessment_id, question_id) is not None:
            raise DuplicateQuestionError("Question is already part of this assessment")
        raise
    db.refresh(link)
    logger.info(
        "Question added assessment_id=%s question_id=%s order_index=%s points=%s",
        assessment_id,
        question_id,
        order_index,
        points,
    )
    return link


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

def start_assessment(db: Session, candidate_assessment_id: int) -> CandidateAssessment:
    return lifecycle.start(db, candidate_assessment_id)


def complete_assessment(db: Session, candidate_assessment_id: int) -> CandidateAssessment:
    return lifecycle.complete(db, candidate_assessment_id)


def expire_assessment(db: Session, candidate_assessment_id: int) -> CandidateAssessment:
    return lifecycle.expire(db, candidate_assessment_id)


# ---------------------------------------------------------------------------
# Submit answer
# ---------------------------------------------------------------------------

def submit_answer(
    db: Session,
    candidate_assessment_id: int,
    question_id: int,
    answer: str,
    *,
    now: datetime | None = None,
) -> CandidateAnswer:
    """Grade and store a candidate's answer to one question.

    A second submission for the same question replaces the first, so the
    question is never counted twice. The candidate assessment's status and
    score are left alone unless the time limit has run out, in which case the
    assessment is completed with the answers already stored and the
    submission is rejected.
    """
    now = now or utcnow()
    target = resolve_answer_target(db, candidate_assessment_id, question_id)
    if target is None:
        raise NotFoundError("Question not found or not part of the candidate assessment")
    question, link, candidate_assessment = target

    if candidate_assessment.status != CandidateAssessmentStatus.IN_PROGRESS:
        logger.warning(
            "Rejected answer candidate_assessment_id=%s status=%s",
            candidate_assessment.id,
            candidate_assessment.status.value,
        )
        raise InvalidTransitionError(
            f"Answers cannot be submitted while the assessment is {candidate_assessment.status.value}"
        )

    if lifecycle.is_time_limit_exceeded(candidate_assessment, now):
        lifecycle.complete(db, candidate_assessment.id, now=now)
        raise TimeLimitExceededError("Time limit exceeded; the assessment was submitted automatically")

    result = grade(question, answer, link.points)

    candidate_answer = find_answer(db, candidate_assessment_id, question_id)
    if candidate_answer is None:
        candidate_answer = CandidateAnswer(
            candidate_assessment_id=candidate_assessment_id,
            question_id=question_id,
        )
        db.add(candidate_answer)
    candidate_answer.answer = answer
    candidate_answer.is_correct = result.is_correct
    candidate_answer.points_earned = result.points_earned
    candidate_answer.answered_at = now

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Answer for this question was submitted concurrently")
    db.refresh(candidate_answer)

    logger.info(
        "Answer stored candidate_assessment_id=%s question_id=%s is_correct=%s points_earned=%s",
        candidate_assessment_id,
        question_id,
        candidate_answer.is_correct,
        candidate_answer.points_earned,
    )
    return candidate_answer


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def get_candidate_result(db: Session, candidate_assessment_id: int) -> Optional[CandidateAssessment]:
    return find_candidate_assessment(db, candidate_assessment_id)


def get_assessment_results(db: Session, assessment_id: int) -> List[CandidateAssessment]:
    return list_candidate_assessments_for_assessment(db, assessment_id)


def get_candidate_assessments(db: Session, candidate_id: int) -> List[CandidateAssessment]:
    return list_candidate_assessments_for_candidate(db, candidate_id)


def get_candidate_answers(db: Session, candidate_assessment_id: int) -> List[CandidateAnswer]:
    if find_candidate_assessment(db, candidate_assessment_id) is None:
        raise NotFoundError(f"Candidate assessment with id {candidate_assessment_id} not found")
    return list_answers(db, candidate_assessment_id)


def get_results_summary(db: Session, assessment_id: int) -> Dict[str, Any]:
    """Per-status counts plus average and best completed score for one assessment."""
    if find_assessment_by_id(db, assessment_id) is None:
        raise NotFoundError(f"Assessment with id {assessment_id} not found")

    results = list_candidate_assessments_for_assessment(db, assessment_id)
    counts = {status.value: 0 for status in CandidateAssessmentStatus}
    scores: List[Decimal] = []
    for candidate_assessment in results:
        counts[candidate_assessment.status.value] += 1
        if candidate_assessment.status == CandidateAssessmentStatus.COMPLETED and candidate_assessment.score is not None:
            scores.append(to_points(candidate_assessment.score))

    return {
        "assessment_id": assessment_id,
        "total_invited": len(results),
        "status_counts": counts,
        "average_score": to_points(sum(scores) / len(scores)) if scores else None,
        "max_score": max(scores) if scores else None,
    }


def candidate_assessment_payload(
    candidate_assessment: CandidateAssessment,
    *,
    now: datetime | None = None,
) -> Dict[str, Any]:
    """Response row for a candidate assessment, with the candidate's details and time left."""
    payload = candidate_assessment_to_response(candidate_assessment)
    payload["time_remaining_seconds"] = lifecycle.time_remaining_seconds(candidate_assessment, now)
    return payload
