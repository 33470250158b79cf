"""Assessment DB helpers, serialization, and query utilities.

Lookups return ``None`` (or an empty list) on a miss; deciding whether a miss
is an error is left to the caller.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models.assessment import Assessment
from ...models.assessment_question import AssessmentQuestion
from ...models.candidate_answer import CandidateAnswer
from ...models.candidate_assessment import CandidateAssessment, CandidateAssessmentStatus
from ...models.question import Question
from ...models.user import User
from ...shared.utils import to_points


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def find_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def find_assessment_by_id(db: Session, assessment_id: int) -> Optional[Assessment]:
    return db.query(Assessment).filter(Assessment.id == assessment_id).first()


def find_question_by_id(db: Session, question_id: int) -> Optional[Question]:
    return db.query(Question).filter(Question.id == question_id).first()


def find_assessment_question_link(db: Session, assessment_id: int, question_id: int) -> Optional[AssessmentQuestion]:
    return db.query(AssessmentQuestion).filter(
        AssessmentQuestion.assessment_id == assessment_id,
        AssessmentQuestion.question_id == question_id,
    ).first()


def find_candidate_assessment(
    db: Session,
    candidate_assessment_id: int,
    *,
    for_update: bool = False,
) -> Optional[CandidateAssessment]:
    """Fetch a candidate assessment, optionally locking the row until commit."""
    query = db.query(CandidateAssessment).filter(CandidateAssessment.id == candidate_assessment_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def find_invitation(db: Session, candidate_id: int, assessment_id: int) -> Optional[CandidateAssessment]:
    return db.query(CandidateAssessment).filter(
        CandidateAssessment.candidate_id == candidate_id,
        CandidateAssessment.assessment_id == assessment_id,
    ).first()


def find_answer(db: Session, candidate_assessment_id: int, question_id: int) -> Optional[CandidateAnswer]:
    return db.query(CandidateAnswer).filter(
        CandidateAnswer.candidate_assessment_id == candidate_assessment_id,
        CandidateAnswer.question_id == question_id,
    ).first()


def resolve_answer_target(
    db: Session,
    candidate_assessment_id: int,
    question_id: int,
) -> Optional[Tuple[Question, AssessmentQuestion, CandidateAssessment]]:
    """Resolve (question, link, candidate assessment) in one join.

    Returns ``None`` when the question does not exist, the candidate assessment
    does not exist, or the question is not linked to that candidate's assessment.
    """
    row = (
        db.query(Question, AssessmentQuestion, CandidateAssessment)
        .join(AssessmentQuestion, AssessmentQuestion.question_id == Question.id)
        .join(CandidateAssessment, CandidateAssessment.assessment_id == AssessmentQuestion.assessment_id)
        .filter(
            Question.id == question_id,
            CandidateAssessment.id == candidate_assessment_id,
        )
        .first()
    )
    if row is None:
        return None
    question, link, candidate_assessment = row
    return question, link, candidate_assessment


def sum_points_earned(db: Session, candidate_assessment_id: int) -> Decimal:
    """SUM(points_earned) for a candidate assessment; NULL rows and no rows count as 0."""
    total = (
        db.query(func.coalesce(func.sum(CandidateAnswer.points_earned), 0))
        .filter(CandidateAnswer.candidate_assessment_id == candidate_assessment_id)
        .scalar()
    )
    return to_points(total)


def sum_assessment_points(db: Session, assessment_id: int) -> int:
    total = (
        db.query(func.coalesce(func.sum(AssessmentQuestion.points), 0))
        .filter(AssessmentQuestion.assessment_id == assessment_id)
        .scalar()
    )
    return int(total or 0)


def list_candidate_assessments_for_assessment(db: Session, assessment_id: int) -> List[CandidateAssessment]:
    return (
        db.query(CandidateAssessment)
        .options(joinedload(CandidateAssessment.candidate))
        .filter(CandidateAssessment.assessment_id == assessment_id)
        .order_by(CandidateAssessment.id)
        .all()
    )


def list_candidate_assessments_for_candidate(db: Session, candidate_id: int) -> List[CandidateAssessment]:
    return (
        db.query(CandidateAssessment)
        .filter(CandidateAssessment.candidate_id == candidate_id)
        .order_by(CandidateAssessment.invited_at.desc(), CandidateAssessment.id.desc())
        .all()
    )


def list_answers(db: Session, candidate_assessment_id: int) -> List[CandidateAnswer]:
    return (
        db.query(CandidateAnswer)
        .filter(CandidateAnswer.candidate_assessment_id == candidate_assessment_id)
        .order_by(CandidateAnswer.id)
        .all()
    )


def list_stale_invitations(db: Session, invited_before) -> List[CandidateAssessment]:
    return (
        db.query(CandidateAssessment)
        .filter(
            CandidateAssessment.status == CandidateAssessmentStatus.INVITED,
            CandidateAssessment.invited_at < invited_before,
        )
        .order_by(CandidateAssessment.id)
        .all()
    )


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def candidate_assessment_to_response(candidate_assessment: CandidateAssessment) -> Dict[str, Any]:
    """Flatten a candidate assessment plus its candidate's display fields for result lists."""
    candidate = candidate_assessment.candidate
    return {
        "id": candidate_assessment.id,
        "candidate_id": candidate_assessment.candidate_id,
        "assessment_id": candidate_assessment.assessment_id,
        "status": candidate_assessment.status.value if candidate_assessment.status else None,
        "invited_at": candidate_assessment.invited_at,
        "started_at": candidate_assessment.started_at,
        "completed_at": candidate_assessment.completed_at,
        "score": candidate_assessment.score,
        "total_points": candidate_assessment.total_points,
        "candidate_name": candidate.full_name if candidate else None,
        "candidate_email": candidate.email if candidate else None,
    }
