"""Candidate invitations: at most one candidate assessment per (candidate, assessment)."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models.candidate_assessment import CandidateAssessment, CandidateAssessmentStatus
from ...models.user import UserType
from ...shared.utils import utcnow
from .errors import AlreadyInvitedError, NotFoundError, RoleMismatchError
from .repository import (
    find_assessment_by_id,
    find_invitation,
    find_user_by_id,
    sum_assessment_points,
)

logger = logging.getLogger("skillcheck.invitations")


def invite_candidate(
    db: Session,
    candidate_id: int,
    assessment_id: int,
    *,
    now: datetime | None = None,
) -> CandidateAssessment:
    """Create an ``invited`` candidate assessment.

    Raises NotFoundError for an unknown user or assessment, RoleMismatchError
    when the user is not a candidate, and AlreadyInvitedError when the pair is
    already linked. ``total_points`` is snapshotted from the assessment's
    question points at this moment.
    """
    candidate = find_user_by_id(db, candidate_id)
    if candidate is None:
        raise NotFoundError(f"Candidate with id {candidate_id} not found")
    if candidate.user_type != UserType.CANDIDATE:
        logger.warning("Rejected invite user_id=%s user_type=%s", candidate_id, candidate.user_type.value)
        raise RoleMismatchError(f"User {candidate_id} is not a candidate")

    assessment = find_assessment_by_id(db, assessment_id)
    if assessment is None:
        raise NotFoundError(f"Assessment with id {assessment_id} not found")

    if find_invitation(db, candidate_id, assessment_id) is not None:
        logger.warning("Rejected duplicate invite candidate_id=%s assessment_id=%s", candidate_id, assessment_id)
        raise AlreadyInvitedError("Candidate is already invited to this assessment")

    candidate_assessment = CandidateAssessment(
        candidate_id=candidate_id,
        assessment_id=assessment_id,
        status=CandidateAssessmentStatus.INVITED,
        invited_at=now or utcnow(),
        total_points=sum_assessment_points(db, assessment_id),
    )
    db.add(candidate_assessment)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # Lost a race with a concurrent invite; the unique index decided.
        if find_invitation(db, candidate_id, assessment_id) is not None:
            raise AlreadyInvitedError("Candidate is already invited to this assessment")
        raise
    db.refresh(candidate_assessment)

    logger.info(
        "Candidate invited candidate_assessment_id=%s candidate_id=%s assessment_id=%s",
        candidate_assessment.id,
        candidate_id,
        assessment_id,
    )
    return candidate_assessment
