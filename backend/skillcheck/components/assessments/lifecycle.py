"""Candidate assessment state machine.

    invited ──start()──▶ in_progress ──complete()──▶ completed
       │                     │
       └──────expire()───────┴──────────────────────▶ expired

``completed`` and ``expired`` are terminal. Every transition locks the
candidate assessment row for the duration of its transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, NoReturn, Optional

from sqlalchemy.orm import Session

from ...models.candidate_assessment import TERMINAL_STATUSES, CandidateAssessment, CandidateAssessmentStatus
from ...platform.config import settings
from ...shared.utils import ensure_utc, utcnow
from ..scoring.service import aggregate
from .errors import (
    AlreadyCompletedError,
    InvalidTransitionError,
    InvitationExpiredError,
    NotFoundError,
)
from .repository import find_candidate_assessment, list_stale_invitations

logger = logging.getLogger("skillcheck.lifecycle")


# ---------------------------------------------------------------------------
# Deadlines
# ---------------------------------------------------------------------------

def invitation_deadline(candidate_assessment: CandidateAssessment) -> Optional[datetime]:
    if settings.INVITATION_EXPIRY_DAYS <= 0 or candidate_assessment.invited_at is None:
        return None
    return ensure_utc(candidate_assessment.invited_at) + timedelta(days=settings.INVITATION_EXPIRY_DAYS)


def time_limit_deadline(candidate_assessment: CandidateAssessment) -> Optional[datetime]:
    assessment = candidate_assessment.assessment
    minutes = assessment.time_limit_minutes if assessment is not None else None
    if not minutes or candidate_assessment.started_at is None:
        return None
    return ensure_utc(candidate_assessment.started_at) + timedelta(minutes=minutes)


def is_invitation_stale(candidate_assessment: CandidateAssessment, now: datetime | None = None) -> bool:
    deadline = invitation_deadline(candidate_assessment)
    return deadline is not None and (now or utcnow()) > deadline


def is_time_limit_exceeded(candidate_assessment: CandidateAssessment, now: datetime | None = None) -> bool:
    if not settings.ENFORCE_TIME_LIMITS:
        return False
    deadline = time_limit_deadline(candidate_assessment)
    return deadline is not None and (now or utcnow()) > deadline


def time_remaining_seconds(candidate_assessment: CandidateAssessment, now: datetime | None = None) -> Optional[int]:
    """Seconds left on the clock while in progress; ``None`` for untimed or inactive attempts."""
    if candidate_assessment.status != CandidateAssessmentStatus.IN_PROGRESS:
        return None
    deadline = time_limit_deadline(candidate_assessment)
    if deadline is None:
        return None
    return max(0, int((deadline - (now or utcnow())).total_seconds()))


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def _load_locked(db: Session, candidate_assessment_id: int) -> CandidateAssessment:
    candidate_assessment = find_candidate_assessment(db, candidate_assessment_id, for_update=True)
    if candidate_assessment is None:
        db.rollback()
        raise NotFoundError(f"Candidate assessment with id {candidate_assessment_id} not found")
    return candidate_assessment


def _reject(db: Session, error: Exception, candidate_assessment: CandidateAssessment, event: str) -> NoReturn:
    logger.warning(
        "Rejected %s candidate_assessment_id=%s status=%s: %s",
        event,
        candidate_assessment.id,
        candidate_assessment.status.value,
        error,
    )
    db.rollback()
    raise error


def _commit(db: Session, candidate_assessment: CandidateAssessment) -> CandidateAssessment:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(candidate_assessment)
    return candidate_assessment


def start(db: Session, candidate_assessment_id: int, *, now: datetime | None = None) -> CandidateAssessment:
    """invited -> in_progress. A stale invitation is expired instead and the call fails."""
    now = now or utcnow()
    candidate_assessment = _load_locked(db, candidate_assessment_id)

    if candidate_assessment.status != CandidateAssessmentStatus.INVITED:
        _reject(
            db,
            InvalidTransitionError(
                f"Cannot start an assessment that is {candidate_assessment.status.value}"
            ),
            candidate_assessment,
            "start",
        )

    if is_invitation_stale(candidate_assessment, now):
        candidate_assessment.status = CandidateAssessmentStatus.EXPIRED
        _commit(db, candidate_assessment)
        logger.info("Invitation expired on start candidate_assessment_id=%s", candidate_assessment.id)
        raise InvitationExpiredError("Invitation has expired")

    candidate_assessment.status = CandidateAssessmentStatus.IN_PROGRESS
    candidate_assessment.started_at = now
    _commit(db, candidate_assessment)
    logger.info("Assessment started candidate_assessment_id=%s", candidate_assessment.id)
    return candidate_assessment


def _finalize(db: Session, candidate_assessment: CandidateAssessment, *, now: datetime | None = None) -> CandidateAssessment:
    """Score and close an in-progress candidate assessment the caller already holds locked.

    ``total_points`` is carried through untouched.
    """
    candidate_assessment.score = aggregate(db, candidate_assessment.id)
    candidate_assessment.completed_at = now or utcnow()
    candidate_assessment.status = CandidateAssessmentStatus.COMPLETED
    _commit(db, candidate_assessment)
    logger.info(
        "Assessment completed candidate_assessment_id=%s score=%s total_points=%s",
        candidate_assessment.id,
        candidate_assessment.score,
        candidate_assessment.total_points,
    )
    return candidate_assessment


def complete(db: Session, candidate_assessment_id: int, *, now: datetime | None = None) -> CandidateAssessment:
    """in_progress -> completed, writing the aggregated score."""
    candidate_assessment = _load_locked(db, candidate_assessment_id)

    if candidate_assessment.status == CandidateAssessmentStatus.COMPLETED:
        _reject(db, AlreadyCompletedError("Assessment already completed"), candidate_assessment, "complete")
    if candidate_assessment.status != CandidateAssessmentStatus.IN_PROGRESS:
        _reject(
            db,
            InvalidTransitionError(
                f"Cannot complete an assessment that is {candidate_assessment.status.value}"
            ),
            candidate_assessment,
            "complete",
        )

    return _finalize(db, candidate_assessment, now=now)


def expire(db: Session, candidate_assessment_id: int) -> CandidateAssessment:
    """invited | in_progress -> expired. Answers already given are kept but never scored."""
    candidate_assessment = _load_locked(db, candidate_assessment_id)

    if candidate_assessment.status in TERMINAL_STATUSES:
        _reject(
            db,
            InvalidTransitionError(
                f"Cannot expire an assessment that is {candidate_assessment.status.value}"
            ),
            candidate_assessment,
            "expire",
        )

    candidate_assessment.status = CandidateAssessmentStatus.EXPIRED
    _commit(db, candidate_assessment)
    logger.info("Assessment expired candidate_assessment_id=%s", candidate_assessment.id)
    return candidate_assessment


def expire_stale_invitations(db: Session, *, now: datetime | None = None, dry_run: bool = False) -> List[int]:
    """Expire every invitation never started within ``INVITATION_EXPIRY_DAYS``. Returns affected ids."""
    if settings.INVITATION_EXPIRY_DAYS <= 0:
        return []
    now = now or utcnow()
    cutoff = now - timedelta(days=settings.INVITATION_EXPIRY_DAYS)
    stale = list_stale_invitations(db, cutoff)
    expired_ids = [candidate_assessment.id for candidate_assessment in stale]
    if dry_run or not stale:
        return expired_ids
    for candidate_assessment in stale:
        candidate_assessment.status = CandidateAssessmentStatus.EXPIRED
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Expired %d stale invitations", len(expired_ids))
    return expired_ids
