from datetime import timedelta
from decimal import Decimal

import pytest

from skillcheck.components.assessments import lifecycle
from skillcheck.components.assessments.errors import (
    AlreadyCompletedError,
    InvalidTransitionError,
    InvitationExpiredError,
    NotFoundError,
)
from skillcheck.components.assessments.invitations import invite_candidate
from skillcheck.components.assessments.service import submit_answer
from skillcheck.models.candidate_assessment import CandidateAssessmentStatus
from skillcheck.platform.config import settings
from skillcheck.shared.utils import ensure_utc, utcnow
from tests.conftest import make_user, setup_assessment


def _invited(db, points=(10,), time_limit_minutes=None):
    env = setup_assessment(db, points=points, time_limit_minutes=time_limit_minutes)
    env["candidate_assessment"] = invite_candidate(db, env["candidate"].id, env["assessment"].id)
    return env


# ---------------------------------------------------------------------------
# start
# ---------------------------------------------------------------------------

class TestStart:

    def test_start_sets_in_progress_and_timestamp(self, db):
        env = _invited(db)
        before = utcnow()
        candidate_assessment = lifecycle.start(db, env["candidate_assessment"].id)

        assert candidate_assessment.status == CandidateAssessmentStatus.IN_PROGRESS
        assert ensure_utc(candidate_assessment.started_at) >= before.replace(microsecond=0)
        assert candidate_assessment.completed_at is None

    def test_start_twice_is_rejected(self, db):
        env = _invited(db)
        lifecycle.start(db, env["candidate_assessment"].id)

        with pytest.raises(InvalidTransitionError):
            lifecycle.start(db, env["candidate_assessment"].id)

        db.expire_all()
        assert env["candidate_assessment"].status == CandidateAssessmentStatus.IN_PROGRESS

    def test_start_after_complete_is_rejected(self, db):
        env = _invited(db)
        lifecycle.start(db, env["candidate_assessment"].id)
        lifecycle.complete(db, env["candidate_assessment"].id)

        with pytest.raises(InvalidTransitionError):
            lifecycle.start(db, env["candidate_assessment"].id)

    def test_start_unknown(self, db):
        with pytest.raises(NotFoundError):
            lifecycle.start(db, 424242)

    def test_stale_invitation_expires_on_start(self, db, monkeypatch):
        monkeypatch.setattr(settings, "INVITATION_EXPIRY_DAYS", 7)
        env = _invited(db)
        later = utcnow() + timedelta(days=8)

        with pytest.raises(InvitationExpiredError):
            lifecycle.start(db, env["candidate_assessment"].id, now=later)

        db.expire_all()
        assert env["candidate_assessment"].status == CandidateAssessmentStatus.EXPIRED
        assert env["candidate_assessment"].started_at is None

    def test_expiry_disabled(self, db, monkeypatch):
        monkeypatch.setattr(settings, "INVITATION_EXPIRY_DAYS", 0)
        env = _invited(db)
        later = utcnow() + timedelta(days=365)

        candidate_assessment = lifecycle.start(db, env["candidate_assessment"].id, now=later)
        assert candidate_assessment.status == CandidateAssessmentStatus.IN_PROGRESS


# ---------------------------------------------------------------------------
# complete
# ---------------------------------------------------------------------------

class TestComplete:

    def test_complete_writes_score_and_keeps_total_points(self, db):
        env = _invited(db, points=(10, 5))
        candidate_assessment_id = env["candidate_assessment"].id
        lifecycle.start(db, candidate_assessment_id)
        submit_answer(db, candidate_assessment_id, env["questions"][0].id, "4")
        submit_answer(db, candidate_assessment_id, env["questions"][1].id, "wrong")

        candidate_assessment = lifecycle.complete(db, candidate_assessment_id)

        assert candidate_assessment.status == CandidateAssessmentStatus.COMPLETED
        assert candidate_assessment.score == Decimal("10.00")
        assert candidate_assessment.total_points == 15
        assert candidate_assessment.completed_at is not None
        assert ensure_utc(candidate_assessment.completed_at) >= ensure_utc(candidate_assessment.started_at)

    def test_complete_without_answers_scores_zero(self, db):
        env = _invited(db)
        lifecycle.start(db, env["candidate_assessment"].id)
        candidate_assessment = lifecycle.complete(db, env["candidate_assessment"].id)
        assert candidate_assessment.score == Decimal("0.00")

    def test_complete_twice_is_rejected_and_unchanged(self, db):
        env = _invited(db)
        candidate_assessment_id = env["candidate_assessment"].id
        lifecycle.start(db, candidate_assessment_id)
        submit_answer(db, candidate_assessment_id, env["questions"][0].id, "4")
        first = lifecycle.complete(db, candidate_assessment_id)
        score, completed_at = first.score, first.completed_at

        with pytest.raises(AlreadyCompletedError):
            lifecycle.complete(db, candidate_assessment_id)

        db.expire_all()
        again = env["candidate_assessment"]
        assert again.score == score
        assert again.completed_at == completed_at

    def test_complete_before_start_is_rejected(self, db):
        env = _invited(db)
        with pytest.raises(InvalidTransitionError) as exc_info:
            lifecycle.complete(db, env["candidate_assessment"].id)
        assert not isinstance(exc_info.value, AlreadyCompletedError)

    def test_complete_expired_is_rejected(self, db):
        env = _invited(db)
        lifecycle.expire(db, env["candidate_assessment"].id)
        with pytest.raises(InvalidTransitionError):
            lifecycle.complete(db, env["candidate_assessment"].id)


# ---------------------------------------------------------------------------
# expire
# ---------------------------------------------------------------------------

class TestExpire:

    def test_expire_from_invited(self, db):
        env = _invited(db)
        candidate_assessment = lifecycle.expire(db, env["candidate_assessment"].id)
        assert candidate_assessment.status == CandidateAssessmentStatus.EXPIRED

    def test_expire_from_in_progress_keeps_score_empty(self, db):
        env = _invited(db)
        lifecycle.start(db, env["candidate_assessment"].id)
        submit_answer(db, env["candidate_assessment"].id, env["questions"][0].id, "4")

        candidate_assessment = lifecycle.expire(db, env["candidate_assessment"].id)
        assert candidate_assessment.status == CandidateAssessmentStatus.EXPIRED
        assert candidate_assessment.score is None

    def test_expire_completed_is_rejected(self, db):
        env = _invited(db)
        lifecycle.start(db, env["candidate_assessment"].id)
        lifecycle.complete(db, env["candidate_assessment"].id)

        with pytest.raises(InvalidTransitionError):
            lifecycle.expire(db, env["candidate_assessment"].id)

    def test_expire_twice_is_rejected(self, db):
        env = _invited(db)
        lifecycle.expire(db, env["candidate_assessment"].id)
        with pytest.raises(InvalidTransitionError):
            lifecycle.expire(db, env["candidate_assessment"].id)


# ---------------------------------------------------------------------------
# Stale invitation sweep
# ---------------------------------------------------------------------------

class TestExpireStaleInvitations:

    def test_only_old_invited_rows_are_expired(self, db, monkeypatch):
        monkeypatch.setattr(settings, "INVITATION_EXPIRY_DAYS", 7)
        env = _invited(db)
        stale = env["candidate_assessment"]
        started = invite_candidate(db, make_user(db).id, env["assessment"].id)
        lifecycle.start(db, started.id)

        expired_ids = lifecycle.expire_stale_invitations(db, now=utcnow() + timedelta(days=10))

        assert expired_ids == [stale.id]
        db.expire_all()
        assert stale.status == CandidateAssessmentStatus.EXPIRED
        assert started.status == CandidateAssessmentStatus.IN_PROGRESS

    def test_recent_invitations_are_left_alone(self, db, monkeypatch):
        monkeypatch.setattr(settings, "INVITATION_EXPIRY_DAYS", 7)
        env = _invited(db)

        assert lifecycle.expire_stale_invitations(db, now=utcnow() + timedelta(days=1)) == []
        db.expire_all()
        assert env["candidate_assessment"].status == CandidateAssessmentStatus.INVITED

    def test_dry_run_changes_nothing(self, db, monkeypatch):
        monkeypatch.setattr(settings, "INVITATION_EXPIRY_DAYS", 7)
        env = _invited(db)

        ids = lifecycle.expire_stale_invitations(db, now=utcnow() + timedelta(days=10), dry_run=True)

        assert ids == [env["candidate_assessment"].id]
        db.expire_all()
        assert env["candidate_assessment"].status == CandidateAssessmentStatus.INVITED
