import pytest

from skillcheck.components.assessments.errors import (
    AlreadyInvitedError,
    ConflictError,
    NotFoundError,
    RoleMismatchError,
)
from skillcheck.components.assessments.invitations import invite_candidate
from skillcheck.models.candidate_assessment import CandidateAssessment, CandidateAssessmentStatus
from skillcheck.models.user import UserType
from tests.conftest import make_assessment, make_user, setup_assessment


def _count(db, candidate_id, assessment_id):
    return (
        db.query(CandidateAssessment)
        .filter(
            CandidateAssessment.candidate_id == candidate_id,
            CandidateAssessment.assessment_id == assessment_id,
        )
        .count()
    )


class TestInviteCandidate:

    def test_creates_invited_candidate_assessment(self, db):
        env = setup_assessment(db, points=(10, 5))
        candidate_assessment = invite_candidate(db, env["candidate"].id, env["assessment"].id)

        assert candidate_assessment.id is not None
        assert candidate_assessment.status == CandidateAssessmentStatus.INVITED
        assert candidate_assessment.invited_at is not None
        assert candidate_assessment.started_at is None
        assert candidate_assessment.completed_at is None
        assert candidate_assessment.score is None

    def test_total_points_snapshot(self, db):
        env = setup_assessment(db, points=(10, 5, 0))
        candidate_assessment = invite_candidate(db, env["candidate"].id, env["assessment"].id)
        assert candidate_assessment.total_points == 15

    def test_assessment_without_questions_has_zero_total(self, db):
        env = setup_assessment(db, points=())
        candidate_assessment = invite_candidate(db, env["candidate"].id, env["assessment"].id)
        assert candidate_assessment.total_points == 0

    def test_second_invite_is_rejected(self, db):
        env = setup_assessment(db)
        invite_candidate(db, env["candidate"].id, env["assessment"].id)

        with pytest.raises(AlreadyInvitedError) as exc_info:
            invite_candidate(db, env["candidate"].id, env["assessment"].id)

        assert isinstance(exc_info.value, ConflictError)
        assert _count(db, env["candidate"].id, env["assessment"].id) == 1

    def test_same_candidate_different_assessment(self, db):
        env = setup_assessment(db)
        other = make_assessment(db, env["company"], env["recruiter"], title="Second Round")

        invite_candidate(db, env["candidate"].id, env["assessment"].id)
        second = invite_candidate(db, env["candidate"].id, other.id)

        assert second.assessment_id == other.id
        assert _count(db, env["candidate"].id, other.id) == 1

    @pytest.mark.parametrize("user_type", [UserType.COMPANY_RECRUITER, UserType.ADMINISTRATOR])
    def test_non_candidate_is_rejected(self, db, user_type):
        env = setup_assessment(db)
        staff = make_user(db, user_type=user_type, company=env["company"])

        with pytest.raises(RoleMismatchError):
            invite_candidate(db, staff.id, env["assessment"].id)

        assert _count(db, staff.id, env["assessment"].id) == 0

    def test_unknown_candidate(self, db):
        env = setup_assessment(db)
        with pytest.raises(NotFoundError):
            invite_candidate(db, 99999, env["assessment"].id)

    def test_unknown_assessment(self, db):
        env = setup_assessment(db)
        with pytest.raises(NotFoundError):
            invite_candidate(db, env["candidate"].id, 99999)
        assert db.query(CandidateAssessment).count() == 0
