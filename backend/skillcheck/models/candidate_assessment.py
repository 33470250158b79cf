from sqlalchemy import Column, Integer, DateTime, ForeignKey, Numeric, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..platform.database import Base
from ..shared.utils import enum_values
import enum


class CandidateAssessmentStatus(str, enum.Enum):
    INVITED = "invited"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    EXPIRED = "expired"


TERMINAL_STATUSES = frozenset({CandidateAssessmentStatus.COMPLETED, CandidateAssessmentStatus.EXPIRED})


class CandidateAssessment(Base):
    __tablename__ = "candidate_assessments"
    __table_args__ = (
        UniqueConstraint("candidate_id", "assessment_id", name="uq_candidate_assessments_candidate_assessment"),
    )

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id"), nullable=False, index=True)
    status = Column(
        Enum(CandidateAssessmentStatus, name="candidate_assessment_status", values_callable=enum_values),
        nullable=False,
        default=CandidateAssessmentStatus.INVITED,
    )
    invited_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    score = Column(Numeric(10, 2), nullable=True)
    total_points = Column(Integer, nullable=True)

    candidate = relationship("User", back_populates="candidate_assessments")
    assessment = relationship("Assessment", back_populates="candidate_assessments")
    answers = relationship("CandidateAnswer", back_populates="candidate_assessment", order_by="CandidateAnswer.id")
