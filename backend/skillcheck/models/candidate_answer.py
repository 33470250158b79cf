from sqlalchemy import Column, Integer, DateTime, ForeignKey, Numeric, Text, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..platform.database import Base


class CandidateAnswer(Base):
    __tablename__ = "candidate_answers"
    __table_args__ = (
        UniqueConstraint(
            "candidate_assessment_id", "question_id", name="uq_candidate_answers_candidate_assessment_question"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    candidate_assessment_id = Column(Integer, ForeignKey("candidate_assessments.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    answer = Column(Text, nullable=False)
    # Both null when the question has no canonical answer.
    is_correct = Column(Boolean, nullable=True)
    points_earned = Column(Numeric(10, 2), nullable=True)
    answered_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    candidate_assessment = relationship("CandidateAssessment", back_populates="answers")
    question = relationship("Question")
