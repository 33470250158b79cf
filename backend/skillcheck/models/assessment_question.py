from sqlalchemy import Column, Integer, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from ..platform.database import Base


class AssessmentQuestion(Base):
    """Places a question in an assessment with its display position and point value."""

    __tablename__ = "assessment_questions"
    __table_args__ = (
        UniqueConstraint("assessment_id", "question_id", name="uq_assessment_questions_assessment_question"),
        CheckConstraint("points >= 0", name="ck_assessment_questions_points_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    # Gaps are allowed; only relative order matters.
    order_index = Column(Integer, nullable=False)
    points = Column(Integer, nullable=False, default=1)

    assessment = relationship("Assessment", back_populates="question_links")
    question = relationship("Question", back_populates="assessment_links")
