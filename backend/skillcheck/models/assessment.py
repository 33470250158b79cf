from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..platform.database import Base
from ..shared.utils import enum_values
import enum


class AssessmentStatus(str, enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class Assessment(Base):
    __tablename__ = "assessments"
    __table_args__ = (
        CheckConstraint("time_limit_minutes IS NULL OR time_limit_minutes > 0", name="ck_assessments_time_limit_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(
        Enum(AssessmentStatus, name="assessment_status", values_callable=enum_values),
        nullable=False,
        default=AssessmentStatus.DRAFT,
    )
    time_limit_minutes = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    company = relationship("Company", back_populates="assessments")
    author = relationship("User")
    question_links = relationship(
        "AssessmentQuestion",
        back_populates="assessment",
        order_by="AssessmentQuestion.order_index",
    )
    candidate_assessments = relationship("CandidateAssessment", back_populates="assessment")
