from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Text, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..platform.database import Base
from ..shared.utils import enum_values
import enum


class QuestionType(str, enum.Enum):
    MULTIPLE_CHOICE = "multiple_choice"    # single-select from options
    CODING_CHALLENGE = "coding_challenge"  # open-ended code, never auto-graded
    FREE_TEXT = "free_text"


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    question_type = Column(Enum(QuestionType, name="question_type", values_callable=enum_values), nullable=False)
    options = Column(JSON, nullable=True)          # ordered list of option labels
    correct_answer = Column(Text, nullable=True)   # null => answers are stored ungraded
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    company = relationship("Company", back_populates="questions")
    author = relationship("User")
    assessment_links = relationship("AssessmentQuestion", back_populates="question")
