from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from ..models.assessment import AssessmentStatus
from .question import QuestionResponse


class AssessmentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: Optional[str] = None
    company_id: int = Field(gt=0)
    created_by: int = Field(gt=0)
    time_limit_minutes: Optional[int] = Field(default=None, gt=0)


class AssessmentStatusUpdate(BaseModel):
    status: AssessmentStatus


class AssessmentQuestionCreate(BaseModel):
    question_id: int = Field(gt=0)
    order_index: int
    points: int = Field(default=1, ge=0)


class AssessmentQuestionResponse(BaseModel):
    id: int
    assessment_id: int
    question_id: int
    order_index: int
    points: int

    model_config = {"from_attributes": True}


class AssessmentQuestionDetail(AssessmentQuestionResponse):
    question: QuestionResponse


class AssessmentResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    company_id: int
    created_by: int
    status: AssessmentStatus
    time_limit_minutes: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssessmentDetailResponse(AssessmentResponse):
    questions: List[AssessmentQuestionDetail] = Field(default_factory=list)
    total_points: int = 0
