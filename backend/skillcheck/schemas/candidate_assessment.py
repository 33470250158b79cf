from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional
from pydantic import BaseModel, Field

from ..models.candidate_assessment import CandidateAssessmentStatus


class InviteCandidateRequest(BaseModel):
    candidate_id: int = Field(gt=0)
    assessment_id: int = Field(gt=0)


class SubmitAnswerRequest(BaseModel):
    question_id: int = Field(gt=0)
    answer: str


class CandidateAssessmentResponse(BaseModel):
    id: int
    candidate_id: int
    assessment_id: int
    status: CandidateAssessmentStatus
    invited_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    # Decimal so the two-place score serializes as an exact string ("15.00")
    score: Optional[Decimal] = None
    total_points: Optional[int] = None
    # Only set while in progress on a timed assessment
    time_remaining_seconds: Optional[int] = None

    model_config = {"from_attributes": True}


class CandidateResultResponse(CandidateAssessmentResponse):
    # For results table display (from joined candidate)
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None


class CandidateAnswerResponse(BaseModel):
    id: int
    candidate_assessment_id: int
    question_id: int
    answer: str
    is_correct: Optional[bool] = None
    points_earned: Optional[Decimal] = None
    answered_at: datetime

    model_config = {"from_attributes": True}


class ResultsSummaryResponse(BaseModel):
    assessment_id: int
    total_invited: int
    status_counts: Dict[str, int]
    average_score: Optional[Decimal] = None
    max_score: Optional[Decimal] = None
