from .company import CompanyCreate, CompanyResponse
from .user import UserCreate, UserResponse
from .question import QuestionCreate, QuestionResponse
from .assessment import (
    AssessmentCreate,
    AssessmentDetailResponse,
    AssessmentQuestionCreate,
    AssessmentQuestionResponse,
    AssessmentResponse,
    AssessmentStatusUpdate,
)
from .candidate_assessment import (
    CandidateAnswerResponse,
    CandidateAssessmentResponse,
    CandidateResultResponse,
    InviteCandidateRequest,
    ResultsSummaryResponse,
    SubmitAnswerRequest,
)

__all__ = [
    "CompanyCreate",
    "CompanyResponse",
    "UserCreate",
    "UserResponse",
    "QuestionCreate",
    "QuestionResponse",
    "AssessmentCreate",
    "AssessmentDetailResponse",
    "AssessmentQuestionCreate",
    "AssessmentQuestionResponse",
    "AssessmentResponse",
    "AssessmentStatusUpdate",
    "CandidateAnswerResponse",
    "CandidateAssessmentResponse",
    "CandidateResultResponse",
    "InviteCandidateRequest",
    "ResultsSummaryResponse",
    "SubmitAnswerRequest",
]
