from .company import Company
from .user import User, UserType
from .question import Question, QuestionType
from .assessment import Assessment, AssessmentStatus
from .assessment_question import AssessmentQuestion
from .candidate_assessment import CandidateAssessment, CandidateAssessmentStatus, TERMINAL_STATUSES
from .candidate_answer import CandidateAnswer

__all__ = [
    "Company",
    "User",
    "UserType",
    "Question",
    "QuestionType",
    "Assessment",
    "AssessmentStatus",
    "AssessmentQuestion",
    "CandidateAssessment",
    "CandidateAssessmentStatus",
    "TERMINAL_STATUSES",
    "CandidateAnswer",
]
