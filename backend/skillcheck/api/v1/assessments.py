"""Assessment API routes: thin handlers that delegate to the service layer."""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from ...components.assessments.errors import NotFoundError
from ...components.assessments.service import (
    add_question_to_assessment,
    candidate_assessment_payload,
    get_assessment_results,
    get_results_summary,
)
from ...platform.database import get_db
from ...models.assessment import Assessment
from ...models.assessment_question import AssessmentQuestion
from ...models.company import Company
from ...models.user import User
from ...schemas.assessment import (
    AssessmentCreate,
    AssessmentDetailResponse,
    AssessmentQuestionCreate,
    AssessmentQuestionDetail,
    AssessmentQuestionResponse,
    AssessmentResponse,
    AssessmentStatusUpdate,
)
from ...schemas.candidate_assessment import CandidateResultResponse, ResultsSummaryResponse
from ...shared.utils import utcnow

router = APIRouter(prefix="/assessments", tags=["Assessments"])


def _get_assessment_or_404(db: Session, assessment_id: int) -> Assessment:
    assessment = db.query(Assessment).filter(Assessment.id == assessment_id).first()
    if not assessment:
        raise NotFoundError("Assessment not found")
    return assessment


@router.post("/", response_model=AssessmentResponse, status_code=status.HTTP_201_CREATED)
def create_assessment(data: AssessmentCreate, db: Session = Depends(get_db)):
    """Create a draft assessment owned by a company."""
    if not db.query(Company).filter(Company.id == data.company_id).first():
        raise NotFoundError("Company not found")
    if not db.query(User).filter(User.id == data.created_by).first():
        raise NotFoundError("User not found")
    assessment = Assessment(
        title=data.title,
        description=data.description or None,
        company_id=data.company_id,
        created_by=data.created_by,
        time_limit_minutes=data.time_limit_minutes,
    )
    db.add(assessment)
    try:
        db.commit()
        db.refresh(assessment)
    except Exception:
        db.rollback()
        raise
    return assessment


@router.get("/", response_model=List[AssessmentResponse])
def list_assessments(
    company_id: int = Query(...),
    db: Session = Depends(get_db),
):
    return (
        db.query(Assessment)
        .filter(Assessment.company_id == company_id)
        .order_by(Assessment.created_at.desc(), Assessment.id.desc())
        .all()
    )


@router.get("/{assessment_id}", response_model=AssessmentDetailResponse)
def get_assessment(assessment_id: int, db: Session = Depends(get_db)):
    """Assessment with its questions in display order."""
    assessment = _get_assessment_or_404(db, assessment_id)
    links = (
        db.query(AssessmentQuestion)
        .options(joinedload(AssessmentQuestion.question))
        .filter(AssessmentQuestion.assessment_id == assessment_id)
        .order_by(AssessmentQuestion.order_index, AssessmentQuestion.id)
        .all()
    )
    return AssessmentDetailResponse(
        **AssessmentResponse.model_validate(assessment).model_dump(),
        questions=[AssessmentQuestionDetail.model_validate(link) for link in links],
        total_points=sum(link.points for link in links),
    )


@router.patch("/{assessment_id}/status", response_model=AssessmentResponse)
def update_assessment_status(
    assessment_id: int,
    data: AssessmentStatusUpdate,
    db: Session = Depends(get_db),
):
    assessment = _get_assessment_or_404(db, assessment_id)
    assessment.status = data.status
    assessment.updated_at = utcnow()
    try:
        db.commit()
        db.refresh(assessment)
    except Exception:
        db.rollback()
        raise
    return assessment


@router.post(
    "/{assessment_id}/questions",
    response_model=AssessmentQuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_question(
    assessment_id: int,
    data: AssessmentQuestionCreate,
    db: Session = Depends(get_db),
):
    return add_question_to_assessment(
        db,
        assessment_id=assessment_id,
        question_id=data.question_id,
        order_index=data.order_index,
        points=data.points,
    )


@router.get("/{assessment_id}/results", response_model=List[CandidateResultResponse])
def list_results(assessment_id: int, db: Session = Depends(get_db)):
    """Every candidate assessment for this assessment, with candidate name and email."""
    return [candidate_assessment_payload(ca) for ca in get_assessment_results(db, assessment_id)]


@router.get("/{assessment_id}/results/summary", response_model=ResultsSummaryResponse)
def results_summary(assessment_id: int, db: Session = Depends(get_db)):
    return get_results_summary(db, assessment_id)
