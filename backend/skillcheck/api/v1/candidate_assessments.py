"""Candidate-facing lifecycle routes: invite, start, answer, complete, expire."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...components.assessments.errors import NotFoundError
from ...components.assessments.invitations import invite_candidate
from ...components.assessments.service import (
    candidate_assessment_payload,
    complete_assessment,
    expire_assessment,
    get_candidate_answers,
    get_candidate_result,
    start_assessment,
    submit_answer,
)
from ...platform.database import get_db
from ...schemas.candidate_assessment import (
    CandidateAnswerResponse,
    CandidateAssessmentResponse,
    InviteCandidateRequest,
    SubmitAnswerRequest,
)

router = APIRouter(prefix="/candidate-assessments", tags=["Candidate Assessments"])


@router.post("/", response_model=CandidateAssessmentResponse, status_code=status.HTTP_201_CREATED)
def invite(data: InviteCandidateRequest, db: Session = Depends(get_db)):
    return candidate_assessment_payload(invite_candidate(db, data.candidate_id, data.assessment_id))


@router.get("/{candidate_assessment_id}", response_model=CandidateAssessmentResponse)
def get_result(candidate_assessment_id: int, db: Session = Depends(get_db)):
    candidate_assessment = get_candidate_result(db, candidate_assessment_id)
    if candidate_assessment is None:
        raise NotFoundError(f"Candidate assessment with id {candidate_assessment_id} not found")
    return candidate_assessment_payload(candidate_assessment)


@router.post("/{candidate_assessment_id}/start", response_model=CandidateAssessmentResponse)
def start(candidate_assessment_id: int, db: Session = Depends(get_db)):
    return candidate_assessment_payload(start_assessment(db, candidate_assessment_id))


@router.post(
    "/{candidate_assessment_id}/answers",
    response_model=CandidateAnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
def answer(candidate_assessment_id: int, data: SubmitAnswerRequest, db: Session = Depends(get_db)):
    return submit_answer(db, candidate_assessment_id, data.question_id, data.answer)


@router.get("/{candidate_assessment_id}/answers", response_model=List[CandidateAnswerResponse])
def list_answers(candidate_assessment_id: int, db: Session = Depends(get_db)):
    return get_candidate_answers(db, candidate_assessment_id)


@router.post("/{candidate_assessment_id}/complete", response_model=CandidateAssessmentResponse)
def complete(candidate_assessment_id: int, db: Session = Depends(get_db)):
    return candidate_assessment_payload(complete_assessment(db, candidate_assessment_id))


@router.post("/{candidate_assessment_id}/expire", response_model=CandidateAssessmentResponse)
def expire(candidate_assessment_id: int, db: Session = Depends(get_db)):
    return candidate_assessment_payload(expire_assessment(db, candidate_assessment_id))
