from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...components.assessments.errors import ConflictError, NotFoundError
from ...components.assessments.service import candidate_assessment_payload, get_candidate_assessments
from ...platform.database import get_db
from ...models.company import Company
from ...models.user import User
from ...schemas.candidate_assessment import CandidateAssessmentResponse
from ...schemas.user import UserCreate, UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    email = data.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("A user with this email already exists")
    if data.company_id is not None and not db.query(Company).filter(Company.id == data.company_id).first():
        raise NotFoundError("Company not found")
    user = User(
        email=email,
        first_name=data.first_name,
        last_name=data.last_name,
        user_type=data.user_type,
        company_id=data.company_id,
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise
    return user


@router.get("/", response_model=List[UserResponse])
def list_users(
    company_id: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    query = db.query(User)
    if company_id is not None:
        query = query.filter(User.company_id == company_id)
    return query.order_by(User.id).all()


@router.get("/{user_id}/candidate-assessments", response_model=List[CandidateAssessmentResponse])
def list_user_candidate_assessments(user_id: int, db: Session = Depends(get_db)):
    """Every assessment a candidate has been invited to, newest invitation first."""
    return [candidate_assessment_payload(ca) for ca in get_candidate_assessments(db, user_id)]
