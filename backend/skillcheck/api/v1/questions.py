from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...components.assessments.errors import NotFoundError
from ...platform.database import get_db
from ...models.company import Company
from ...models.question import Question
from ...models.user import User
from ...schemas.question import QuestionCreate, QuestionResponse

router = APIRouter(prefix="/questions", tags=["Questions"])


@router.post("/", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question(data: QuestionCreate, db: Session = Depends(get_db)):
    if not db.query(Company).filter(Company.id == data.company_id).first():
        raise NotFoundError("Company not found")
    if not db.query(User).filter(User.id == data.created_by).first():
        raise NotFoundError("User not found")
    question = Question(
        title=data.title,
        description=data.description,
        question_type=data.question_type,
        options=data.options,
        correct_answer=data.correct_answer,
        company_id=data.company_id,
        created_by=data.created_by,
    )
    db.add(question)
    try:
        db.commit()
        db.refresh(question)
    except Exception:
        db.rollback()
        raise
    return question


@router.get("/", response_model=List[QuestionResponse])
def list_questions(
    company_id: int = Query(...),
    db: Session = Depends(get_db),
):
    return (
        db.query(Question)
        .filter(Question.company_id == company_id)
        .order_by(Question.id)
        .all()
    )
