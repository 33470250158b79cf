from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...components.assessments.errors import NotFoundError
from ...platform.database import get_db
from ...models.company import Company
from ...schemas.company import CompanyCreate, CompanyResponse

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(data: CompanyCreate, db: Session = Depends(get_db)):
    company = Company(name=data.name, domain=data.domain or None)
    db.add(company)
    try:
        db.commit()
        db.refresh(company)
    except Exception:
        db.rollback()
        raise
    return company


@router.get("/", response_model=List[CompanyResponse])
def list_companies(db: Session = Depends(get_db)):
    return db.query(Company).order_by(Company.id).all()


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(company_id: int, db: Session = Depends(get_db)):
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise NotFoundError("Company not found")
    return company
