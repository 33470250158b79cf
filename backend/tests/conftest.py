import os
# Override DATABASE_URL before any app imports to avoid PostgreSQL driver requirement
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.pop("DATABASE_PUBLIC_URL", None)
os.environ["DEPLOYMENT_ENV"] = "test"

import uuid
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from skillcheck.platform.database import Base, get_db
from skillcheck.main import app
from skillcheck.models.assessment import Assessment
from skillcheck.models.assessment_question import AssessmentQuestion
from skillcheck.models.company import Company
from skillcheck.models.question import Question, QuestionType
from skillcheck.models.user import User, UserType

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Enable foreign key support for SQLite
@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


# ---------------------------------------------------------------------------
# Factory helpers (DB): build entities directly for component tests
# ---------------------------------------------------------------------------

_counter = 0

def _unique_id() -> str:
    global _counter
    _counter += 1
    return f"{_counter}-{uuid.uuid4().hex[:8]}"


def make_company(db, name="Acme Corp"):
    company = Company(name=name)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def make_user(db, user_type=UserType.CANDIDATE, company=None, email=None, first_name="Test", last_name="User"):
    user = User(
        email=email or f"user-{_unique_id()}@test.com",
        first_name=first_name,
        last_name=last_name,
        user_type=user_type,
        company_id=company.id if company is not None else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_question(db, company, author, correct_answer="4", question_type=QuestionType.FREE_TEXT, options=None, title=None):
    question = Question(
        title=title or f"Question {_unique_id()}",
        description="What is 2 + 2?",
        question_type=question_type,
        options=options,
        correct_answer=correct_answer,
        company_id=company.id,
        created_by=author.id,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return question


def make_assessment(db, company, author, title="Backend Screening", time_limit_minutes=None):
    assessment = Assessment(
        title=title,
        company_id=company.id,
        created_by=author.id,
        time_limit_minutes=time_limit_minutes,
    )
    db.add(assessment)
    db.commit()
    db.refresh(assessment)
    return assessment


def link_question(db, assessment, question, order_index=0, points=1):
    link = AssessmentQuestion(
        assessment_id=assessment.id,
        question_id=question.id,
        order_index=order_index,
        points=points,
    )
    db.add(link)
    db.commit()
    db.refresh(link)
    return link


def setup_assessment(db, points=(10,), time_limit_minutes=None):
    """Company, recruiter, candidate and an assessment with one "4"-answer question per point value.

    Returns a dict with every entity created.
    """
    company = make_company(db)
    recruiter = make_user(db, user_type=UserType.COMPANY_RECRUITER, company=company)
    candidate = make_user(db, user_type=UserType.CANDIDATE)
    assessment = make_assessment(db, company, recruiter, time_limit_minutes=time_limit_minutes)
    questions = []
    for index, value in enumerate(points):
        question = make_question(db, company, recruiter)
        link_question(db, assessment, question, order_index=index, points=value)
        questions.append(question)
    return {
        "company": company,
        "recruiter": recruiter,
        "candidate": candidate,
        "assessment": assessment,
        "questions": questions,
    }


# ---------------------------------------------------------------------------
# Factory helpers (API): create test entities through the HTTP surface
# ---------------------------------------------------------------------------

def create_company_via_api(client, **overrides):
    payload = {"name": overrides.get("name", f"Company-{_unique_id()}")}
    payload.update({k: v for k, v in overrides.items() if k not in payload})
    return client.post("/api/v1/companies/", json=payload)


def create_user_via_api(client, user_type="candidate", company_id=None, **overrides):
    payload = {
        "email": overrides.get("email", f"user-{_unique_id()}@test.com"),
        "first_name": overrides.get("first_name", "Jane"),
        "last_name": overrides.get("last_name", "Doe"),
        "user_type": user_type,
        "company_id": company_id,
    }
    return client.post("/api/v1/users/", json=payload)


def create_question_via_api(client, company_id, created_by, **overrides):
    payload = {
        "title": overrides.get("title", f"Question-{_unique_id()}"),
        "description": overrides.get("description", "What is the capital of France?"),
        "question_type": overrides.get("question_type", "multiple_choice"),
        "options": overrides.get("options", ["Paris", "London", "Berlin"]),
        "correct_answer": overrides.get("correct_answer", "Paris"),
        "company_id": company_id,
        "created_by": created_by,
    }
    return client.post("/api/v1/questions/", json=payload)


def create_assessment_via_api(client, company_id, created_by, **overrides):
    payload = {
        "title": overrides.get("title", f"Assessment-{_unique_id()}"),
        "description": overrides.get("description", "Screening round"),
        "company_id": company_id,
        "created_by": created_by,
        "time_limit_minutes": overrides.get("time_limit_minutes"),
    }
    return client.post("/api/v1/assessments/", json=payload)


def setup_full_environment(client, points=20):
    """Company, recruiter, candidate, a one-question "Paris" assessment, and an invitation.

    Returns a dict with all ids.
    """
    company = create_company_via_api(client)
    assert company.status_code == 201, f"Company creation failed: {company.text}"
    company_id = company.json()["id"]

    recruiter = create_user_via_api(client, user_type="company_recruiter", company_id=company_id)
    assert recruiter.status_code == 201, f"Recruiter creation failed: {recruiter.text}"
    recruiter_id = recruiter.json()["id"]

    candidate = create_user_via_api(client, user_type="candidate")
    assert candidate.status_code == 201, f"Candidate creation failed: {candidate.text}"
    candidate_id = candidate.json()["id"]

    question = create_question_via_api(client, company_id, recruiter_id)
    assert question.status_code == 201, f"Question creation failed: {question.text}"
    question_id = question.json()["id"]

    assessment = create_assessment_via_api(client, company_id, recruiter_id)
    assert assessment.status_code == 201, f"Assessment creation failed: {assessment.text}"
    assessment_id = assessment.json()["id"]

    link = client.post(
        f"/api/v1/assessments/{assessment_id}/questions",
        json={"question_id": question_id, "order_index": 0, "points": points},
    )
    assert link.status_code == 201, f"Adding question failed: {link.text}"

    invite = client.post(
        "/api/v1/candidate-assessments/",
        json={"candidate_id": candidate_id, "assessment_id": assessment_id},
    )
    assert invite.status_code == 201, f"Invite failed: {invite.text}"

    return {
        "company_id": company_id,
        "recruiter_id": recruiter_id,
        "candidate_id": candidate_id,
        "question_id": question_id,
        "assessment_id": assessment_id,
        "candidate_assessment_id": invite.json()["id"],
    }
