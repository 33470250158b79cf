"""Initial schema: companies, users, questions, assessments and candidate results

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

user_type = sa.Enum("administrator", "company_recruiter", "candidate", name="user_type")
question_type = sa.Enum("multiple_choice", "coding_challenge", "free_text", name="question_type")
assessment_status = sa.Enum("draft", "active", "archived", name="assessment_status")
candidate_assessment_status = sa.Enum(
    "invited", "in_progress", "completed", "expired", name="candidate_assessment_status"
)


def upgrade():
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("domain", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_companies_id", "companies", ["id"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("user_type", user_type, nullable=False),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_company_id", "users", ["company_id"])

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("question_type", question_type, nullable=False),
        sa.Column("options", sa.JSON(), nullable=True),
        sa.Column("correct_answer", sa.Text(), nullable=True),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_questions_id", "questions", ["id"])
    op.create_index("ix_questions_company_id", "questions", ["company_id"])

    op.create_table(
        "assessments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", assessment_status, nullable=False),
        sa.Column("time_limit_minutes", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "time_limit_minutes IS NULL OR time_limit_minutes > 0",
            name="ck_assessments_time_limit_positive",
        ),
    )
    op.create_index("ix_assessments_id", "assessments", ["id"])
    op.create_index("ix_assessments_company_id", "assessments", ["company_id"])

    op.create_table(
        "assessment_questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("assessment_id", sa.Integer(), sa.ForeignKey("assessments.id"), nullable=False),
        sa.Column("question_id", sa.Integer(), sa.ForeignKey("questions.id"), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default="1"),
        sa.UniqueConstraint("assessment_id", "question_id", name="uq_assessment_questions_assessment_question"),
        sa.CheckConstraint("points >= 0", name="ck_assessment_questions_points_non_negative"),
    )
    op.create_index("ix_assessment_questions_id", "assessment_questions", ["id"])
    op.create_index("ix_assessment_questions_assessment_id", "assessment_questions", ["assessment_id"])
    op.create_index("ix_assessment_questions_question_id", "assessment_questions", ["question_id"])

    op.create_table(
        "candidate_assessments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("candidate_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("assessment_id", sa.Integer(), sa.ForeignKey("assessments.id"), nullable=False),
        sa.Column("status", candidate_assessment_status, nullable=False),
        sa.Column("invited_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("score", sa.Numeric(10, 2), nullable=True),
        sa.Column("total_points", sa.Integer(), nullable=True),
        sa.UniqueConstraint("candidate_id", "assessment_id", name="uq_candidate_assessments_candidate_assessment"),
    )
    op.create_index("ix_candidate_assessments_id", "candidate_assessments", ["id"])
    op.create_index("ix_candidate_assessments_candidate_id", "candidate_assessments", ["candidate_id"])
    op.create_index("ix_candidate_assessments_assessment_id", "candidate_assessments", ["assessment_id"])

    op.create_table(
        "candidate_answers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "candidate_assessment_id",
            sa.Integer(),
            sa.ForeignKey("candidate_assessments.id"),
            nullable=False,
        ),
        sa.Column("question_id", sa.Integer(), sa.ForeignKey("questions.id"), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=True),
        sa.Column("points_earned", sa.Numeric(10, 2), nullable=True),
        sa.Column("answered_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(
            "candidate_assessment_id",
            "question_id",
            name="uq_candidate_answers_candidate_assessment_question",
        ),
    )
    op.create_index("ix_candidate_answers_id", "candidate_answers", ["id"])
    op.create_index(
        "ix_candidate_answers_candidate_assessment_id", "candidate_answers", ["candidate_assessment_id"]
    )
    op.create_index("ix_candidate_answers_question_id", "candidate_answers", ["question_id"])


def downgrade():
    op.drop_table("candidate_answers")
    op.drop_table("candidate_assessments")
    op.drop_table("assessment_questions")
    op.drop_table("assessments")
    op.drop_table("questions")
    op.drop_table("users")
    op.drop_table("companies")

    bind = op.get_bind()
    candidate_assessment_status.drop(bind, checkfirst=True)
    assessment_status.drop(bind, checkfirst=True)
    question_type.drop(bind, checkfirst=True)
    user_type.drop(bind, checkfirst=True)
