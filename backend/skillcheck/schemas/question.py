from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.question import QuestionType


class QuestionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    question_type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    company_id: int = Field(gt=0)
    created_by: int = Field(gt=0)

    @field_validator("correct_answer")
    @classmethod
    def _blank_answer_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _check_options(self):
        if self.options is not None and self.question_type != QuestionType.MULTIPLE_CHOICE:
            raise ValueError("options are only allowed for multiple_choice questions")
        if self.question_type == QuestionType.MULTIPLE_CHOICE:
            if not self.options:
                raise ValueError("multiple_choice questions need at least one option")
            if self.correct_answer is not None:
                normalized = {option.strip().lower() for option in self.options}
                if self.correct_answer.strip().lower() not in normalized:
                    raise ValueError("correct_answer must be one of the options")
        return self


class QuestionResponse(BaseModel):
    id: int
    title: str
    description: str
    question_type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    company_id: int
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
