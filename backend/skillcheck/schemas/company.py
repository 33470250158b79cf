from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CompanyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    domain: Optional[str] = Field(default=None, max_length=253)


class CompanyResponse(BaseModel):
    id: int
    name: str
    domain: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
