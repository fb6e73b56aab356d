from typing import Optional

from pydantic import BaseModel, Field


class GradeCreate(BaseModel):
    subject: str = Field(min_length=1)
    score: float
    total: float = 100


class Grade(GradeCreate):
    id: str
    momComment: Optional[str] = None
