from typing import List, Optional

from pydantic import BaseModel


class Mood(BaseModel):
    label: str
    emoji: str
    subtext: str
    crisis: bool = False


class SubjectSlice(BaseModel):
    name: str
    value: int


class DashboardSummary(BaseModel):
    completionRate: int
    mood: Mood
    subjects: List[SubjectSlice]
    pending: int
    total: int


class SubjectCheck(BaseModel):
    subject: str
    isStem: bool
    warning: Optional[str] = None
