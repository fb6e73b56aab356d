from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

# orario di studio "HH:MM"
STUDY_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
DEFAULT_STUDY_TIME = "17:00"
BRAHMA_MUHURTA_TIME = "04:00"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class SubTask(BaseModel):
    id: str
    text: str
    completed: bool = False


class AssignmentBase(BaseModel):
    title: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    description: str = ""
    dueDate: date
    studyTime: Optional[str] = Field(default=None, pattern=STUDY_TIME_PATTERN)
    priority: Priority = Priority.MEDIUM


class AssignmentCreate(AssignmentBase):
    isBrahmaMuhurta: bool = True
    autoSync: bool = True


class Assignment(AssignmentBase):
    id: str
    completed: bool = False
    subTasks: List[SubTask] = Field(default_factory=list)
    aiTips: Optional[str] = None
    isBrahmaMuhurta: Optional[bool] = None

    def effective_study_time(self) -> str:
        return self.studyTime or DEFAULT_STUDY_TIME


class AssignmentCreated(BaseModel):
    assignment: Assignment
    calendarUrl: Optional[str] = None
