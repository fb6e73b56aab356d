from enum import Enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, Field

from mummytrack.schemas.assignment import Assignment
from mummytrack.schemas.grade import Grade


class ViewState(str, Enum):
    INSPECTION = "inspection"
    FUTURE = "future"
    ADD = "add"
    GRADES = "grades"
    FOCUS = "focus"
    LEADERBOARD = "leaderboard"


class AppState(BaseModel):
    """Unico stato dell'applicazione. Solo assignments e grades vengono persistiti."""

    view: ViewState = ViewState.INSPECTION
    assignments: List[Assignment] = Field(default_factory=list)
    grades: List[Grade] = Field(default_factory=list)
    activeAlert: Optional[str] = None
    hasUserInteracted: bool = False
    pendingAdvisory: FrozenSet[str] = frozenset()
    orderingPending: bool = False


class ViewChange(BaseModel):
    view: ViewState


class SessionView(BaseModel):
    view: ViewState
    activeAlert: Optional[str] = None
    hasUserInteracted: bool
    pendingAdvisory: List[str]
    orderingPending: bool


class AlertView(BaseModel):
    assignmentId: str
    title: str
    message: str = "Shaurya next door finished this 2 hours ago! Why are you still on that phone?!"
