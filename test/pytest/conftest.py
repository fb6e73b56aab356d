import pytest
from datetime import date
from typing import Dict, List, Optional

from mummytrack.schemas.advice import GlobalCompetitor
from mummytrack.schemas.assignment import Assignment
from mummytrack.services.tracker import TrackerService


# ------------------------- Fake collaborators -------------------------
class FakeStateStore:
    def __init__(self, blobs: Optional[Dict[str, str]] = None, fail_saves: bool = False):
        self.blobs: Dict[str, str] = dict(blobs or {})
        self.fail_saves = fail_saves
        self.saves: List[str] = []

    async def load(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    async def save(self, key: str, text: str) -> bool:
        self.saves.append(key)
        if self.fail_saves:
            return False
        self.blobs[key] = text
        return True


class FakeAdvisor:
    """Risposte preimpostate; registra le chiamate ricevute."""

    def __init__(self):
        self.steps: List[str] = []
        self.wisdom = "Wake up at 4 AM, beta."
        self.comment = "Where are the other 5 marks?"
        self.ordered_ids: List[str] = []
        self.competitors: List[GlobalCompetitor] = []
        self.calls: List[tuple] = []
        self.hook = None

    async def break_down(self, assignment, crisis=False):
        self.calls.append(("break_down", assignment.id, crisis))
        if self.hook:
            await self.hook()
        return list(self.steps)

    async def mom_wisdom(self, assignment):
        self.calls.append(("mom_wisdom", assignment.id))
        if self.hook:
            await self.hook()
        return self.wisdom

    async def judge_grade(self, subject, score, total):
        self.calls.append(("judge_grade", subject, score, total))
        return self.comment

    async def global_standards(self, completion_rate):
        self.calls.append(("global_standards", completion_rate))
        return list(self.competitors)

    async def prioritize(self, assignments):
        self.calls.append(("prioritize", [a.id for a in assignments]))
        return list(self.ordered_ids)


def make_assignment(aid: str, completed: bool = False, **overrides) -> Assignment:
    base = dict(
        id=aid,
        title=f"Task {aid}",
        subject="Math",
        description="",
        dueDate=date(2024, 1, 1),
        studyTime="09:00",
        completed=completed,
    )
    base.update(overrides)
    return Assignment(**base)


# ------------------------------- Fixtures -------------------------------------
@pytest.fixture
def store():
    return FakeStateStore()

@pytest.fixture
def advisor():
    return FakeAdvisor()

@pytest.fixture
def tracker(store, advisor):
    return TrackerService(store, advisor)
