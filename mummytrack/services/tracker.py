import logging
from datetime import datetime
from typing import Callable, List, Optional

from mummytrack.database.state_store import StateStore
from mummytrack.schemas.advice import GlobalCompetitor
from mummytrack.schemas.assignment import Assignment, AssignmentCreate, AssignmentCreated
from mummytrack.schemas.grade import Grade, GradeCreate
from mummytrack.schemas.state import AlertView, AppState, SessionView, ViewState
from mummytrack.schemas.stats import DashboardSummary
from mummytrack.services import reducers
from mummytrack.services.advisor import AdvisoryGateway
from mummytrack.services.calendar_link import calendar_url
from mummytrack.services.persistence import load_collections, save_collections
from mummytrack.services.stats import completion_rate, dashboard_summary

logger = logging.getLogger(__name__)


class AdvisoryBusyError(RuntimeError):
    pass


class TrackerService:
    """
    Possiede l'unico AppState. Ogni azione passa da un reducer puro; le mutazioni
    di assignments/grades vengono salvate subito (write-through).
    """

    def __init__(
        self,
        store: StateStore,
        advisor: AdvisoryGateway,
        assignments_key: str = "mummytrack_assignments",
        grades_key: str = "mummytrack_grades",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.advisor = advisor
        self.assignments_key = assignments_key
        self.grades_key = grades_key
        self.clock = clock
        self.state = AppState()

    async def load(self) -> None:
        assignments, grades = await load_collections(self.store, self.assignments_key, self.grades_key)
        self.state = self.state.model_copy(update={"assignments": assignments, "grades": grades})
        logger.info("Stato caricato: %d assignment, %d voti", len(assignments), len(grades))

    async def _commit(self, new_state: AppState) -> AppState:
        self.state = new_state
        ok = await save_collections(
            self.store,
            new_state.assignments,
            new_state.grades,
            self.assignments_key,
            self.grades_key,
        )
        if not ok:
            logger.warning("Salvataggio dello stato non riuscito")
        return new_state

    # --- lettura ---

    def find(self, assignment_id: str) -> Optional[Assignment]:
        return next((a for a in self.state.assignments if a.id == assignment_id), None)

    def list_assignments(self) -> List[Assignment]:
        return list(self.state.assignments)

    def list_grades(self) -> List[Grade]:
        return list(self.state.grades)

    def dashboard(self) -> DashboardSummary:
        return dashboard_summary(self.state.assignments)

    def session(self) -> SessionView:
        s = self.state
        return SessionView(
            view=s.view,
            activeAlert=s.activeAlert,
            hasUserInteracted=s.hasUserInteracted,
            pendingAdvisory=sorted(s.pendingAdvisory),
            orderingPending=s.orderingPending,
        )

    # --- navigazione / sessione ---

    def _touch(self) -> None:
        # ogni azione dell'utente conta come interazione (sblocca il poller)
        self.state = reducers.mark_interacted(self.state)

    def navigate(self, view: ViewState) -> SessionView:
        self._touch()
        self.state = reducers.navigate(self.state, view)
        return self.session()

    def interact(self) -> SessionView:
        self._touch()
        return self.session()

    # --- assignments ---

    async def add_assignment(self, data: AssignmentCreate) -> AssignmentCreated:
        assignment = reducers.build_assignment(data, reducers.new_id())
        await self._commit(reducers.add_assignment(self.state, assignment))
        url = calendar_url(assignment) if data.autoSync else None
        return AssignmentCreated(assignment=assignment, calendarUrl=url)

    async def delete_assignment(self, assignment_id: str) -> bool:
        self._touch()
        if self.find(assignment_id) is None:
            return False
        await self._commit(reducers.delete_assignment(self.state, assignment_id))
        return True

    async def toggle_complete(self, assignment_id: str) -> Optional[Assignment]:
        self._touch()
        if self.find(assignment_id) is None:
            return None
        await self._commit(reducers.toggle_complete(self.state, assignment_id))
        return self.find(assignment_id)

    async def toggle_subtask(self, assignment_id: str, subtask_id: str) -> Optional[Assignment]:
        self._touch()
        current = self.find(assignment_id)
        if current is None or not any(st.id == subtask_id for st in current.subTasks):
            return None
        await self._commit(reducers.toggle_subtask(self.state, assignment_id, subtask_id))
        return self.find(assignment_id)

    def _begin_advisory(self, assignment_id: str) -> None:
        if assignment_id in self.state.pendingAdvisory:
            raise AdvisoryBusyError("Mummy is still thinking about this one")
        self.state = reducers.begin_advisory(self.state, assignment_id)

    def _end_advisory(self, assignment_id: str) -> None:
        self.state = reducers.end_advisory(self.state, assignment_id)

    async def break_down(self, assignment_id: str, crisis: bool = False) -> Optional[Assignment]:
        self._touch()
        current = self.find(assignment_id)
        if current is None:
            return None
        self._begin_advisory(assignment_id)
        try:
            steps = await self.advisor.break_down(current, crisis)
        finally:
            self._end_advisory(assignment_id)
        # il merge avviene sullo stato attuale: se l'assignment è sparito è un no-op
        if steps and self.find(assignment_id) is not None:
            await self._commit(reducers.append_subtasks(self.state, assignment_id, steps))
        return self.find(assignment_id)

    async def fetch_wisdom(self, assignment_id: str) -> Optional[Assignment]:
        self._touch()
        current = self.find(assignment_id)
        if current is None:
            return None
        self._begin_advisory(assignment_id)
        try:
            tips = await self.advisor.mom_wisdom(current)
        finally:
            self._end_advisory(assignment_id)
        if self.find(assignment_id) is not None:
            await self._commit(reducers.set_tips(self.state, assignment_id, tips))
        return self.find(assignment_id)

    async def smart_prioritize(self) -> List[Assignment]:
        self._touch()
        if len(self.state.assignments) < 2:
            return self.list_assignments()
        if self.state.orderingPending:
            raise AdvisoryBusyError("Mummy is already judging")
        self.state = reducers.set_ordering(self.state, True)
        try:
            incomplete = [a for a in self.state.assignments if not a.completed]
            ordered_ids = await self.advisor.prioritize(incomplete)
        finally:
            self.state = reducers.set_ordering(self.state, False)
        if ordered_ids:
            await self._commit(reducers.reorder(self.state, ordered_ids))
        return self.list_assignments()

    def calendar_link(self, assignment_id: str) -> Optional[str]:
        current = self.find(assignment_id)
        return calendar_url(current) if current is not None else None

    # --- voti ---

    async def add_grade(self, data: GradeCreate) -> Grade:
        comment = await self.advisor.judge_grade(data.subject, data.score, data.total)
        grade = Grade(id=reducers.new_id(), momComment=comment, **data.model_dump())
        await self._commit(reducers.add_grade(self.state, grade))
        return grade

    async def leaderboard(self) -> List[GlobalCompetitor]:
        self._touch()
        rate = completion_rate(self.state.assignments, empty_rate=0)
        return await self.advisor.global_standards(rate)

    # --- alert ---

    def active_alert(self) -> Optional[AlertView]:
        alert_id = self.state.activeAlert
        if alert_id is None:
            return None
        current = self.find(alert_id)
        title = current.title if current is not None else ""
        return AlertView(assignmentId=alert_id, title=title)

    def check_deadlines(self, now: Optional[datetime] = None) -> Optional[AlertView]:
        """Un tick del poller: nessun effetto finché l'utente non ha interagito."""
        before = self.state.activeAlert
        self.state = reducers.raise_alert(self.state, now or self.clock())
        if self.state.activeAlert is not None and self.state.activeAlert != before:
            logger.info("Assignment scaduto: %s", self.state.activeAlert)
        return self.active_alert()

    async def dismiss_alert(self) -> Optional[Assignment]:
        alert_id = self.state.activeAlert
        if alert_id is None:
            return None
        await self._commit(reducers.dismiss_alert(self.state))
        return self.find(alert_id)
