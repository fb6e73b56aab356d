"""
Transizioni di stato: funzioni pure AppState -> AppState, una per azione.
Nessuna funzione modifica lo stato ricevuto; ne ritorna sempre una copia.
"""
import uuid
from datetime import datetime
from typing import Callable, Dict, Iterable, List

from mummytrack.schemas.assignment import (
    BRAHMA_MUHURTA_TIME,
    Assignment,
    AssignmentCreate,
    SubTask,
)
from mummytrack.schemas.grade import Grade
from mummytrack.schemas.state import AppState, ViewState
from mummytrack.services.stats import find_overdue

# rank per gli id che il gateway non ha ordinato
UNRANKED = 999


def new_id() -> str:
    return str(uuid.uuid4())


def _update_assignment(
    state: AppState, assignment_id: str, fn: Callable[[Assignment], Assignment]
) -> AppState:
    updated = [fn(a) if a.id == assignment_id else a for a in state.assignments]
    return state.model_copy(update={"assignments": updated})


def navigate(state: AppState, view: ViewState) -> AppState:
    return state.model_copy(update={"view": view})


def mark_interacted(state: AppState) -> AppState:
    if state.hasUserInteracted:
        return state
    return state.model_copy(update={"hasUserInteracted": True})


def build_assignment(data: AssignmentCreate, assignment_id: str) -> Assignment:
    study_time = BRAHMA_MUHURTA_TIME if data.isBrahmaMuhurta else data.studyTime
    return Assignment(
        id=assignment_id,
        title=data.title,
        subject=data.subject,
        description=data.description,
        dueDate=data.dueDate,
        studyTime=study_time,
        priority=data.priority,
        completed=False,
        subTasks=[],
        isBrahmaMuhurta=data.isBrahmaMuhurta,
    )


def add_assignment(state: AppState, assignment: Assignment) -> AppState:
    if any(a.id == assignment.id for a in state.assignments):
        raise ValueError(f"Assignment id duplicato: {assignment.id}")
    return state.model_copy(
        update={
            "assignments": [*state.assignments, assignment],
            "view": ViewState.FUTURE,
            "hasUserInteracted": True,
        }
    )


def delete_assignment(state: AppState, assignment_id: str) -> AppState:
    remaining = [a for a in state.assignments if a.id != assignment_id]
    return state.model_copy(update={"assignments": remaining})


def toggle_complete(state: AppState, assignment_id: str) -> AppState:
    return _update_assignment(
        state, assignment_id, lambda a: a.model_copy(update={"completed": not a.completed})
    )


def toggle_subtask(state: AppState, assignment_id: str, subtask_id: str) -> AppState:
    def flip(a: Assignment) -> Assignment:
        subtasks = [
            st.model_copy(update={"completed": not st.completed}) if st.id == subtask_id else st
            for st in a.subTasks
        ]
        return a.model_copy(update={"subTasks": subtasks})

    return _update_assignment(state, assignment_id, flip)


def append_subtasks(
    state: AppState,
    assignment_id: str,
    steps: Iterable[str],
    id_factory: Callable[[], str] = new_id,
) -> AppState:
    batch = [SubTask(id=id_factory(), text=step, completed=False) for step in steps]
    if not batch:
        return state
    return _update_assignment(
        state, assignment_id, lambda a: a.model_copy(update={"subTasks": [*a.subTasks, *batch]})
    )


def set_tips(state: AppState, assignment_id: str, tips: str) -> AppState:
    return _update_assignment(state, assignment_id, lambda a: a.model_copy(update={"aiTips": tips}))


def reorder(state: AppState, ordered_ids: List[str]) -> AppState:
    """
    Completati in fondo; tra i non completati vale la posizione in ordered_ids,
    gli id non classificati finiscono dopo quelli classificati.
    """
    if not ordered_ids:
        return state
    order: Dict[str, int] = {aid: idx for idx, aid in enumerate(ordered_ids)}

    def sort_key(a: Assignment):
        if a.completed:
            return (1, 0)
        return (0, order.get(a.id, UNRANKED))

    return state.model_copy(update={"assignments": sorted(state.assignments, key=sort_key)})


def add_grade(state: AppState, grade: Grade) -> AppState:
    return state.model_copy(update={"grades": [*state.grades, grade], "hasUserInteracted": True})


def raise_alert(state: AppState, now: datetime) -> AppState:
    """Un solo slot: se c'è già un alert attivo i nuovi scaduti vengono ignorati."""
    if not state.hasUserInteracted or state.activeAlert is not None:
        return state
    overdue = find_overdue(state.assignments, now)
    if overdue is None:
        return state
    return state.model_copy(update={"activeAlert": overdue.id})


def dismiss_alert(state: AppState) -> AppState:
    if state.activeAlert is None:
        return state
    alerted = state.activeAlert
    state = _update_assignment(state, alerted, lambda a: a.model_copy(update={"completed": True}))
    return state.model_copy(update={"activeAlert": None})


def begin_advisory(state: AppState, assignment_id: str) -> AppState:
    return state.model_copy(update={"pendingAdvisory": state.pendingAdvisory | {assignment_id}})


def end_advisory(state: AppState, assignment_id: str) -> AppState:
    return state.model_copy(update={"pendingAdvisory": state.pendingAdvisory - {assignment_id}})


def set_ordering(state: AppState, pending: bool) -> AppState:
    return state.model_copy(update={"orderingPending": pending})
