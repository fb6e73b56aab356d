import logging
from typing import List, Tuple

from pydantic import TypeAdapter, ValidationError

from mummytrack.database.state_store import StateStore
from mummytrack.schemas.assignment import Assignment
from mummytrack.schemas.grade import Grade

logger = logging.getLogger(__name__)

ASSIGNMENTS = TypeAdapter(List[Assignment])
GRADES = TypeAdapter(List[Grade])


def dump_assignments(assignments: List[Assignment]) -> str:
    return ASSIGNMENTS.dump_json(assignments).decode("utf-8")


def dump_grades(grades: List[Grade]) -> str:
    return GRADES.dump_json(grades).decode("utf-8")


async def _load_list(store: StateStore, key: str, adapter: TypeAdapter) -> list:
    text = await store.load(key)
    if text is None:
        return []
    try:
        return adapter.validate_json(text)
    except ValidationError:
        # blob corrotto: la collezione resta vuota per questa sessione
        logger.exception("Blob %s non valido, ignorato", key)
        return []


async def load_collections(
    store: StateStore, assignments_key: str, grades_key: str
) -> Tuple[List[Assignment], List[Grade]]:
    assignments = await _load_list(store, assignments_key, ASSIGNMENTS)
    grades = await _load_list(store, grades_key, GRADES)
    return assignments, grades


async def save_collections(
    store: StateStore,
    assignments: List[Assignment],
    grades: List[Grade],
    assignments_key: str,
    grades_key: str,
) -> bool:
    """Salva entrambe le collezioni, indipendentemente. Ritorna True solo se entrambi i salvataggi riescono."""
    ok_assignments = await store.save(assignments_key, dump_assignments(assignments))
    ok_grades = await store.save(grades_key, dump_grades(grades))
    return ok_assignments and ok_grades
