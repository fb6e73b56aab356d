from typing import Annotated, List
from fastapi import APIRouter, Depends, status

from mummytrack.schemas.grade import Grade, GradeCreate
from mummytrack.core.deps import get_tracker
from mummytrack.services.tracker import TrackerService

router = APIRouter()

TrackerDep = Annotated[TrackerService, Depends(get_tracker)]


@router.post("/grades", status_code=status.HTTP_201_CREATED, response_model=Grade)
async def create_grade_endpoint(grade: GradeCreate, tracker: TrackerDep):
    return await tracker.add_grade(grade)


@router.get("/grades", response_model=List[Grade])
async def list_grades_endpoint(tracker: TrackerDep, newest_first: bool = True):
    grades = tracker.list_grades()
    return list(reversed(grades)) if newest_first else grades
