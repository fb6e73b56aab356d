from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, status, Response

from mummytrack.schemas.assignment import Assignment, AssignmentCreate, AssignmentCreated
from mummytrack.core.deps import get_tracker
from mummytrack.services.tracker import AdvisoryBusyError, TrackerService


router = APIRouter()

TrackerDep = Annotated[TrackerService, Depends(get_tracker)]


@router.post("/assignments", status_code=status.HTTP_201_CREATED, response_model=AssignmentCreated)
async def create_assignment_endpoint(assignment: AssignmentCreate, tracker: TrackerDep):
    return await tracker.add_assignment(assignment)


@router.get("/assignments", response_model=List[Assignment])
async def list_assignments_endpoint(tracker: TrackerDep):
    return tracker.list_assignments()


# prima di /assignments/{assignment_id}/... per non essere catturata come id
@router.post("/assignments/prioritize", response_model=List[Assignment])
async def prioritize_endpoint(tracker: TrackerDep):
    try:
        return await tracker.smart_prioritize()
    except AdvisoryBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/assignments/{assignment_id}", response_model=Assignment)
async def get_assignment_endpoint(assignment_id: str, tracker: TrackerDep):
    result = tracker.find(assignment_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return result


@router.delete("/assignments/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment_endpoint(assignment_id: str, tracker: TrackerDep):
    deleted = await tracker.delete_assignment(assignment_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/assignments/{assignment_id}/toggle", response_model=Assignment)
async def toggle_assignment_endpoint(assignment_id: str, tracker: TrackerDep):
    result = await tracker.toggle_complete(assignment_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return result


@router.post("/assignments/{assignment_id}/subtasks/{subtask_id}/toggle", response_model=Assignment)
async def toggle_subtask_endpoint(assignment_id: str, subtask_id: str, tracker: TrackerDep):
    result = await tracker.toggle_subtask(assignment_id, subtask_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Sub-task not found")
    return result


@router.post("/assignments/{assignment_id}/breakdown", response_model=Assignment)
async def breakdown_endpoint(assignment_id: str, tracker: TrackerDep, crisis: bool = False):
    try:
        result = await tracker.break_down(assignment_id, crisis=crisis)
    except AdvisoryBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return result


@router.post("/assignments/{assignment_id}/wisdom", response_model=Assignment)
async def wisdom_endpoint(assignment_id: str, tracker: TrackerDep):
    try:
        result = await tracker.fetch_wisdom(assignment_id)
    except AdvisoryBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return result


@router.get("/assignments/{assignment_id}/calendar")
async def calendar_endpoint(assignment_id: str, tracker: TrackerDep):
    url = tracker.calendar_link(assignment_id)
    if url is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return {"url": url}
