from typing import Annotated
from fastapi import APIRouter, Depends

from mummytrack.schemas.focus import FocusStatus
from mummytrack.core.deps import get_focus_timer, get_tracker
from mummytrack.services.timers import FocusTimer
from mummytrack.services.tracker import TrackerService

router = APIRouter()

TimerDep = Annotated[FocusTimer, Depends(get_focus_timer)]
TrackerDep = Annotated[TrackerService, Depends(get_tracker)]


@router.get("/focus", response_model=FocusStatus)
async def focus_status_endpoint(timer: TimerDep):
    return timer.status()


@router.post("/focus/start", response_model=FocusStatus)
async def focus_start_endpoint(timer: TimerDep, tracker: TrackerDep):
    tracker.interact()
    return timer.start()


@router.post("/focus/stop", response_model=FocusStatus)
async def focus_stop_endpoint(timer: TimerDep, tracker: TrackerDep):
    tracker.interact()
    return await timer.stop()
