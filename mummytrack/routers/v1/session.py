from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException

from mummytrack.schemas.state import AlertView, SessionView, ViewChange
from mummytrack.core.deps import get_tracker
from mummytrack.services.tracker import TrackerService

router = APIRouter()

TrackerDep = Annotated[TrackerService, Depends(get_tracker)]


@router.get("/session", response_model=SessionView)
async def session_endpoint(tracker: TrackerDep):
    return tracker.session()


@router.put("/session/view", response_model=SessionView)
async def change_view_endpoint(change: ViewChange, tracker: TrackerDep):
    return tracker.navigate(change.view)


@router.post("/session/interact", response_model=SessionView)
async def interact_endpoint(tracker: TrackerDep):
    return tracker.interact()


@router.get("/session/alert", response_model=AlertView | None)
async def alert_endpoint(tracker: TrackerDep):
    return tracker.active_alert()


@router.post("/session/alert/dismiss", response_model=SessionView)
async def dismiss_alert_endpoint(tracker: TrackerDep):
    if tracker.active_alert() is None:
        raise HTTPException(status_code=404, detail="No active alert")
    await tracker.dismiss_alert()
    return tracker.session()
