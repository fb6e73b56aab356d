from typing import Annotated, List
from fastapi import APIRouter, Depends, Query

from mummytrack.schemas.advice import GlobalCompetitor
from mummytrack.schemas.stats import DashboardSummary, SubjectCheck
from mummytrack.core.deps import get_tracker
from mummytrack.services.stats import check_subject
from mummytrack.services.tracker import TrackerService

router = APIRouter()

TrackerDep = Annotated[TrackerService, Depends(get_tracker)]


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard_endpoint(tracker: TrackerDep):
    return tracker.dashboard()


@router.get("/leaderboard", response_model=List[GlobalCompetitor])
async def leaderboard_endpoint(tracker: TrackerDep):
    return await tracker.leaderboard()


@router.get("/subjects/check", response_model=SubjectCheck)
async def subject_check_endpoint(subject: str = Query("")):
    return check_subject(subject)
