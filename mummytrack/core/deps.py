from fastapi import Request
from mummytrack.services.tracker import TrackerService
from mummytrack.services.timers import FocusTimer

def get_tracker(request: Request) -> TrackerService:
    tracker = getattr(request.app.state, "tracker", None)
    if tracker is None:
        raise RuntimeError("Tracker non inizializzato")
    return tracker

def get_focus_timer(request: Request) -> FocusTimer:
    timer = getattr(request.app.state, "focus_timer", None)
    if timer is None:
        raise RuntimeError("Focus timer non inizializzato")
    return timer
