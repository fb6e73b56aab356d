# test/pytest/test_timers.py
import asyncio
import pytest
from datetime import datetime

from conftest import make_assignment
from mummytrack.services.timers import (
    FOCUS_DONE_NOTICE,
    FOCUS_MESSAGES,
    DeadlinePoller,
    FocusTimer,
    format_clock,
)
from mummytrack.services.tracker import TrackerService


# --------------------------------- deadline poller ---------------------------------
@pytest.mark.asyncio
async def test_poller_raises_alert_after_interaction(store, advisor):
    tracker = TrackerService(store, advisor, clock=lambda: datetime(2024, 1, 1, 10, 0))
    tracker.state = tracker.state.model_copy(update={"assignments": [make_assignment("a")]})
    poller = DeadlinePoller(tracker, interval=0.01)
    poller.start()
    try:
        await asyncio.sleep(0.05)
        assert tracker.active_alert() is None
        tracker.interact()
        for _ in range(50):
            if tracker.active_alert() is not None:
                break
            await asyncio.sleep(0.01)
        assert tracker.active_alert().assignmentId == "a"
    finally:
        await poller.stop()
    assert not poller.running

@pytest.mark.asyncio
async def test_poller_survives_tick_errors(store, advisor):
    tracker = TrackerService(store, advisor)
    calls = []

    def broken(now=None):
        calls.append(now)
        raise RuntimeError("boom")

    tracker.check_deadlines = broken
    poller = DeadlinePoller(tracker, interval=0.01)
    poller.start()
    await asyncio.sleep(0.06)
    await poller.stop()
    assert len(calls) >= 2

@pytest.mark.asyncio
async def test_poller_stop_is_prompt(store, advisor):
    poller = DeadlinePoller(TrackerService(store, advisor), interval=60)
    poller.start()
    await asyncio.wait_for(poller.stop(), timeout=1)


# --------------------------------- focus timer ---------------------------------
def test_format_clock():
    assert format_clock(25 * 60) == "25:00"
    assert format_clock(61) == "01:01"
    assert format_clock(0) == "00:00"

def test_tick_rotates_message_every_thirty_seconds():
    timer = FocusTimer(session_seconds=90)
    timer.tick()                      # 90 -> 89, 90 % 30 == 0
    assert timer.status().message == FOCUS_MESSAGES[1]
    for _ in range(29):
        timer.tick()
    assert timer.remaining == 60
    assert timer.status().message == FOCUS_MESSAGES[1]
    timer.tick()
    assert timer.status().message == FOCUS_MESSAGES[2]

def test_tick_to_zero_sets_notice():
    timer = FocusTimer(session_seconds=2)
    timer.tick()
    timer.tick()
    timer.tick()
    assert timer.remaining == 0
    assert timer.notice == FOCUS_DONE_NOTICE

@pytest.mark.asyncio
async def test_focus_runs_to_completion():
    timer = FocusTimer(session_seconds=3, tick_seconds=0.001)
    assert timer.start().active is True
    for _ in range(200):
        if not timer.active:
            break
        await asyncio.sleep(0.005)
    status = timer.status()
    assert status.active is False
    assert status.remaining == 0
    assert status.notice == FOCUS_DONE_NOTICE

    # ripartire dopo lo zero riporta alla durata piena
    assert timer.start().remaining == 3
    await timer.stop()

@pytest.mark.asyncio
async def test_focus_stop_resets():
    timer = FocusTimer(session_seconds=100, tick_seconds=0.001)
    timer.start()
    await asyncio.sleep(0.02)
    status = await timer.stop()
    assert status.active is False
    assert status.remaining == 100
    assert status.display == "01:40"
