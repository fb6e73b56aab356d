"""
Task periodici legati al ciclo di vita di chi li possiede: start() li avvia,
stop() li ferma e attende la fine del loop.
"""
import asyncio
import logging
from typing import Optional

from mummytrack.schemas.focus import FocusStatus
from mummytrack.services.tracker import TrackerService

logger = logging.getLogger(__name__)

FOCUS_MESSAGES = [
    "Don't touch the phone!",
    "Shaurya is studying right now. You?",
    "Instagram won't pay your bills.",
    "I am watching you from the door.",
    "Your concentration is like a broken mirror.",
    "Did you finish the 10th sum yet?",
]
FOCUS_DONE_NOTICE = "Beta, break is only 2 minutes. Start next session."
MESSAGE_EVERY = 30


async def _sleep_or_stop(stop_event: asyncio.Event, timeout: float) -> None:
    # attesa di timeout secondi o uscita se stop_event settato
    try:
        await asyncio.wait_for(stop_event.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        pass


class DeadlinePoller:
    def __init__(self, tracker: TrackerService, interval: float = 5.0):
        self.tracker = tracker
        self.interval = interval
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        await self._task
        self._task = None

    async def _loop(self) -> None:
        while not self._stop_event.is_set():
            await _sleep_or_stop(self._stop_event, self.interval)
            if self._stop_event.is_set():
                break
            try:
                self.tracker.check_deadlines()
            except Exception:
                logging.exception("Errore controllo scadenze")


def format_clock(seconds: int) -> str:
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


class FocusTimer:
    """Countdown "Lockdown": un tick al secondo, messaggio diverso ogni 30 secondi."""

    def __init__(self, session_seconds: int = 25 * 60, tick_seconds: float = 1.0):
        self.session_seconds = session_seconds
        self.tick_seconds = tick_seconds
        self.remaining = session_seconds
        self.message_index = 0
        self.notice: Optional[str] = None
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def status(self) -> FocusStatus:
        return FocusStatus(
            remaining=self.remaining,
            display=format_clock(self.remaining),
            active=self.active,
            message=FOCUS_MESSAGES[self.message_index],
            notice=self.notice,
        )

    def start(self) -> FocusStatus:
        if not self.active:
            if self.remaining <= 0:
                self.remaining = self.session_seconds
            self.notice = None
            self._stop_event = asyncio.Event()
            self._task = asyncio.create_task(self._loop())
        return self.status()

    async def stop(self) -> FocusStatus:
        """Rinuncia: ferma il countdown e lo riporta alla durata piena."""
        await self._halt()
        self.remaining = self.session_seconds
        return self.status()

    async def _halt(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        await self._task
        self._task = None

    def tick(self) -> None:
        if self.remaining <= 0:
            return
        if self.remaining % MESSAGE_EVERY == 0:
            self.message_index = (self.message_index + 1) % len(FOCUS_MESSAGES)
        self.remaining -= 1
        if self.remaining == 0:
            self.notice = FOCUS_DONE_NOTICE
            logger.info("Sessione di focus terminata")

    async def _loop(self) -> None:
        while self.remaining > 0 and not self._stop_event.is_set():
            await _sleep_or_stop(self._stop_event, self.tick_seconds)
            if self._stop_event.is_set():
                break
            self.tick()
