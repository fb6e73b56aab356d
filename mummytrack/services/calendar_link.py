from urllib.parse import quote

from mummytrack.schemas.assignment import Assignment

CALENDAR_BASE = "https://calendar.google.com/calendar/render?action=TEMPLATE"
REMINDER = "Beta, don't forget! Sharmaji's son is already done."


def _encode(value: str) -> str:
    # come encodeURIComponent
    return quote(value, safe="-_.!~*'()")


def calendar_url(assignment: Assignment) -> str:
    """
    Link "crea evento" di Google Calendar: inizio all'orario di studio, fine un'ora dopo.
    L'ora di fine non viene normalizzata: con studio alle 23:xx risulta "24".
    """
    title = _encode(f"[MummyTrack] {assignment.subject}: {assignment.title}")
    details = _encode(f"{assignment.description}\n\n{REMINDER}")
    date_part = assignment.dueDate.strftime("%Y%m%d")
    time_part = assignment.effective_study_time().replace(":", "")
    start = f"{date_part}T{time_part}00"
    end_hour = int(time_part[:2]) + 1
    end = f"{date_part}T{end_hour:02d}{time_part[2:]}00"
    return f"{CALENDAR_BASE}&text={title}&details={details}&dates={start}/{end}"
