"""
Viste derivate: funzioni pure, ricalcolate ad ogni lettura dallo stato corrente.
"""
import math
from datetime import datetime, time
from typing import Dict, Optional, Sequence

from mummytrack.schemas.assignment import Assignment
from mummytrack.schemas.stats import DashboardSummary, Mood, SubjectCheck, SubjectSlice

STEM_SUBJECTS = ("math", "physics", "chemistry", "biology", "science", "coding", "computer")
NON_STEM_WARNING = "Are you sure? History won't get you a job."

RADIANT = Mood(label="Radiant", emoji="😊", subtext="Good Beta. Have some fruit.")
PROUD = Mood(label="Proud Mother", emoji="🌟", subtext="My child is the best in the colony.")
MILDLY_SATISFIED = Mood(label="Mildly Satisfied", emoji="🙂", subtext="Okay, but Shaurya is already done.")
DISAPPOINTED = Mood(
    label="Visible Disappointment",
    emoji="😟",
    subtext="I do everything for you, and this is the result?",
)
CRISIS = Mood(label="9 PM CRISIS MODE", emoji="🛑", subtext="ARRE! DO YOU WANT TO BE A CHAI-WALA?!", crisis=True)


def _round_half_up(value: float) -> int:
    # round() di Python arrotonda al pari: 12.5 -> 12
    return int(math.floor(value + 0.5))


def completion_rate(assignments: Sequence[Assignment], empty_rate: int) -> int:
    """
    Percentuale di assignment completati.
    empty_rate è il valore per la collezione vuota: la dashboard usa 100, la classifica 0.
    """
    if not assignments:
        return empty_rate
    done = sum(1 for a in assignments if a.completed)
    return _round_half_up(done * 100 / len(assignments))


def mom_mood(assignments: Sequence[Assignment]) -> Mood:
    if not assignments:
        return RADIANT
    rate = completion_rate(assignments, empty_rate=100)
    if rate == 100:
        return PROUD
    if rate > 70:
        return MILDLY_SATISFIED
    if rate > 40:
        return DISAPPOINTED
    return CRISIS


def subject_distribution(assignments: Sequence[Assignment]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for a in assignments:
        if not a.completed:
            counts[a.subject] = counts.get(a.subject, 0) + 1
    return counts


def is_stem(subject: str) -> bool:
    lowered = subject.lower()
    return any(s in lowered for s in STEM_SUBJECTS)


def check_subject(subject: str) -> SubjectCheck:
    stem = is_stem(subject)
    warning = NON_STEM_WARNING if subject and not stem else None
    return SubjectCheck(subject=subject, isStem=stem, warning=warning)


def study_datetime(assignment: Assignment) -> datetime:
    hours, minutes = (int(p) for p in assignment.effective_study_time().split(":"))
    return datetime.combine(assignment.dueDate, time(hours, minutes))


def find_overdue(assignments: Sequence[Assignment], now: datetime) -> Optional[Assignment]:
    """Primo assignment (ordine della collezione) non completato con orario di studio già passato."""
    for a in assignments:
        if a.completed:
            continue
        if now > study_datetime(a):
            return a
    return None


def dashboard_summary(assignments: Sequence[Assignment]) -> DashboardSummary:
    distribution = subject_distribution(assignments)
    return DashboardSummary(
        completionRate=completion_rate(assignments, empty_rate=100),
        mood=mom_mood(assignments),
        subjects=[SubjectSlice(name=name, value=value) for name, value in distribution.items()],
        pending=sum(distribution.values()),
        total=len(assignments),
    )
