# test/pytest/test_stats.py
from datetime import datetime

from conftest import make_assignment
from mummytrack.services.stats import (
    CRISIS,
    DISAPPOINTED,
    MILDLY_SATISFIED,
    PROUD,
    RADIANT,
    check_subject,
    completion_rate,
    dashboard_summary,
    find_overdue,
    is_stem,
    mom_mood,
    subject_distribution,
)


def _batch(done: int, total: int):
    return [make_assignment(str(i), completed=i < done) for i in range(total)]


# --------------------------- completion rate ---------------------------
def test_completion_rate_empty_uses_call_site_convention():
    assert completion_rate([], empty_rate=0) == 0
    assert completion_rate([], empty_rate=100) == 100

def test_completion_rate_rounds_half_up():
    # 1/8 = 12.5%
    assert completion_rate(_batch(1, 8), empty_rate=0) == 13
    assert completion_rate(_batch(1, 3), empty_rate=0) == 33
    assert completion_rate(_batch(2, 3), empty_rate=0) == 67

def test_completion_rate_bounds():
    for total in range(1, 12):
        for done in range(total + 1):
            rate = completion_rate(_batch(done, total), empty_rate=0)
            assert 0 <= rate <= 100
    assert completion_rate(_batch(0, 4), empty_rate=100) == 0
    assert completion_rate(_batch(4, 4), empty_rate=0) == 100


# ------------------------------- mood -------------------------------
def test_mood_thresholds():
    assert mom_mood([]) == RADIANT
    assert mom_mood(_batch(4, 4)) == PROUD
    assert mom_mood(_batch(3, 4)) == MILDLY_SATISFIED      # 75
    assert mom_mood(_batch(7, 10)) == DISAPPOINTED         # 70 non è > 70
    assert mom_mood(_batch(1, 2)) == DISAPPOINTED          # 50
    assert mom_mood(_batch(2, 5)) == CRISIS                # 40 non è > 40
    assert mom_mood(_batch(0, 3)).crisis is True


# ------------------------- subject distribution -------------------------
def test_subject_distribution_counts_only_incomplete():
    items = [
        make_assignment("1", subject="Math"),
        make_assignment("2", subject="Math"),
        make_assignment("3", subject="History"),
        make_assignment("4", subject="Physics", completed=True),
    ]
    assert subject_distribution(items) == {"Math": 2, "History": 1}

def test_subject_distribution_is_case_sensitive():
    items = [make_assignment("1", subject="math"), make_assignment("2", subject="Math")]
    assert subject_distribution(items) == {"math": 1, "Math": 1}


# ------------------------------- STEM -------------------------------
def test_is_stem_substring_case_insensitive():
    assert is_stem("Math (Doctor!)")
    assert is_stem("AP Computer Science")
    assert is_stem("BIOLOGY")
    assert not is_stem("History")

def test_check_subject_warns_for_non_stem():
    assert check_subject("History").warning is not None
    assert check_subject("Chemistry").warning is None
    assert check_subject("").warning is None


# ------------------------------- overdue -------------------------------
def test_find_overdue_first_in_collection_order():
    items = [
        make_assignment("done", completed=True),
        make_assignment("later", studyTime="23:00"),
        make_assignment("early", studyTime="08:00"),
        make_assignment("also", studyTime="07:00"),
    ]
    found = find_overdue(items, datetime(2024, 1, 1, 10, 0))
    assert found is not None and found.id == "early"

def test_find_overdue_is_strict():
    items = [make_assignment("a", studyTime="09:00")]
    assert find_overdue(items, datetime(2024, 1, 1, 9, 0)) is None
    assert find_overdue(items, datetime(2024, 1, 1, 9, 0, 1)).id == "a"

def test_find_overdue_defaults_to_five_pm():
    items = [make_assignment("a", studyTime=None)]
    assert find_overdue(items, datetime(2024, 1, 1, 16, 59)) is None
    assert find_overdue(items, datetime(2024, 1, 1, 17, 1)).id == "a"


# ------------------------------- dashboard -------------------------------
def test_dashboard_summary():
    items = [
        make_assignment("1", subject="Math"),
        make_assignment("2", subject="History", completed=True),
    ]
    summary = dashboard_summary(items)
    assert summary.completionRate == 50
    assert summary.mood == DISAPPOINTED
    assert [(s.name, s.value) for s in summary.subjects] == [("Math", 1)]
    assert summary.pending == 1
    assert summary.total == 2

def test_dashboard_summary_empty_is_full_marks():
    summary = dashboard_summary([])
    assert summary.completionRate == 100
    assert summary.mood == RADIANT
    assert summary.subjects == []
