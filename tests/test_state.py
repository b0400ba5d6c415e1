# imports
import pytest

from habitflow.core.events import EventType
from habitflow.core.models import ValidationError
from habitflow.services.habit_service import HabitTracker


def test_export_then_import_restores_state(tracker, clock, days_ago):
    habit = tracker.create_habit("Read", goal=4)
    tracker.toggle_check(habit.habit_id, days_ago(1))
    tracker.toggle_check(habit.habit_id, days_ago(0))

    exported = tracker.export_state()

    other = HabitTracker(clock=clock, timezone="UTC", analytics_weeks=8)
    other.import_state(exported)

    restored = other.get_habit(habit.habit_id)
    assert restored.to_dict() == habit.to_dict()
    assert other.is_checked(habit.habit_id, days_ago(1))
    assert other.export_state() == exported


def test_export_uses_iso_dates(tracker, days_ago):
    habit = tracker.create_habit("Read")
    tracker.toggle_check(habit.habit_id, days_ago(0))
    check = tracker.export_state()["checks"][0]
    assert check["date"] == "2024-03-15"
    assert check["habit_id"] == habit.habit_id


def test_import_rejects_duplicate_checks_and_keeps_state(tracker, days_ago):
    habit = tracker.create_habit("Keep me")
    bad = {
        "habits": [{"habit_id": "h1", "name": "Read"}],
        "checks": [
            {"check_id": "c1", "habit_id": "h1", "date": "2024-03-01"},
            {"check_id": "c2", "habit_id": "h1", "date": "2024-03-01"},
        ],
    }

    with pytest.raises(ValidationError):
        tracker.import_state(bad)

    assert [h.habit_id for h in tracker.list_habits()] == [habit.habit_id]


def test_import_rejects_orphan_checks(tracker):
    bad = {
        "habits": [],
        "checks": [{"check_id": "c1", "habit_id": "ghost", "date": "2024-03-01"}],
    }
    with pytest.raises(ValidationError):
        tracker.import_state(bad)


@pytest.mark.parametrize("habit", [
    {"name": "No id"},
    {"habit_id": "h1", "name": "Bad goal", "goal": 9},
    {"habit_id": "h1", "name": "Bad badge", "badges": [{"name": "x"}]},
])
def test_import_rejects_invalid_habits(tracker, habit):
    with pytest.raises(ValidationError):
        tracker.import_state({"habits": [habit], "checks": []})


def test_import_emits_state_loaded(tracker):
    events = []
    tracker.subscribe(events.append)
    tracker.import_state({"habits": [{"habit_id": "h1", "name": "Read"}], "checks": []})

    assert events[-1].event_type == EventType.STATE_LOADED
    assert events[-1].payload == {"habits": 1, "checks": 0}


def _badge(milestone):
    return {"badge_id": f"b{milestone}", "name": "Badge", "description": "", "emoji": "🌱",
            "milestone": milestone, "unlocked_at": "2024-03-01T00:00:00+00:00"}


@pytest.mark.parametrize("habit", [
    {"habit_id": "h1", "name": "Twice", "current_streak": 2, "longest_streak": 2,
     "badges": [_badge(1), _badge(1)]},
    {"habit_id": "h1", "name": "Off catalog", "current_streak": 5, "longest_streak": 5,
     "badges": [_badge(999)]},
    {"habit_id": "h1", "name": "Short longest", "current_streak": 5, "longest_streak": 2},
])
def test_import_rejects_broken_streak_and_badge_state(tracker, habit):
    kept = tracker.create_habit("Keep me")

    with pytest.raises(ValidationError):
        tracker.import_state({"habits": [habit], "checks": []})

    assert [h.habit_id for h in tracker.list_habits()] == [kept.habit_id]


def test_import_accepts_catalog_badges(tracker):
    habit = {"habit_id": "h1", "name": "Read", "current_streak": 7, "longest_streak": 9,
             "badges": [_badge(1), _badge(7)]}
    tracker.import_state({"habits": [habit], "checks": []})

    assert tracker.get_habit("h1").badge_milestones == [1, 7]


@pytest.mark.parametrize("data", [
    ["not", "a", "mapping"],
    {"habits": [], "checks": ["oops"]},
    {"habits": ["oops"], "checks": []},
    {"habits": 5, "checks": []},
    {"habits": [], "checks": [{"check_id": "c1"}]},
])
def test_import_rejects_malformed_payloads(tracker, data):
    with pytest.raises(ValidationError):
        tracker.import_state(data)
    assert tracker.list_habits() == []
