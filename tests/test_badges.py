# imports
from datetime import datetime

from habitflow.core.badges import BADGE_CATALOG, award_badges, get_badge_definition

FIXED_NOW = datetime(2024, 3, 15, 9, 30)


def _now():
    return FIXED_NOW


def test_catalog_is_ordered_and_unique():
    milestones = [b.milestone for b in BADGE_CATALOG]
    assert milestones == sorted(milestones)
    assert len(set(milestones)) == len(milestones)
    assert milestones[:2] == [1, 7]


def test_seven_day_streak_unlocks_first_two_badges_in_order():
    badges = award_badges([], 7, now=_now)

    assert [b.milestone for b in badges] == [1, 7]
    assert [b.name for b in badges] == ["First Steps", "Week Warrior"]
    # each unlocked instance gets its own identity and the unlock time
    assert len({b.badge_id for b in badges}) == 2
    assert all(b.unlocked_at == FIXED_NOW.isoformat() for b in badges)


def test_already_unlocked_milestones_are_skipped():
    owned = [get_badge_definition(1).unlock("2024-01-01T00:00:00")]
    badges = award_badges(owned, 30, now=_now)
    assert [b.milestone for b in badges] == [7, 30]


def test_zero_streak_unlocks_nothing():
    assert award_badges([], 0, now=_now) == []


def test_streak_below_next_milestone():
    owned = award_badges([], 1, now=_now)
    assert award_badges(owned, 6, now=_now) == []
