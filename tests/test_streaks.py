# imports
from datetime import date, timedelta

from habitflow.core.models import CheckRecord
from habitflow.core.streaks import calculate_streaks, current_streak, longest_streak

TODAY = date(2024, 3, 15)


# build completed records for the given day offsets (0 = today)
def _records(*offsets, completed=True):
    return [
        CheckRecord(
            check_id=f"c{i}",
            habit_id="h1",
            date=(TODAY - timedelta(days=offset)).isoformat(),
            completed=completed,
        )
        for i, offset in enumerate(offsets)
    ]


def test_no_records_gives_zero_streaks():
    result = calculate_streaks([], TODAY)
    assert result.current_streak == 0
    assert result.longest_streak == 0


def test_today_and_yesterday():
    result = calculate_streaks(_records(0, 1), TODAY)
    assert result.current_streak == 2
    assert result.longest_streak == 2


def test_gap_breaks_current_but_not_longest():
    """
    checks on day 1, 2, 3 and 5 with today = day 5:
    current streak stops at the missing day 4, longest is days 1-3
    """
    # day 5 = today (offset 0), day 4 missing, days 3..1 = offsets 2..4
    result = calculate_streaks(_records(0, 2, 3, 4), TODAY)
    assert result.current_streak == 1
    assert result.longest_streak == 3


def test_yesterday_keeps_streak_alive():
    # not checked today yet, but yesterday and the day before were
    result = calculate_streaks(_records(1, 2, 3), TODAY)
    assert result.current_streak == 3
    assert result.longest_streak == 3


def test_grace_is_only_one_day():
    # last check two days ago: the streak is broken
    result = calculate_streaks(_records(2, 3, 4), TODAY)
    assert result.current_streak == 0
    assert result.longest_streak == 3


def test_uncompleted_records_are_ignored():
    records = _records(0, 1) + _records(2, completed=False)
    result = calculate_streaks(records, TODAY)
    assert result.current_streak == 2


def test_longest_streak_is_historical_maximum():
    days = {date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4),
            date(2024, 2, 10), date(2024, 2, 11)}
    assert longest_streak(days) == 4
    # independent of the reference day
    assert current_streak(days, TODAY) == 0


def test_streak_across_month_and_leap_day():
    days = {date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)}
    assert longest_streak(days) == 3
    assert current_streak(days, date(2024, 3, 1)) == 3
