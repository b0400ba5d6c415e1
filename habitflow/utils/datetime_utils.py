import re
from datetime import date, datetime, timedelta
from typing import List, Union

import pytz

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# strftime("%b") зависит от локали, метки недель всегда на английском
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DayLike = Union[str, date]


def now_in(tz_name: str = "UTC") -> datetime:
    return datetime.now(pytz.timezone(tz_name))


def parse_day(value: DayLike) -> date:
    """Календарный день из строки YYYY-MM-DD или date (datetime обрезается до дня)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ValueError(f"Ожидается дата в формате YYYY-MM-DD: {value!r}")
    return date.fromisoformat(value)


def format_day(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def week_start(value: date) -> date:
    """Понедельник недели, в которую попадает день"""
    return value - timedelta(days=value.weekday())


def week_label(value: date) -> str:
    return f"{MONTH_LABELS[value.month - 1]} {value.day:02d}"


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    if value.month == 12:
        return date(value.year, 12, 31)
    return date(value.year, value.month + 1, 1) - timedelta(days=1)


def date_range(start: date, end: date) -> List[date]:
    if end < start:
        return []
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]
