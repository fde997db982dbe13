"""Week-boundary and date helpers.

Weeks run Monday 00:00 to Sunday 23:59:59.999999. Week ``k`` of a loan is
the ISO week that contains ``sign_date + 7 * k`` days, so week 0 is the
signing week and week 1 is the first week a payment is expected.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta

from loan_chronology.models.chronology import WeekSlot

ONE_WEEK = timedelta(days=7)
END_OF_DAY = time(23, 59, 59, 999999)


def to_datetime(value: date | datetime | str | None) -> datetime | None:
    """Normalize a date-like value to a naive datetime.

    Dates become midnight. Aware datetimes are converted to the local
    time zone and made naive, the same clock as ``datetime.now()``, so a
    Sunday evening payment stays in its Sunday week. ``None`` and
    unparseable strings return ``None``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return None


def week_monday(moment: datetime) -> datetime:
    """Midnight of the Monday of ``moment``'s week."""
    start = datetime.combine(moment.date(), time.min)
    return start - timedelta(days=moment.weekday())


def week_sunday_end(moment: datetime) -> datetime:
    """Last instant of the Sunday of ``moment``'s week."""
    sunday = moment.date() + timedelta(days=6 - moment.weekday())
    return datetime.combine(sunday, END_OF_DAY)


def due_date(sign_date: datetime, week_index: int) -> datetime:
    """Nominal due date of a week (may fall mid-week)."""
    return sign_date + week_index * ONE_WEEK


def week_slot(sign_date: datetime, week_index: int) -> WeekSlot:
    """Build the slot of week ``week_index`` relative to ``sign_date``."""
    due = due_date(sign_date, week_index)
    return WeekSlot(
        week_index=week_index,
        due_date=due,
        start=week_monday(due),
        end=week_sunday_end(due),
    )


def week_index_of(sign_date: datetime, moment: datetime) -> int:
    """Week number of ``moment`` counted from the signing week (week 0).

    Negative for moments before the signing week.
    """
    return (week_monday(moment) - week_monday(sign_date)).days // 7


def weeks_between(start: datetime, end: datetime) -> int:
    """Whole weeks needed to cover ``start`` to ``end`` (ceil)."""
    return math.ceil((end - start) / ONE_WEEK)


def format_date(moment: datetime, fmt: str = "%d/%m/%Y") -> str:
    return moment.strftime(fmt)
