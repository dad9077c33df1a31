"""Calendar helpers for period buckets."""

import calendar
from datetime import date, timedelta

from cashflow_ledger.domain.models import Granularity


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the month length."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(day.day, last_day))


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last dates of the month containing day."""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def week_start(day: date) -> date:
    """Return the Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def bucket_bounds(
    granularity: Granularity,
    anchor: date,
    offset: int,
) -> tuple[date, date]:
    """Return the inclusive date range of the bucket at an offset.

    Yearly buckets step through calendar months exactly like monthly ones.
    """
    if granularity == Granularity.DAILY:
        start = anchor + timedelta(days=offset)
        return start, start
    if granularity == Granularity.WEEKLY:
        start = week_start(anchor) + timedelta(weeks=offset)
        return start, start + timedelta(days=6)
    return month_bounds(add_months(anchor.replace(day=1), offset))


def shift_anchor(anchor: date, granularity: Granularity, steps: int) -> date:
    """Move a projection anchor forward or backward by whole periods."""
    if granularity == Granularity.DAILY:
        return anchor + timedelta(days=steps)
    if granularity == Granularity.WEEKLY:
        return anchor + timedelta(weeks=steps)
    if granularity == Granularity.MONTHLY:
        return add_months(anchor, steps)
    return add_months(anchor, steps * 12)


__all__ = [
    "add_months",
    "month_bounds",
    "week_start",
    "bucket_bounds",
    "shift_anchor",
]
