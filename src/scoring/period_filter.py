# src/scoring/period_filter.py
"""Calendar window helpers for selecting trades by period."""
import calendar
from datetime import date, datetime, timedelta
from typing import Iterable

from dateutil.relativedelta import relativedelta

from src.journal.models import Trade
from src.scoring.models import Period


def week_start(day: date) -> date:
    """First day (Sunday) of the week containing ``day``."""
    # weekday() returns 0=Monday ... 6=Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def same_period(first: datetime, second: datetime, period: Period) -> bool:
    """Check whether two timestamps fall in the same calendar period.

    Only the local calendar date is compared; no timezone normalization
    is applied.
    """
    a, b = first.date(), second.date()

    if period == Period.DAILY:
        return a == b
    elif period == Period.WEEKLY:
        return week_start(a) == week_start(b)
    elif period == Period.MONTHLY:
        return (a.year, a.month) == (b.year, b.month)
    elif period == Period.YEARLY:
        return a.year == b.year
    return False


def trades_for_period(
    trades: Iterable[Trade], period: Period, target_date: datetime
) -> list[Trade]:
    """Select trades in the same day, week, month or year as ``target_date``."""
    return [t for t in trades if same_period(t.date, target_date, period)]


def is_current_period(target_date: datetime, period: Period, now: datetime) -> bool:
    """Whether ``target_date`` lies in the period that contains ``now``."""
    return same_period(target_date, now, period)


def shift_period(reference: datetime, period: Period, steps: int) -> datetime:
    """Move ``reference`` back by ``steps`` periods (negative moves forward)."""
    if period == Period.DAILY:
        return reference - timedelta(days=steps)
    elif period == Period.WEEKLY:
        return reference - timedelta(weeks=steps)
    elif period == Period.MONTHLY:
        return reference - relativedelta(months=steps)
    return reference - relativedelta(years=steps)


def previous_period_date(target_date: datetime, period: Period) -> datetime:
    """A date inside the period immediately preceding ``target_date``'s."""
    return shift_period(target_date, period, 1)


def period_length_days(period: Period, target_date: datetime) -> int:
    """Number of calendar days in the period containing ``target_date``."""
    if period == Period.DAILY:
        return 1
    elif period == Period.WEEKLY:
        return 7
    elif period == Period.MONTHLY:
        return calendar.monthrange(target_date.year, target_date.month)[1]
    return 366 if calendar.isleap(target_date.year) else 365


def period_start(period: Period, day: date) -> date:
    """First calendar day of the period containing ``day``."""
    if period == Period.DAILY:
        return day
    elif period == Period.WEEKLY:
        return week_start(day)
    elif period == Period.MONTHLY:
        return day.replace(day=1)
    return day.replace(month=1, day=1)


def evaluated_period_days(period: Period, target_date: datetime, now: datetime) -> int:
    """Days of the period over which trade frequency is measured.

    A past period counts in full. The period containing ``now`` only counts
    the days from its start through today.
    """
    full_length = period_length_days(period, target_date)
    if not is_current_period(target_date, period, now):
        return full_length

    elapsed = (now.date() - period_start(period, now.date())).days + 1
    return min(full_length, elapsed)


def historical_trades(
    trades: Iterable[Trade], target_date: datetime, lookback_days: int
) -> list[Trade]:
    """Trades within ``lookback_days`` up to and including ``target_date``."""
    cutoff = target_date - timedelta(days=lookback_days)
    return [t for t in trades if cutoff <= t.date <= target_date]
