from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Set

import pytz

from ..models import CalendarEvent
from .event_classifier import is_fomc

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

DayBuckets = Dict[str, List[CalendarEvent]]


def utc_midnight(dt: datetime) -> datetime:
    utc = dt.astimezone(pytz.UTC)
    return utc.replace(hour=0, minute=0, second=0, microsecond=0)


def ymd_utc(dt: datetime) -> str:
    return dt.astimezone(pytz.UTC).strftime('%Y-%m-%d')


def weekday_utc(dt: datetime) -> str:
    # Not strftime('%A'), which follows the process locale
    return WEEKDAYS[dt.astimezone(pytz.UTC).weekday()]


def window_dates(start: datetime, days: int = 7) -> List[datetime]:
    """UTC midnights of the display window, ascending"""
    first = utc_midnight(start)
    return [first + timedelta(days=i) for i in range(days)]


def bucket_events(events: Iterable[CalendarEvent]) -> DayBuckets:
    """
    Group events by UTC calendar date, keeping arrival order.

    Dates without events get no key. Every event passed in is bucketed,
    including ones outside the display window, so FOMC lookups can see
    the whole fetched snapshot.
    """
    by_day: DayBuckets = {}
    for ev in events:
        by_day.setdefault(ymd_utc(ev.instant), []).append(ev)
    return by_day


def fomc_days(buckets: DayBuckets) -> Set[str]:
    return {day for day, day_events in buckets.items() if any(is_fomc(ev) for ev in day_events)}
