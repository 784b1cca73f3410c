import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Set

from django.utils import timezone

from ..models import CalendarEvent, DayFlags, DayForecast, DayStatus, to_iso_utc
from .calendar_normalizer import CalendarNormalizer
from .calendar_source import CalendarSource
from .day_bucketer import DayBuckets, bucket_events, fomc_days, utc_midnight, weekday_utc, window_dates, ymd_utc
from .event_classifier import is_relevant

logger = logging.getLogger(__name__)

FORECAST_DAYS = 7

# VistaX routine window in GMT
DEFAULT_ROUTINE = {'startGmt': '09:35', 'endGmt': '10:50'}

REASON_FRIDAY = 'NO trade Fridays'
REASON_FOMC = 'FOMC day'
REASON_DAY_AFTER_FOMC = 'Day after FOMC'
REASON_HIGH_IMPACT_USD = 'High-impact USD news day (red folder routine)'

DISCLAIMER = [
    'This forecast is based on one commonly used VistaX routine many kazpa members have seen success with.',
    'You are free to use VistaX however you want.',
    'Not financial advice. No guarantees. You are responsible for all trading decisions.',
    'Always confirm your own news filters and trading plan before running any automation.',
]

TOOLS = {
    'gmtConverter': 'https://www.worldtimebuddy.com/',
    'newsCalendar': 'https://www.forexfactory.com/',
}


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def forecast_day(day: datetime, buckets: DayBuckets, fomc: Set[str]) -> DayForecast:
    """Flags, reasons and status for one UTC date"""
    ymd = ymd_utc(day)
    weekday = weekday_utc(day)

    day_events = sorted(buckets.get(ymd, []), key=lambda ev: ev.instant)

    flags = DayFlags(
        is_friday=weekday == 'Friday',
        # buckets only hold red folder USD events, so presence is enough
        has_high_impact_usd=len(day_events) > 0,
        is_fomc_day=ymd in fomc,
        is_day_after_fomc=ymd_utc(day - timedelta(days=1)) in fomc,
    )

    reasons = []
    if flags.is_friday:
        reasons.append(REASON_FRIDAY)
    if flags.is_fomc_day:
        reasons.append(REASON_FOMC)
    if flags.is_day_after_fomc:
        reasons.append(REASON_DAY_AFTER_FOMC)
    if flags.has_high_impact_usd:
        reasons.append(REASON_HIGH_IMPACT_USD)

    status = DayStatus.NO_RUN if flags.any() else DayStatus.GOOD

    return DayForecast(
        date=ymd,
        weekday=weekday,
        status=status,
        flags=flags,
        reasons=_dedupe(reasons),
        events=day_events,
    )


def assemble_days(buckets: DayBuckets, fomc: Set[str], start: datetime,
                  days: int = FORECAST_DAYS) -> List[DayForecast]:
    """
    Build the day-by-day forecast starting at the UTC midnight of ``start``.

    The day-after-FOMC check on the first day looks at the date before the
    window; it is only true when that date is part of the fetched snapshot.
    """
    return [forecast_day(day, buckets, fomc) for day in window_dates(start, days)]


class ForecastService:
    def __init__(self, calendar_source: CalendarSource, normalizer: Optional[CalendarNormalizer] = None,
                 routine: Optional[Dict[str, str]] = None, days: int = FORECAST_DAYS,
                 clock: Callable[[], datetime] = timezone.now):
        self.calendar_source = calendar_source
        self.normalizer = normalizer or CalendarNormalizer(calendar_source.provider, clock=clock)
        self.routine = dict(routine or DEFAULT_ROUTINE)
        self.days = days
        self.clock = clock

    def relevant_events(self, start: datetime, end: datetime) -> Dict:
        """Fetch, normalize and filter to red folder USD events"""
        records = self.calendar_source.fetch(start, end)
        normalized = self.normalizer.normalize_all(records)
        relevant = [ev for ev in normalized.events if is_relevant(ev)]
        logger.info(
            f"Calendar snapshot: {len(normalized.events)} events, "
            f"{len(relevant)} high-impact USD, {normalized.parse_failures} parse failures"
        )
        return {
            'events': relevant,
            'fetched': len(normalized.events),
            'parse_failures': normalized.parse_failures,
        }

    def build_forecast(self, now: Optional[datetime] = None) -> Dict:
        """
        Compute the forecast response body.

        CalendarSourceError propagates: there is no partial forecast.
        """
        now = now or self.clock()
        start = utc_midnight(now)
        end = start + timedelta(days=self.days)

        snapshot = self.relevant_events(start, end)
        events: List[CalendarEvent] = snapshot['events']

        buckets = bucket_events(events)
        fomc = fomc_days(buckets)
        days = assemble_days(buckets, fomc, start, self.days)

        no_run = sum(1 for d in days if d.status == DayStatus.NO_RUN)
        logger.info(f"Forecast {ymd_utc(start)}: {no_run}/{len(days)} NO_RUN days, FOMC days {sorted(fomc)}")

        return {
            'ok': True,
            'routine': self.routine,
            'generatedAtUtc': to_iso_utc(self.clock()),
            'rangeUtc': {'start': to_iso_utc(start), 'end': to_iso_utc(end)},
            'days': [d.to_dict() for d in days],
            'disclaimer': list(DISCLAIMER),
            'sources': {
                'calendar': self.calendar_source.description,
                'tools': dict(TOOLS),
            },
            'diagnostics': {
                'eventsFetched': snapshot['fetched'],
                'eventsRelevant': len(events),
                'parseFailures': snapshot['parse_failures'],
            },
        }
