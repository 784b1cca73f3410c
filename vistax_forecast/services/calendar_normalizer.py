"""
Calendar Normalizer

Maps loosely structured provider records into CalendarEvent objects.
Provider schemas drift, so every target attribute is read through an
ordered list of candidate keys (see PROVIDER_RULES).
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import pytz
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from ..models import CalendarEvent

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Economic Event'

FOREX_FACTORY = 'ForexFactory'
TRADING_ECONOMICS = 'TradingEconomics'
STATIC = 'Static'


@dataclass(frozen=True)
class FieldRule:
    """Ordered candidate keys for one target attribute"""
    candidates: Tuple[str, ...] = ()
    default: Any = None
    fixed: Any = None
    skip_falsy: bool = False  # treat "", 0 like a missing key

    def extract(self, record: Dict) -> Any:
        if self.fixed is not None:
            return self.fixed
        for key in self.candidates:
            value = record.get(key)
            if value is None or (self.skip_falsy and not value):
                continue
            return value
        return self.default


FOREX_FACTORY_RULES = {
    'title': FieldRule(('title', 'event', 'name', 'Event'), default=DEFAULT_TITLE),
    'currency': FieldRule(('currency', 'ccy', 'Currency', 'country', 'Country'), default=''),
    'impact': FieldRule(('impact', 'Impact', 'importance', 'Importance', 'impactLabel')),
    'instant': FieldRule(('datetime', 'dateTime', 'DateTime', 'timestamp', 'time',
                          'date', 'Date', 'iso', 'isoDate')),
}

# The TradingEconomics request is already scoped to the US at importance=3
TRADING_ECONOMICS_RULES = {
    'title': FieldRule(('Event', 'event'), default=DEFAULT_TITLE, skip_falsy=True),
    'currency': FieldRule(fixed='USD'),
    'impact': FieldRule(fixed='High'),
    'instant': FieldRule(('Date', 'date', 'DateTime', 'datetime'), skip_falsy=True),
}

PROVIDER_RULES = {
    FOREX_FACTORY: FOREX_FACTORY_RULES,
    TRADING_ECONOMICS: TRADING_ECONOMICS_RULES,
    STATIC: FOREX_FACTORY_RULES,
}


def normalize_impact(value: Any) -> str:
    """Map provider impact encodings onto High/Medium/Low"""
    if value is None:
        return ''
    s = str(value).strip()

    lowered = s.lower()
    if lowered == 'high':
        return 'High'
    if lowered in ('medium', 'med'):
        return 'Medium'
    if lowered == 'low':
        return 'Low'

    # Numeric scale used by some providers (3 = highest severity)
    if s == '3':
        return 'High'
    if s == '2':
        return 'Medium'
    if s == '1':
        return 'Low'

    return s


def parse_instant(raw: Any) -> Optional[datetime]:
    """
    Parse a provider date/time value into an aware UTC datetime.

    Numbers are epoch milliseconds. Strings may be ISO-8601 date-times
    (naive values are read as UTC) or bare YYYY-MM-DD dates.
    Returns None when the value cannot be interpreted.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000.0, tz=pytz.UTC)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(raw, str) or not raw.strip():
        return None

    text = raw.strip()
    try:
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            if day is None:
                return None
            parsed = datetime(day.year, day.month, day.day)
    except ValueError:
        return None

    if timezone.is_naive(parsed):
        parsed = parsed.replace(tzinfo=pytz.UTC)
    return parsed.astimezone(pytz.UTC)


@dataclass
class NormalizationResult:
    events: List[CalendarEvent] = field(default_factory=list)
    parse_failures: int = 0


class CalendarNormalizer:
    def __init__(self, provider: str = FOREX_FACTORY, clock: Callable[[], datetime] = timezone.now):
        if provider not in PROVIDER_RULES:
            raise ValueError(f"Unknown calendar provider: {provider}")
        self.provider = provider
        self.rules = PROVIDER_RULES[provider]
        self.clock = clock

    def _normalize(self, record: Any) -> Tuple[CalendarEvent, bool]:
        if not isinstance(record, dict):
            record = {}

        title = str(self.rules['title'].extract(record)).strip()

        currency_raw = self.rules['currency'].extract(record)
        currency = str(currency_raw).strip().upper() if currency_raw is not None else ''

        impact = normalize_impact(self.rules['impact'].extract(record))

        instant = parse_instant(self.rules['instant'].extract(record))
        parsed = instant is not None
        if not parsed:
            # Known limitation: unparseable dates are bucketed as "now"
            instant = self.clock()

        event = CalendarEvent(
            title=title,
            instant=instant,
            currency=currency or None,
            impact=impact or None,
            source=self.provider,
        )
        return event, parsed

    def normalize(self, record: Any) -> CalendarEvent:
        event, _ = self._normalize(record)
        return event

    def normalize_all(self, records: Iterable[Any]) -> NormalizationResult:
        result = NormalizationResult()
        for record in records:
            event, parsed = self._normalize(record)
            result.events.append(event)
            if not parsed:
                result.parse_failures += 1

        if result.parse_failures:
            logger.warning(
                f"{result.parse_failures} of {len(result.events)} {self.provider} records "
                f"had no parseable date; defaulted to current time"
            )
        return result
