"""
Economic calendar feeds.

Each source returns the raw provider records for a date range; mapping
them onto CalendarEvent is the normalizer's job. A failed fetch raises
CalendarSourceError and is never retried.
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from ..exceptions import CalendarSourceError
from .calendar_normalizer import FOREX_FACTORY, STATIC, TRADING_ECONOMICS

logger = logging.getLogger(__name__)

USER_AGENT = 'kazpa-vistax-forecast/1.0'


def _unwrap_records(data: Any) -> List[Dict]:
    """The feed is usually a list, but some variants wrap it in an object"""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        records = data.get('events')
        if records is None:
            records = data.get('data')
        if isinstance(records, list):
            return records
    return []


class CalendarSource:
    provider = STATIC
    description = ''

    def fetch(self, start: datetime, end: datetime) -> List[Dict]:
        raise NotImplementedError


class HttpCalendarSource(CalendarSource):
    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0):
        # Injected for tests; otherwise each fetch is a one-off requests.get
        self.session = session
        self.timeout = timeout

    def _get_json(self, url: str, **kwargs) -> Any:
        try:
            getter = self.session.get if self.session is not None else requests.get
            r = getter(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{self.provider} request failed: {str(e)}")
            raise CalendarSourceError(f"{self.provider} error: {str(e)}") from e

        if not r.ok:
            logger.error(f"{self.provider} returned HTTP {r.status_code}")
            raise CalendarSourceError(f"{self.provider} error: {r.status_code}")

        try:
            return r.json()
        except ValueError as e:
            raise CalendarSourceError(f"{self.provider} error: invalid JSON payload") from e


class ForexFactoryCalendarSource(HttpCalendarSource):
    """
    ForexFactory weekly export (JSON), a free source.

    The export only covers the current week, so the requested range is
    ignored and the caller sees whatever the week contains.
    """
    provider = FOREX_FACTORY
    description = 'ForexFactory weekly export (USD + High impact filtered)'
    url = 'https://nfs.faireconomy.media/ff_calendar_thisweek.json'

    def fetch(self, start: datetime, end: datetime) -> List[Dict]:
        data = self._get_json(self.url, headers={'User-Agent': USER_AGENT})
        records = _unwrap_records(data)
        logger.info(f"Fetched {len(records)} ForexFactory records")
        return records


class TradingEconomicsCalendarSource(HttpCalendarSource):
    """Trading Economics US calendar, importance=3 ("red folder") only"""
    provider = TRADING_ECONOMICS
    description = 'Trading Economics US calendar (importance=3)'
    base_url = 'https://api.tradingeconomics.com/calendar/country/united%20states'

    def __init__(self, api_key: Optional[str], **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key

    def fetch(self, start: datetime, end: datetime) -> List[Dict]:
        if not self.api_key:
            raise CalendarSourceError('Missing TE_API_KEY env var')

        url = f"{self.base_url}/{start.strftime('%Y-%m-%d')}/{end.strftime('%Y-%m-%d')}"
        data = self._get_json(url, params={'c': self.api_key, 'importance': 3})
        records = data if isinstance(data, list) else []
        logger.info(f"Fetched {len(records)} TradingEconomics records")
        return records


class StaticCalendarSource(CalendarSource):
    """Fixed records for development and tests, no network access"""
    provider = STATIC
    description = 'Static calendar records (development)'

    def __init__(self, records: Optional[List[Dict]] = None):
        self.records = list(records or [])

    @classmethod
    def from_file(cls, path: str) -> 'StaticCalendarSource':
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls(_unwrap_records(data))

    def fetch(self, start: datetime, end: datetime) -> List[Dict]:
        logger.info(f"Serving {len(self.records)} static calendar records")
        return list(self.records)
