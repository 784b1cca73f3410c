from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

import pytz


def to_iso_utc(dt: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix"""
    return dt.astimezone(pytz.UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class CalendarEvent:
    """Normalized economic calendar event"""
    title: str
    instant: datetime
    currency: Optional[str] = None   # e.g. "USD"
    impact: Optional[str] = None     # e.g. "High", "Medium", "Low"
    source: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'title': self.title,
            'currency': self.currency,
            'impact': self.impact,
            'datetimeUtc': to_iso_utc(self.instant),
            'source': self.source,
        }
