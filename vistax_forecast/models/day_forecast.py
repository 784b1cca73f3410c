from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .calendar_event import CalendarEvent


class DayStatus(str, Enum):
    """Readiness of the routine for one UTC day"""
    GOOD = 'GOOD'
    CAUTION = 'CAUTION'  # reserved, no rule produces it
    NO_RUN = 'NO_RUN'


@dataclass(frozen=True)
class DayFlags:
    is_friday: bool = False
    has_high_impact_usd: bool = False
    is_fomc_day: bool = False
    is_day_after_fomc: bool = False

    def any(self) -> bool:
        return self.is_friday or self.has_high_impact_usd or self.is_fomc_day or self.is_day_after_fomc

    def to_dict(self) -> Dict[str, bool]:
        return {
            'isFriday': self.is_friday,
            'hasHighImpactUsd': self.has_high_impact_usd,
            'isFomcDay': self.is_fomc_day,
            'isDayAfterFomc': self.is_day_after_fomc,
        }


@dataclass(frozen=True)
class DayForecast:
    date: str  # YYYY-MM-DD (UTC bucket)
    weekday: str
    status: DayStatus
    flags: DayFlags
    reasons: List[str] = field(default_factory=list)
    events: List[CalendarEvent] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'date': self.date,
            'weekday': self.weekday,
            'status': self.status.value,
            'reasons': list(self.reasons),
            'events': [ev.to_dict() for ev in self.events],
            'flags': self.flags.to_dict(),
        }
