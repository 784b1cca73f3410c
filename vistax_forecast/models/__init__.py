from .calendar_event import CalendarEvent, to_iso_utc
from .day_forecast import DayStatus, DayFlags, DayForecast
from .market_state import MarketState, STATE_CHOICES, VOLATILITY_CHOICES, SYMBOL, TIMEFRAME

__all__ = [
    'CalendarEvent',
    'DayStatus',
    'DayFlags',
    'DayForecast',
    'MarketState',
    'STATE_CHOICES',
    'VOLATILITY_CHOICES',
    'SYMBOL',
    'TIMEFRAME',
    'to_iso_utc',
]
