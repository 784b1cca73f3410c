from django.conf import settings
from django.core.cache import caches
import logging

from .calendar_normalizer import CalendarNormalizer, normalize_impact
from .calendar_source import (
    CalendarSource,
    ForexFactoryCalendarSource,
    StaticCalendarSource,
    TradingEconomicsCalendarSource,
)
from .forecast_service import ForecastService
from .market_state_service import MarketStateService, MarketStateStore

logger = logging.getLogger('api_requests')


def build_calendar_source() -> CalendarSource:
    """Pick the calendar provider from settings"""
    provider = settings.VISTAX_CALENDAR_PROVIDER
    timeout = settings.VISTAX_CALENDAR_FETCH_TIMEOUT

    if provider == 'static':
        path = settings.VISTAX_STATIC_CALENDAR_PATH
        logger.info(f"Using STATIC calendar source ({path or 'empty'})")
        return StaticCalendarSource.from_file(path) if path else StaticCalendarSource()
    if provider == 'tradingeconomics':
        return TradingEconomicsCalendarSource(settings.VISTAX_TE_API_KEY, timeout=timeout)
    if provider == 'forexfactory':
        return ForexFactoryCalendarSource(timeout=timeout)

    raise ValueError(f"Unknown calendar provider: {provider}")


def build_forecast_service() -> ForecastService:
    return ForecastService(build_calendar_source(), routine=settings.VISTAX_ROUTINE)


def build_market_state_service() -> MarketStateService:
    store = MarketStateStore(caches[settings.VISTAX_MARKET_STATE_CACHE])
    return MarketStateService(store, settings.VISTAX_WEBHOOK_SECRET)


__all__ = [
    'build_calendar_source',
    'build_forecast_service',
    'build_market_state_service',
    'CalendarNormalizer',
    'CalendarSource',
    'ForexFactoryCalendarSource',
    'TradingEconomicsCalendarSource',
    'StaticCalendarSource',
    'ForecastService',
    'MarketStateService',
    'MarketStateStore',
    'normalize_impact',
]
