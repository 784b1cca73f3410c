from datetime import datetime

import pytest
import pytz

from vistax_forecast.services.calendar_normalizer import (
    CalendarNormalizer,
    FOREX_FACTORY,
    TRADING_ECONOMICS,
    normalize_impact,
    parse_instant,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=pytz.UTC)


def fixed_clock():
    return NOW


@pytest.mark.parametrize('raw, expected', [
    ('3', 'High'),
    ('High', 'High'),
    ('high', 'High'),
    (' HIGH ', 'High'),
    ('2', 'Medium'),
    ('med', 'Medium'),
    ('Medium', 'Medium'),
    ('1', 'Low'),
    ('low', 'Low'),
    (3, 'High'),
    ('Holiday', 'Holiday'),
    (None, ''),
])
def test_normalize_impact(raw, expected):
    assert normalize_impact(raw) == expected


def test_forex_factory_record():
    normalizer = CalendarNormalizer(FOREX_FACTORY, clock=fixed_clock)
    ev = normalizer.normalize({
        'title': '  Core CPI m/m ',
        'country': 'usd',
        'impact': 'High',
        'date': '2024-03-12T08:30:00-04:00',
    })

    assert ev.title == 'Core CPI m/m'
    assert ev.currency == 'USD'
    assert ev.impact == 'High'
    assert ev.instant == datetime(2024, 3, 12, 12, 30, tzinfo=pytz.UTC)
    assert ev.source == 'ForexFactory'


def test_candidate_priority_first_present_wins():
    normalizer = CalendarNormalizer(FOREX_FACTORY, clock=fixed_clock)
    ev = normalizer.normalize({
        'event': 'Secondary Title',
        'title': 'Primary Title',
        'Currency': 'EUR',
        'currency': 'USD',
        'Impact': '1',
        'importance': '3',
    })

    assert ev.title == 'Primary Title'
    assert ev.currency == 'USD'
    assert ev.impact == 'Low'


def test_missing_fields_fall_back_to_defaults():
    normalizer = CalendarNormalizer(FOREX_FACTORY, clock=fixed_clock)
    ev = normalizer.normalize({})

    assert ev.title == 'Economic Event'
    assert ev.currency is None
    assert ev.impact is None
    assert ev.instant == NOW


def test_blank_currency_is_absent():
    normalizer = CalendarNormalizer(FOREX_FACTORY, clock=fixed_clock)
    ev = normalizer.normalize({'title': 'Bank Holiday', 'currency': '   ', 'date': '2024-03-04'})

    assert ev.currency is None
    assert ev.instant == datetime(2024, 3, 4, tzinfo=pytz.UTC)


def test_unparseable_date_uses_now():
    normalizer = CalendarNormalizer(FOREX_FACTORY, clock=fixed_clock)
    ev = normalizer.normalize({'title': 'NFP', 'date': 'next tuesday-ish'})

    assert ev.instant == NOW


def test_trading_economics_record_is_usd_high():
    normalizer = CalendarNormalizer(TRADING_ECONOMICS, clock=fixed_clock)
    ev = normalizer.normalize({'Event': 'Fed Interest Rate Decision', 'Date': '2024-03-20T18:00:00'})

    assert ev.title == 'Fed Interest Rate Decision'
    assert ev.currency == 'USD'
    assert ev.impact == 'High'
    assert ev.instant == datetime(2024, 3, 20, 18, 0, tzinfo=pytz.UTC)
    assert ev.source == 'TradingEconomics'


def test_trading_economics_skips_empty_values():
    normalizer = CalendarNormalizer(TRADING_ECONOMICS, clock=fixed_clock)
    ev = normalizer.normalize({'Event': '', 'event': 'GDP q/q', 'Date': '', 'date': '2024-03-28T12:30:00Z'})

    assert ev.title == 'GDP q/q'
    assert ev.instant == datetime(2024, 3, 28, 12, 30, tzinfo=pytz.UTC)


def test_normalize_all_counts_parse_failures():
    normalizer = CalendarNormalizer(FOREX_FACTORY, clock=fixed_clock)
    result = normalizer.normalize_all([
        {'title': 'A', 'date': '2024-03-04T10:00:00Z'},
        {'title': 'B'},
        {'title': 'C', 'date': 'garbage'},
        'not a record',
    ])

    assert len(result.events) == 4
    assert result.parse_failures == 3


def test_unknown_provider_rejected():
    with pytest.raises(ValueError):
        CalendarNormalizer('Bloomberg')


class TestParseInstant:
    def test_epoch_milliseconds(self):
        assert parse_instant(1709294400000) == datetime(2024, 3, 1, 12, 0, tzinfo=pytz.UTC)

    def test_zulu_suffix(self):
        assert parse_instant('2024-03-01T12:00:00Z') == NOW

    def test_booleans_and_blanks_rejected(self):
        assert parse_instant(True) is None
        assert parse_instant('   ') is None
        assert parse_instant({'when': 'now'}) is None

    def test_out_of_range_values_rejected(self):
        assert parse_instant('2024-13-45T99:00:00') is None
