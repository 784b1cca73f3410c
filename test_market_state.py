import time

import pytest
from django.core.cache import caches

from vistax_forecast.exceptions import InvalidSubmission, MarketStateConfigError, UnauthorizedSubmission
from vistax_forecast.models import MarketState
from vistax_forecast.services.market_state_service import MarketStateService, MarketStateStore

SECRET = 's3cret'


@pytest.fixture
def store():
    return MarketStateStore(caches['market_state'])


@pytest.fixture
def service(store):
    return MarketStateService(store, SECRET)


def test_read_before_any_write(service):
    assert service.read() is None


def test_accepted_submission_is_stored(service):
    state = service.submit({
        'secret': SECRET,
        'state': 'TREND',
        'volatility': 'HIGH',
        'score': 0.82,
        'note': 'breakout above Asian high',
        'ts': 1709294400000,
    })

    assert state == MarketState(state='TREND', volatility='HIGH', ts=1709294400000,
                                score=0.82, note='breakout above Asian high')
    assert service.read() == state
    assert service.read().to_dict() == {
        'symbol': 'XAUUSD',
        'timeframe': '5',
        'state': 'TREND',
        'volatility': 'HIGH',
        'ts': 1709294400000,
        'score': 0.82,
        'note': 'breakout above Asian high',
    }


def test_wrong_secret_leaves_state_unchanged(service):
    original = service.submit({'secret': SECRET, 'state': 'RANGE', 'ts': 1})

    with pytest.raises(UnauthorizedSubmission):
        service.submit({'secret': 'guess', 'state': 'TREND', 'ts': 2})
    with pytest.raises(UnauthorizedSubmission):
        service.submit({'state': 'TREND', 'ts': 3})

    assert service.read() == original


def test_non_string_secret_rejected(service):
    with pytest.raises(UnauthorizedSubmission):
        service.submit({'secret': 12345})


def test_invalid_values_coerced(service):
    state = service.submit({
        'secret': SECRET,
        'state': 'invalid_value',
        'volatility': 'EXTREME',
        'score': 'high',
        'note': 42,
    })

    assert state.state == 'UNKNOWN'
    assert state.volatility == 'NORMAL'
    assert state.score is None
    assert state.note is None
    assert 'score' not in state.to_dict()
    assert 'note' not in state.to_dict()


def test_choices_are_case_sensitive(service):
    state = service.submit({'secret': SECRET, 'state': 'trend', 'volatility': 'low'})
    assert (state.state, state.volatility) == ('UNKNOWN', 'NORMAL')


def test_boolean_score_dropped(service):
    assert service.submit({'secret': SECRET, 'score': True}).score is None


def test_missing_timestamp_defaults_to_now(service):
    before = int(time.time() * 1000)
    state = service.submit({'secret': SECRET, 'state': 'RANGE'})
    after = int(time.time() * 1000)

    assert before <= state.ts <= after


def test_timestamp_alias_accepted(service):
    assert service.submit({'secret': SECRET, 'timestamp': 1700000000000}).ts == 1700000000000


def test_last_write_wins(service):
    service.submit({'secret': SECRET, 'state': 'RANGE', 'ts': 10})
    service.submit({'secret': SECRET, 'state': 'TREND', 'ts': 5})

    assert service.read().state == 'TREND'
    assert service.read().ts == 5


def test_missing_secret_configuration(store):
    service = MarketStateService(store, None)
    with pytest.raises(MarketStateConfigError):
        service.ensure_configured()
    with pytest.raises(MarketStateConfigError):
        service.submit({'secret': '', 'state': 'RANGE'})
    assert store.get() is None


def test_non_object_body_rejected(service):
    with pytest.raises(InvalidSubmission):
        service.submit(['secret', SECRET])


@pytest.mark.parametrize('record', [
    {'ts': 1},
    {'state': 'TREND', 'volatility': 'HIGH'},
    'TREND',
])
def test_malformed_record_reads_as_absent(store, record):
    caches['market_state'].set(store.key, record, timeout=None)

    assert store.get() is None
