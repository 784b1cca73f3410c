from django.utils import timezone
from rest_framework import serializers
from rest_framework.fields import SkipField, empty

from .models import STATE_CHOICES, VOLATILITY_CHOICES


def now_ms() -> int:
    return int(timezone.now().timestamp() * 1000)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class CoercedChoiceField(serializers.ChoiceField):
    """Exact choice match, anything else becomes the fallback value"""

    def __init__(self, choices, fallback, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(choices, **kwargs)
        self.fallback = fallback

    def run_validation(self, data=empty):
        if isinstance(data, str) and data in self.choices:
            return data
        return self.fallback


class NumberOrOmitField(serializers.Field):
    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        if _is_number(data):
            return data
        raise SkipField()

    def to_representation(self, value):
        return value


class StringOrOmitField(serializers.Field):
    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        if isinstance(data, str):
            return data
        raise SkipField()

    def to_representation(self, value):
        return value


class MarketStateSubmissionSerializer(serializers.Serializer):
    """
    Coerces a webhook body into MarketState fields.

    Never fails validation: unknown values fall back to safe defaults and
    mistyped optional fields are dropped.
    """
    state = CoercedChoiceField(choices=STATE_CHOICES, fallback='UNKNOWN')
    volatility = CoercedChoiceField(choices=VOLATILITY_CHOICES, fallback='NORMAL')
    score = NumberOrOmitField()
    note = StringOrOmitField()

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        ts = data.get('ts', data.get('timestamp'))
        values['ts'] = ts if _is_number(ts) else now_ms()
        return values
