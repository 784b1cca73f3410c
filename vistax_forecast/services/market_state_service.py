import hmac
import logging
from typing import Any, Optional

from django.core.cache import BaseCache

from ..exceptions import InvalidSubmission, MarketStateConfigError, UnauthorizedSubmission
from ..models import MarketState
from ..serializers import MarketStateSubmissionSerializer

logger = logging.getLogger(__name__)

MARKET_STATE_KEY = 'vistax:market_state'
# Keys a stored record must carry to be read back
REQUIRED_FIELDS = ('state', 'volatility', 'ts')


class MarketStateStore:
    """Single-key repository over a Django cache backend"""

    def __init__(self, cache: BaseCache, key: str = MARKET_STATE_KEY):
        self.cache = cache
        self.key = key

    def get(self) -> Optional[MarketState]:
        value = self.cache.get(self.key)
        if value is None:
            return None
        if not isinstance(value, dict) or any(k not in value for k in REQUIRED_FIELDS):
            logger.warning(f"Ignoring malformed market state record under {self.key}")
            return None
        return MarketState.from_dict(value)

    def set(self, state: MarketState) -> None:
        # No expiry; the record lives until the next accepted write
        self.cache.set(self.key, state.to_dict(), timeout=None)


class MarketStateService:
    def __init__(self, store: MarketStateStore, secret: Optional[str]):
        self.store = store
        self.secret = secret

    def read(self) -> Optional[MarketState]:
        """Current record, or None if nothing was ever written. Public."""
        return self.store.get()

    def ensure_configured(self) -> None:
        if not self.secret:
            logger.error("Webhook secret is not configured")
            raise MarketStateConfigError()

    def is_authorized(self, candidate: Any) -> bool:
        if not isinstance(candidate, str):
            return False
        return hmac.compare_digest(candidate.encode('utf-8'), self.secret.encode('utf-8'))

    def submit(self, body: Any) -> MarketState:
        """
        Authorize and persist a webhook submission (last write wins).

        Raises MarketStateConfigError, InvalidSubmission or
        UnauthorizedSubmission without touching the stored record.
        """
        self.ensure_configured()

        if not isinstance(body, dict):
            raise InvalidSubmission('Request body must be a JSON object')

        if not self.is_authorized(body.get('secret')):
            logger.warning("Rejected market state submission with bad secret")
            raise UnauthorizedSubmission()

        serializer = MarketStateSubmissionSerializer(data=body)
        serializer.is_valid(raise_exception=True)
        state = MarketState(**serializer.validated_data)

        self.store.set(state)
        logger.info(f"Saved market state {state.state}/{state.volatility} at {state.ts}")
        return state
