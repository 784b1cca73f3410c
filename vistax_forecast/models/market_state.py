from dataclasses import dataclass
from typing import Dict, Optional

SYMBOL = 'XAUUSD'
TIMEFRAME = '5'

STATE_CHOICES = [
    ('RANGE', 'Range'),
    ('TREND', 'Trend'),
    ('UNKNOWN', 'Unknown'),
]

VOLATILITY_CHOICES = [
    ('LOW', 'Low Volatility'),
    ('NORMAL', 'Normal Volatility'),
    ('HIGH', 'High Volatility'),
]


@dataclass(frozen=True)
class MarketState:
    """Latest market state pushed by the TradingView webhook"""
    state: str
    volatility: str
    ts: int  # ms epoch
    score: Optional[float] = None
    note: Optional[str] = None
    symbol: str = SYMBOL
    timeframe: str = TIMEFRAME

    def to_dict(self) -> Dict:
        payload = {
            'symbol': self.symbol,
            'timeframe': self.timeframe,
            'state': self.state,
            'volatility': self.volatility,
            'ts': self.ts,
        }
        if self.score is not None:
            payload['score'] = self.score
        if self.note is not None:
            payload['note'] = self.note
        return payload

    @classmethod
    def from_dict(cls, data: Dict) -> 'MarketState':
        return cls(
            state=data['state'],
            volatility=data['volatility'],
            ts=data['ts'],
            score=data.get('score'),
            note=data.get('note'),
            symbol=data.get('symbol', SYMBOL),
            timeframe=data.get('timeframe', TIMEFRAME),
        )
