from .forecast_views import *
from .market_state_views import *

__all__ = [
    # Forecast views
    'vistax_forecast',

    # Market state views
    'tv_signal',
]
