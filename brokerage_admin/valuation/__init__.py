"""Display-time account valuation."""

from brokerage_admin.valuation.animator import (
    MS_PER_MINUTE,
    Trend,
    ValuationAnimator,
    ValuationSnapshot,
    ValuationState,
    datetime_to_minutes,
    minutes_to_datetime,
)
from brokerage_admin.valuation.ticker import ValuationTicker

__all__ = [
    "MS_PER_MINUTE",
    "Trend",
    "ValuationAnimator",
    "ValuationSnapshot",
    "ValuationState",
    "ValuationTicker",
    "datetime_to_minutes",
    "minutes_to_datetime",
]
