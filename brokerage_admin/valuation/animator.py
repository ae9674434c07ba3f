"""Display-time valuation: fluctuate before the settlement instant, then lock.

Nothing here writes to the store. The stored ``estimated_total`` and
``profit`` are the anchors; the animator only derives what to display.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from brokerage_admin.models.brokerage import StockAccount
from brokerage_admin.timestamps import EPOCH

MS_PER_MINUTE = 60000
DEFAULT_BAND = 0.05


class ValuationState(str, Enum):
    LOCKED = "LOCKED"
    FLUCTUATING = "FLUCTUATING"


class Trend(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    FLAT = "FLAT"


def _trend(current: float, previous: float) -> Trend:
    if current > previous:
        return Trend.UP
    if current < previous:
        return Trend.DOWN
    return Trend.FLAT


def minutes_to_datetime(minutes: int | None) -> datetime | None:
    """Settlement instant from whole minutes since epoch; ``None`` when unset or zero."""
    if not minutes:
        return None
    return datetime.fromtimestamp(minutes * MS_PER_MINUTE / 1000, tz=timezone.utc)


def datetime_to_minutes(value: datetime) -> int:
    """Whole minutes since epoch (floored), the stored settlement encoding."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    millis = (value - EPOCH).total_seconds() * 1000
    return int(millis // MS_PER_MINUTE)


@dataclass(frozen=True)
class ValuationSnapshot:
    """What to display after a tick, plus the previous values for trend arrows."""

    state: ValuationState
    estimated_total: float
    profit: float
    previous_estimated_total: float
    previous_profit: float

    @property
    def estimated_total_trend(self) -> Trend:
        return _trend(self.estimated_total, self.previous_estimated_total)

    @property
    def profit_trend(self) -> Trend:
        return _trend(self.profit, self.previous_profit)

    @property
    def is_animating(self) -> bool:
        return self.state == ValuationState.FLUCTUATING


class ValuationAnimator:
    """Per-account state machine driven by wall-clock comparisons.

    LOCKED when ``estimated_total_time`` is unset, zero, or not in the future:
    the stored values are displayed and never change. FLUCTUATING otherwise:
    each ``tick`` draws ``U`` uniformly from ``[1 - band, 1 + band]``, displays
    ``estimated_total * U`` and shifts profit by the same delta. The first tick
    at or after the settlement instant snaps to the stored values and locks.
    """

    def __init__(
        self,
        account: StockAccount,
        now: datetime | None = None,
        rng: random.Random | None = None,
        band: float = DEFAULT_BAND,
    ) -> None:
        self.account = account
        self.rng = rng or random.Random()
        self.band = band
        self.target = minutes_to_datetime(account.estimated_total_time)

        now = now or datetime.now(timezone.utc)
        fluctuating = self.target is not None and now < self.target
        self.state = ValuationState.FLUCTUATING if fluctuating else ValuationState.LOCKED
        self._total = account.estimated_total
        self._profit = account.profit
        self._previous_total = account.estimated_total
        self._previous_profit = account.profit

    @property
    def snapshot(self) -> ValuationSnapshot:
        return ValuationSnapshot(
            state=self.state,
            estimated_total=self._total,
            profit=self._profit,
            previous_estimated_total=self._previous_total,
            previous_profit=self._previous_profit,
        )

    def tick(self, now: datetime | None = None) -> ValuationSnapshot:
        if self.state == ValuationState.LOCKED:
            return self.snapshot

        now = now or datetime.now(timezone.utc)
        self._previous_total = self._total
        self._previous_profit = self._profit

        if now >= self.target:
            self._total = self.account.estimated_total
            self._profit = self.account.profit
            self.state = ValuationState.LOCKED
            return self.snapshot

        factor = self.rng.uniform(1 - self.band, 1 + self.band)
        self._total = self.account.estimated_total * factor
        self._profit = self.account.profit + (self._total - self.account.estimated_total)
        return self.snapshot
