"""Recurring resampling of a valuation animator as a cancellable asyncio task."""

import asyncio
import contextlib
import logging
import random
from datetime import datetime, timezone
from typing import Callable

from brokerage_admin.config import ValuationConfig
from brokerage_admin.models.brokerage import StockAccount
from brokerage_admin.valuation.animator import (
    DEFAULT_BAND,
    ValuationAnimator,
    ValuationSnapshot,
    ValuationState,
)

logger = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 2.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ValuationTicker:
    """Drives a ``ValuationAnimator`` every ``interval`` seconds for one view.

    ``stop`` cancels the task and no callback fires afterwards; ``rebind``
    does the same before starting over for a new account. Use as an async
    context manager to tie the task's lifetime to a view::

        async with ValuationTicker(account, on_update=render):
            ...
    """

    def __init__(
        self,
        account: StockAccount,
        on_update: Callable[[ValuationSnapshot], None] | None = None,
        interval: float = DEFAULT_TICK_SECONDS,
        band: float = DEFAULT_BAND,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.on_update = on_update
        self.interval = interval
        self.band = band
        self.rng = rng or random.Random()
        self.clock = clock
        self._task: asyncio.Task | None = None
        self.animator = ValuationAnimator(account, now=clock(), rng=self.rng, band=band)

    @classmethod
    def from_config(
        cls,
        account: StockAccount,
        config: ValuationConfig,
        on_update: Callable[[ValuationSnapshot], None] | None = None,
    ) -> "ValuationTicker":
        return cls(account, on_update=on_update, interval=config.tick_seconds, band=config.band)

    @property
    def account(self) -> StockAccount:
        return self.animator.account

    @property
    def snapshot(self) -> ValuationSnapshot:
        return self.animator.snapshot

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Publish the initial snapshot and, while fluctuating, schedule ticks."""
        if self.running:
            return
        self._emit(self.animator.snapshot)
        if self.animator.state == ValuationState.FLUCTUATING:
            self._task = asyncio.get_running_loop().create_task(self._run(self.animator))

    async def _run(self, animator: ValuationAnimator) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if animator is not self.animator:
                return
            snapshot = animator.tick(self.clock())
            self._emit(snapshot)
            if snapshot.state == ValuationState.LOCKED:
                logger.debug("Valuation for %s locked at %.2f", animator.account.id, snapshot.estimated_total)
                return

    def _emit(self, snapshot: ValuationSnapshot) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(snapshot)
        except Exception:
            # A failing renderer skips this frame; the next tick still fires.
            logger.exception("Valuation update callback failed for %s", self.animator.account.id)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        if task.done():
            exc = None if task.cancelled() else task.exception()
            if exc is not None:
                logger.error("Valuation ticker for %s had stopped: %s", self.account.id, exc)
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def rebind(self, account: StockAccount) -> None:
        """Switch to another account reference, discarding the old animation."""
        await self.stop()
        self.animator = ValuationAnimator(account, now=self.clock(), rng=self.rng, band=self.band)
        self.start()

    async def __aenter__(self) -> "ValuationTicker":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
