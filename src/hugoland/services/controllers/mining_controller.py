"""UI-agnostic mining controller with click rate limiting."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Deque, Literal

from hugoland.core.clock import Clock
from hugoland.core.scheduler import ScheduledTask, Scheduler
from hugoland.services.game_store import GameStore
from hugoland.services.mining_service import MiningYield

logger = logging.getLogger(__name__)

ClickRejection = Literal["blocked", "cooldown", "rate_limited", "not_loaded"]


@dataclass(frozen=True, slots=True)
class ClickResult:
    accepted: bool
    result: MiningYield | None = None
    reason: ClickRejection | None = None


class MiningRateLimiter:
    """Two-state limiter (unblocked/blocked) for gem clicks.

    A click is rejected while blocked, within ``cooldown_seconds`` of the last
    accepted click, or when ``max_clicks`` accepted clicks already sit in the
    sliding window. That last rejection starts a block that a one-second
    scheduled task counts down.
    """

    def __init__(
        self,
        clock: Clock,
        scheduler: Scheduler,
        *,
        cooldown_seconds: float = 1.0,
        window_seconds: float = 10.0,
        max_clicks: int = 5,
        block_seconds: int = 30,
    ) -> None:
        self._clock = clock
        self._scheduler = scheduler
        self._cooldown = timedelta(seconds=cooldown_seconds)
        self._window = timedelta(seconds=window_seconds)
        self._max_clicks = max_clicks
        self._block_seconds = block_seconds
        self._clicks: Deque[datetime] = deque()
        self._last_accepted: datetime | None = None
        self._block_remaining = 0
        self._countdown_task: ScheduledTask | None = None
        self._sweep_task: ScheduledTask | None = scheduler.call_every(
            window_seconds, self._sweep, name="mining-window-sweep"
        )

    @property
    def is_blocked(self) -> bool:
        return self._block_remaining > 0

    @property
    def block_remaining(self) -> int:
        return self._block_remaining

    @property
    def clicks_in_window(self) -> int:
        self._prune(self._clock.now())
        return len(self._clicks)

    def try_acquire(self) -> ClickRejection | None:
        """Record a click; return None when accepted, otherwise the rejection reason."""
        if self.is_blocked:
            return "blocked"
        now = self._clock.now()
        if self._last_accepted is not None and now - self._last_accepted < self._cooldown:
            return "cooldown"
        self._prune(now)
        if len(self._clicks) >= self._max_clicks:
            self._block()
            return "rate_limited"
        self._clicks.append(now)
        self._last_accepted = now
        return None

    def close(self) -> None:
        self._scheduler.cancel(self._countdown_task)
        self._scheduler.cancel(self._sweep_task)
        self._countdown_task = None
        self._sweep_task = None

    def _block(self) -> None:
        self._block_remaining = self._block_seconds
        self._countdown_task = self._scheduler.call_every(1.0, self._countdown, name="mining-block-countdown")
        logger.info("Mining blocked for %s seconds after rapid clicking", self._block_seconds)

    def _countdown(self) -> None:
        self._block_remaining = max(0, self._block_remaining - 1)
        if self._block_remaining == 0:
            self._clicks.clear()
            self._scheduler.cancel(self._countdown_task)
            self._countdown_task = None
            logger.info("Mining unblocked")

    def _sweep(self) -> None:
        self._prune(self._clock.now())

    def _prune(self, now: datetime) -> None:
        while self._clicks and now - self._clicks[0] >= self._window:
            self._clicks.popleft()


class MiningController:
    """Routes clicks on the rock through the limiter before mining."""

    def __init__(self, store: GameStore, limiter: MiningRateLimiter) -> None:
        self._store = store
        self._limiter = limiter

    @property
    def limiter(self) -> MiningRateLimiter:
        return self._limiter

    def click(self, x: float, y: float) -> ClickResult:
        if not self._store.is_loaded:
            return ClickResult(accepted=False, reason="not_loaded")
        rejection = self._limiter.try_acquire()
        if rejection is not None:
            return ClickResult(accepted=False, reason=rejection)
        return ClickResult(accepted=True, result=self._store.mine_gem(x, y))
