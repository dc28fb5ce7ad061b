"""Achievement and player-tag unlocking."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from hugoland.core.clock import Clock
from hugoland.domain.milestones import evaluate_milestones, merge_unlocks
from hugoland.domain.state import GameState
from hugoland.services.catalog import GameCatalog

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MilestoneUnlocks:
    achievements: List[str] = field(default_factory=list)
    player_tags: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.achievements or self.player_tags)


class MilestoneService:
    def __init__(self, catalog: GameCatalog, clock: Clock) -> None:
        self._catalog = catalog
        self._clock = clock

    def record(self, state: GameState, now: datetime | None = None) -> MilestoneUnlocks:
        """Unlock every milestone ``state`` now meets. Mutates ``state``; callers pass a draft."""
        now = now or self._clock.now()
        unlocks = MilestoneUnlocks(
            achievements=evaluate_milestones(state, self._catalog.achievements.all(), state.achievements),
            player_tags=evaluate_milestones(state, self._catalog.player_tags.all(), state.player_tags),
        )
        merge_unlocks(state.achievements, unlocks.achievements, now)
        merge_unlocks(state.player_tags, unlocks.player_tags, now)
        if unlocks:
            logger.info("Unlocked achievements=%s tags=%s", unlocks.achievements, unlocks.player_tags)
        return unlocks

    def achievement_name(self, milestone_id: str) -> str:
        return self._catalog.achievements.get(milestone_id).name
