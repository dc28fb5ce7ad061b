"""Systems driven by wall-clock time: offline accrual, market rotation and session upkeep."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from hugoland.core.clock import Clock
from hugoland.core.rng import RNG
from hugoland.domain.rules import GameRules
from hugoland.domain.state import GameState, market_refresh_due, next_market_refresh
from hugoland.services.catalog import GameCatalog
from hugoland.services.daily_reward_service import DailyRewardService
from hugoland.services.factories import create_relic
from hugoland.services.garden_service import GardenService
from hugoland.services.menu_skill_service import MenuSkillService
from hugoland.services.milestone_service import MilestoneService
from hugoland.services.transition import Transition, draft

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OfflineReport:
    hours_away: float
    hours_credited: float
    coins: int
    gems: int


class TimeService:
    def __init__(
        self,
        catalog: GameCatalog,
        rng: RNG,
        clock: Clock,
        rules: GameRules,
        garden: GardenService | None = None,
        daily_rewards: DailyRewardService | None = None,
        milestones: MilestoneService | None = None,
    ) -> None:
        self._catalog = catalog
        self._rng = rng
        self._clock = clock
        self._rules = rules
        self._garden = garden or GardenService(clock, rules)
        self._daily_rewards = daily_rewards or DailyRewardService(catalog, rng, clock, rules)
        self._milestones = milestones or MilestoneService(catalog, clock)

    def hydrate(self, state: GameState) -> Transition[OfflineReport]:
        """Bring a freshly loaded state up to date with the time spent away."""
        now = self._clock.now()
        new_state = draft(state)
        offline = new_state.offline_progress
        last_save = offline.last_save_time or now
        hours_away = max(0.0, (now - last_save).total_seconds() / 3600)
        credited = min(hours_away, offline.max_offline_hours)
        coins = gems = 0

        if hours_away > self._rules.min_offline_hours:
            coins = math.floor((self._rules.zone_coin_base + self._rules.zone_coin_per_zone * new_state.zone) * credited)
            if new_state.skills.menu_skill_active("coin_vacuum", last_save):
                coins *= 2
            gems = math.floor((new_state.zone // self._rules.zone_gem_divisor) * credited)
            offline.offline_coins += coins
            offline.offline_gems += gems
            offline.offline_time += math.floor(credited * 3600)
            logger.info("Offline for %.2fh, credited %.2fh: %s coins, %s gems", hours_away, credited, coins, gems)

        self._garden.update_growth(new_state, now, max_hours=offline.max_offline_hours)
        self._refresh_market(new_state, now)
        self._daily_rewards.refresh(new_state, now)
        MenuSkillService.expire(new_state, now)
        new_state.statistics.session_start_time = now
        new_state.skills.session_start_time = now
        new_state.skills.play_time_this_session = 0.0
        return Transition(new_state, OfflineReport(hours_away, credited, coins, gems))

    def claim_offline_rewards(self, state: GameState) -> Transition[bool]:
        offline = state.offline_progress
        if offline.offline_coins <= 0 and offline.offline_gems <= 0:
            return Transition(state, False)
        new_state = draft(state)
        offline = new_state.offline_progress
        new_state.coins += offline.offline_coins
        new_state.gems += offline.offline_gems
        new_state.statistics.coins_earned += offline.offline_coins
        new_state.statistics.gems_earned += offline.offline_gems
        offline.offline_coins = 0
        offline.offline_gems = 0
        offline.offline_time = 0.0
        return Transition(new_state, True)

    def refresh_market(self, state: GameState, force: bool = False) -> Transition[bool]:
        now = self._clock.now()
        if not force and not market_refresh_due(state, now):
            return Transition(state, False)
        new_state = draft(state)
        self._refresh_market(new_state, now, force=True)
        return Transition(new_state, True)

    def tick(self, state: GameState) -> Transition[bool]:
        """In-session upkeep driven by the clock; mutates a draft only."""
        now = self._clock.now()
        new_state = draft(state)
        self._garden.update_growth(new_state, now)
        self._refresh_market(new_state, now)
        self._daily_rewards.refresh(new_state, now)
        MenuSkillService.expire(new_state, now)
        skills = new_state.skills
        if skills.session_start_time is not None:
            session_seconds = max(0.0, (now - skills.session_start_time).total_seconds())
            new_state.statistics.total_play_time += session_seconds - skills.play_time_this_session
            skills.play_time_this_session = session_seconds
        self._milestones.record(new_state, now)
        return Transition(new_state, True)

    def _refresh_market(self, state: GameState, now: datetime, force: bool = False) -> bool:
        if not force and not market_refresh_due(state, now):
            return False
        state.market.items = [
            create_relic(self._catalog.relics, self._rng) for _ in range(self._rules.market_size)
        ]
        state.market.last_refresh = now
        state.market.next_refresh = next_market_refresh(now, self._rules)
        logger.debug("Market refreshed with %s relics", len(state.market.items))
        return True
