"""Daily login rewards keyed by UTC calendar day."""
from __future__ import annotations

from datetime import datetime, timezone

from hugoland.core.clock import Clock
from hugoland.core.rng import RNG
from hugoland.domain.progression import daily_reward_amounts
from hugoland.domain.rules import GameRules
from hugoland.domain.state import DailyReward, DailyRewardRecord, DailyRewards, GameState
from hugoland.services.catalog import GameCatalog
from hugoland.services.factories import create_random_item
from hugoland.services.transition import Transition, draft

SPECIAL_REWARD_DAYS = {7: "legendary", 14: "mythical"}


def _utc_day(moment: datetime):
    return moment.astimezone(timezone.utc).date()


def next_streak(daily: DailyRewards, now: datetime) -> int | None:
    """Streak a claim at ``now`` would reach, or None when today is already claimed.

    ``current_streak`` only moves on a claim, so an offer left unclaimed never
    extends the streak on its own.
    """
    if daily.last_claim_date is None:
        return daily.current_streak + 1
    days = (_utc_day(now) - _utc_day(daily.last_claim_date)).days
    if days <= 0:
        return None
    return daily.current_streak + 1 if days == 1 else 1


class DailyRewardService:
    def __init__(self, catalog: GameCatalog, rng: RNG, clock: Clock, rules: GameRules) -> None:
        self._catalog = catalog
        self._rng = rng
        self._clock = clock
        self._rules = rules

    def refresh(self, state: GameState, now: datetime | None = None) -> bool:
        """Bring the pending offer in line with today. Mutates ``state``.

        A pending offer built for another streak day is replaced. Returns True
        when a new reward was made available.
        """
        now = now or self._clock.now()
        daily = state.daily_rewards
        streak = next_streak(daily, now)
        if streak is None:
            daily.available_reward = None
            return False
        day, coins, gems = daily_reward_amounts(streak, self._rules)
        pending = daily.available_reward
        if pending is not None and pending.day == day:
            return False

        item = None
        rarity = SPECIAL_REWARD_DAYS.get(day)
        if rarity is not None:
            item = create_random_item(self._catalog.item_names, self._rng, rarity=rarity)
        daily.available_reward = DailyReward(day=day, coins=coins, gems=gems, item=item)
        return True

    def claim_daily_reward(self, state: GameState) -> Transition[bool]:
        """Pay out the pending offer, rebuilt first if the day has moved on since it was made."""
        if state.daily_rewards.available_reward is None:
            return Transition(state, False)
        now = self._clock.now()
        new_state = draft(state)
        self.refresh(new_state, now)
        daily = new_state.daily_rewards
        reward = daily.available_reward
        streak = next_streak(daily, now)
        if reward is None or streak is None:
            return Transition(state, False)
        new_state.coins += reward.coins
        new_state.gems += reward.gems
        new_state.statistics.coins_earned += reward.coins
        new_state.statistics.gems_earned += reward.gems
        if reward.item is not None:
            new_state.inventory.add_item(reward.item)
            new_state.collection_book.register_found_item(reward.item.kind, reward.item.name, reward.item.rarity)
            new_state.statistics.items_collected += 1
        daily.reward_history.append(
            DailyRewardRecord(day=reward.day, claimed_at=now, coins=reward.coins, gems=reward.gems)
        )
        daily.current_streak = streak
        daily.max_streak = max(daily.max_streak, streak)
        daily.last_claim_date = now
        daily.available_reward = None
        return Transition(new_state, True)
