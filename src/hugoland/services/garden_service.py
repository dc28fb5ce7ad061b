"""Garden of Growth: planting, watering and water-limited growth."""
from __future__ import annotations

import math
from datetime import datetime

from hugoland.core.clock import Clock
from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import apply_total_stats
from hugoland.domain.state import Garden, GameState
from hugoland.services.transition import Transition, draft


def water_price(hours: float, water_cost: int) -> int:
    """Coins for ``hours`` of water, priced per 24 hours and rounded up."""
    return math.ceil(hours / 24 * water_cost)


def grow(garden: Garden, hours: float, rules: GameRules) -> float:
    """Grow for up to ``hours`` while water lasts; return the hours actually grown."""
    if not garden.is_planted or hours <= 0 or garden.water_hours_remaining <= 0:
        return 0.0
    grown_hours = min(hours, garden.water_hours_remaining)
    garden.water_hours_remaining = max(0.0, garden.water_hours_remaining - grown_hours)
    garden.growth_cm = min(float(garden.max_growth_cm), garden.growth_cm + grown_hours * rules.growth_cm_per_hour)
    garden.total_growth_bonus = garden.growth_cm * rules.growth_bonus_per_cm
    return grown_hours


class GardenService:
    def __init__(self, clock: Clock, rules: GameRules) -> None:
        self._clock = clock
        self._rules = rules

    def plant_seed(self, state: GameState) -> Transition[bool]:
        garden = state.garden
        if garden.is_planted or state.coins < garden.seed_cost:
            return Transition(state, False)
        now = self._clock.now()
        new_state = draft(state)
        garden = new_state.garden
        new_state.coins -= garden.seed_cost
        garden.is_planted = True
        garden.planted_at = now
        garden.last_watered = now
        garden.last_growth_update = now
        garden.water_hours_remaining = float(self._rules.starting_water_hours)
        garden.growth_cm = 0.0
        garden.total_growth_bonus = 0.0
        return Transition(new_state, True)

    def buy_water(self, state: GameState, hours: float) -> Transition[bool]:
        garden = state.garden
        if not garden.is_planted or hours <= 0:
            return Transition(state, False)
        cost = water_price(hours, garden.water_cost)
        if state.coins < cost:
            return Transition(state, False)
        now = self._clock.now()
        new_state = draft(state)
        # Settle growth so far before the new water counts.
        self.update_growth(new_state, now)
        new_state.coins -= cost
        new_state.garden.water_hours_remaining += hours
        new_state.garden.last_watered = now
        return Transition(new_state, True)

    def update_growth(self, state: GameState, now: datetime, max_hours: float | None = None) -> float:
        """Advance growth to ``now`` in place; callers pass a draft."""
        garden = state.garden
        if not garden.is_planted:
            return 0.0
        since = garden.last_growth_update or garden.planted_at or now
        hours = max(0.0, (now - since).total_seconds() / 3600)
        if max_hours is not None:
            hours = min(hours, max_hours)
        garden.last_growth_update = now
        before = garden.total_growth_bonus
        grown = grow(garden, hours, self._rules)
        if garden.total_growth_bonus != before:
            apply_total_stats(state, self._rules)
        return grown
