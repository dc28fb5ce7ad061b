"""Coin-bought loot: chests, the mythical shop and the cheat item."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal

from hugoland.core.clock import Clock
from hugoland.core.rng import RNG
from hugoland.core.types import Rarity
from hugoland.domain.entities import Armor, Weapon
from hugoland.domain.rules import GameRules
from hugoland.domain.state import GameState
from hugoland.services.catalog import GameCatalog
from hugoland.services.factories import create_random_item, roll_rarity
from hugoland.services.transition import Transition, draft

logger = logging.getLogger(__name__)

ENCHANTER_ENCHANT_CHANCE = 0.25


@dataclass(slots=True)
class ChestReward:
    type: Literal["gems", "items"]
    items: List[Weapon | Armor] = field(default_factory=list)
    gems: int = 0


class ChestService:
    def __init__(self, catalog: GameCatalog, rng: RNG, clock: Clock, rules: GameRules) -> None:
        self._catalog = catalog
        self._rng = rng
        self._clock = clock
        self._rules = rules

    def open_chest(self, state: GameState, cost: int) -> Transition[ChestReward | None]:
        """Spend ``cost`` coins on a chest of the tier that cost reaches."""
        if cost < 0 or state.coins < cost:
            return Transition(state, None)
        try:
            tier = self._catalog.chest_tiers.tier_for_cost(cost)
        except KeyError:
            return Transition(state, None)

        new_state = draft(state)
        rarity = roll_rarity(self._rng, tier.ordered_weights())
        new_state.coins -= cost
        new_state.statistics.chests_opened += 1

        if self._rng.chance(self._rules.chest_gem_chance):
            new_state.gems += tier.bonus_gems
            new_state.statistics.gems_earned += tier.bonus_gems
            logger.debug("Chest %s paid out %s gems", tier.id, tier.bonus_gems)
            return Transition(new_state, ChestReward(type="gems", gems=tier.bonus_gems))

        enchant_chance = self._enchant_chance(new_state, self._clock.now())
        items = [
            create_random_item(self._catalog.item_names, self._rng, rarity=rarity, enchant_chance=enchant_chance)
            for _ in range(tier.item_count)
        ]
        self._collect(new_state, items)
        return Transition(new_state, ChestReward(type="items", items=items))

    def purchase_mythical(self, state: GameState, cost: int) -> Transition[ChestReward | None]:
        if cost < 0 or state.coins < cost:
            return Transition(state, None)
        new_state = draft(state)
        new_state.coins -= cost
        item = self._mythical_item()
        self._collect(new_state, [item])
        return Transition(new_state, ChestReward(type="items", items=[item]))

    def generate_cheat_item(self, state: GameState) -> Transition[Weapon | Armor | None]:
        """Grant a free mythical item while the obtain-any-item cheat is on."""
        if not state.cheats.obtain_any_item:
            return Transition(state, None)
        new_state = draft(state)
        item = self._mythical_item()
        new_state.inventory.add_item(item)
        return Transition(new_state, item)

    def _mythical_item(self, rarity: Rarity = "mythical") -> Weapon | Armor:
        return create_random_item(self._catalog.item_names, self._rng, rarity=rarity)

    def _enchant_chance(self, state: GameState, now: datetime) -> float:
        if state.skills.menu_skill_active("enchanter", now):
            return ENCHANTER_ENCHANT_CHANCE
        return self._rules.enchant_chance

    @staticmethod
    def _collect(state: GameState, items: List[Weapon | Armor]) -> None:
        for item in items:
            state.inventory.add_item(item)
            state.collection_book.register_found_item(item.kind, item.name, item.rarity)
        state.statistics.items_collected += len(items)
