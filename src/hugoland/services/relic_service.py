"""Yojef Market purchases and relic management."""
from __future__ import annotations

import math

from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import apply_total_stats
from hugoland.domain.state import GameState
from hugoland.services.transition import Transition, draft


class RelicService:
    def __init__(self, rules: GameRules) -> None:
        self._rules = rules

    def purchase_relic(self, state: GameState, relic_id: str) -> Transition[bool]:
        """Buy a market offer with gems; the offer leaves the market."""
        offer = next((relic for relic in state.market.items if relic.id == relic_id), None)
        if offer is None or state.gems < offer.cost:
            return Transition(state, False)
        new_state = draft(state)
        relic = next(relic for relic in new_state.market.items if relic.id == relic_id)
        new_state.market.items = [item for item in new_state.market.items if item.id != relic_id]
        new_state.gems -= relic.cost
        new_state.inventory.relics.append(relic)
        return Transition(new_state, True)

    def upgrade_relic(self, state: GameState, relic_id: str) -> Transition[bool]:
        relic = state.inventory.find_relic(relic_id)
        if relic is None or state.gems < relic.upgrade_cost:
            return Transition(state, False)
        new_state = draft(state)
        target = new_state.inventory.find_relic(relic_id)
        assert target is not None
        new_state.gems -= target.upgrade_cost
        target.level += 1
        if target.base_attack is not None:
            target.base_attack += self._rules.relic_upgrade_attack
        if target.base_defense is not None:
            target.base_defense += self._rules.relic_upgrade_defense
        target.upgrade_cost = math.floor(target.upgrade_cost * self._rules.relic_upgrade_cost_growth)
        new_state.statistics.items_upgraded += 1
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)

    def equip_relic(self, state: GameState, relic_id: str) -> Transition[bool]:
        inventory = state.inventory
        owned = any(relic.id == relic_id for relic in inventory.relics)
        if not owned or len(inventory.equipped_relics) >= self._rules.max_equipped_relics:
            return Transition(state, False)
        new_state = draft(state)
        relic = next(relic for relic in new_state.inventory.relics if relic.id == relic_id)
        new_state.inventory.relics.remove(relic)
        new_state.inventory.equipped_relics.append(relic)
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)

    def unequip_relic(self, state: GameState, relic_id: str) -> Transition[bool]:
        if not any(relic.id == relic_id for relic in state.inventory.equipped_relics):
            return Transition(state, False)
        new_state = draft(state)
        relic = next(relic for relic in new_state.inventory.equipped_relics if relic.id == relic_id)
        new_state.inventory.equipped_relics.remove(relic)
        new_state.inventory.relics.append(relic)
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)

    def sell_relic(self, state: GameState, relic_id: str) -> Transition[bool]:
        """Sell an unequipped relic back for half its purchase cost in gems."""
        relic = next((relic for relic in state.inventory.relics if relic.id == relic_id), None)
        if relic is None:
            return Transition(state, False)
        new_state = draft(state)
        new_state.inventory.relics = [item for item in new_state.inventory.relics if item.id != relic_id]
        new_state.gems += relic.cost // 2
        new_state.statistics.items_sold += 1
        return Transition(new_state, True)
