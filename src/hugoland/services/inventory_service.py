"""Weapon and armor management: equip, upgrade, sell and discard."""
from __future__ import annotations

import math
from typing import List, Sequence

from hugoland.core.types import ItemKind
from hugoland.domain.entities import Armor, Weapon
from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import apply_total_stats
from hugoland.domain.state import GameState, Inventory
from hugoland.services.transition import Transition, draft


def _owned(inventory: Inventory, kind: ItemKind) -> List[Weapon] | List[Armor]:
    return inventory.weapons if kind == "weapon" else inventory.armor


def _find(inventory: Inventory, item_id: str, kind: ItemKind) -> Weapon | Armor | None:
    return inventory.find_weapon(item_id) if kind == "weapon" else inventory.find_armor(item_id)


class InventoryService:
    """Service responsible for owned weapons and armor."""

    def __init__(self, rules: GameRules) -> None:
        self._rules = rules

    def equip_weapon(self, state: GameState, item_id: str) -> Transition[bool]:
        return self._equip(state, item_id, "weapon")

    def equip_armor(self, state: GameState, item_id: str) -> Transition[bool]:
        return self._equip(state, item_id, "armor")

    def upgrade_weapon(self, state: GameState, item_id: str) -> Transition[bool]:
        return self._upgrade(state, [item_id], "weapon")

    def upgrade_armor(self, state: GameState, item_id: str) -> Transition[bool]:
        return self._upgrade(state, [item_id], "armor")

    def sell_weapon(self, state: GameState, item_id: str) -> Transition[bool]:
        return self._sell(state, [item_id], "weapon")

    def sell_armor(self, state: GameState, item_id: str) -> Transition[bool]:
        return self._sell(state, [item_id], "armor")

    def bulk_sell(self, state: GameState, item_ids: Sequence[str], kind: ItemKind) -> Transition[bool]:
        return self._sell(state, item_ids, kind)

    def bulk_upgrade(self, state: GameState, item_ids: Sequence[str], kind: ItemKind) -> Transition[bool]:
        """Upgrade every listed item, or none of them when the summed cost is unaffordable."""
        return self._upgrade(state, item_ids, kind)

    def discard_item(self, state: GameState, item_id: str, kind: ItemKind) -> Transition[bool]:
        if _find(state.inventory, item_id, kind) is None:
            return Transition(state, False)
        new_state = draft(state)
        self._remove(new_state, {item_id}, kind)
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)

    def _equip(self, state: GameState, item_id: str, kind: ItemKind) -> Transition[bool]:
        if _find(state.inventory, item_id, kind) is None:
            return Transition(state, False)
        new_state = draft(state)
        if kind == "weapon":
            new_state.inventory.current_weapon_id = item_id
        else:
            new_state.inventory.current_armor_id = item_id
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)

    def _upgrade(self, state: GameState, item_ids: Sequence[str], kind: ItemKind) -> Transition[bool]:
        wanted = set(item_ids)
        targets = [item for item in _owned(state.inventory, kind) if item.id in wanted]
        if not targets:
            return Transition(state, False)
        total_cost = sum(item.upgrade_cost for item in targets)
        if state.gems < total_cost:
            return Transition(state, False)

        new_state = draft(state)
        upgraded = 0
        for item in _owned(new_state.inventory, kind):
            if item.id not in wanted:
                continue
            item.level += 1
            if isinstance(item, Weapon):
                item.base_attack += self._rules.weapon_upgrade_attack
            else:
                item.base_defense += self._rules.armor_upgrade_defense
            item.upgrade_cost = math.floor(item.upgrade_cost * self._rules.upgrade_cost_growth)
            item.sell_price = math.floor(item.sell_price * self._rules.sell_price_growth)
            upgraded += 1
        new_state.gems -= total_cost
        new_state.statistics.items_upgraded += upgraded
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)

    def _sell(self, state: GameState, item_ids: Sequence[str], kind: ItemKind) -> Transition[bool]:
        wanted = set(item_ids)
        targets = [item for item in _owned(state.inventory, kind) if item.id in wanted]
        if not targets:
            return Transition(state, False)
        new_state = draft(state)
        new_state.coins += sum(item.sell_price for item in targets)
        new_state.statistics.items_sold += len(targets)
        self._remove(new_state, wanted, kind)
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)

    @staticmethod
    def _remove(state: GameState, item_ids: set[str], kind: ItemKind) -> None:
        inventory = state.inventory
        if kind == "weapon":
            inventory.weapons = [item for item in inventory.weapons if item.id not in item_ids]
            if inventory.current_weapon_id in item_ids:
                inventory.current_weapon_id = None
        else:
            inventory.armor = [item for item in inventory.armor if item.id not in item_ids]
            if inventory.current_armor_id in item_ids:
                inventory.current_armor_id = None
