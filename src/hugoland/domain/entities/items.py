"""Owned equipment: weapons, armor and relics."""
from __future__ import annotations

from dataclasses import dataclass

from hugoland.core.types import ItemKind, Rarity


@dataclass(slots=True)
class Weapon:
    id: str
    name: str
    rarity: Rarity
    base_attack: int
    upgrade_cost: int
    sell_price: int
    level: int = 1
    durability: int = 100
    max_durability: int = 100
    is_enchanted: bool = False

    @property
    def kind(self) -> ItemKind:
        return "weapon"


@dataclass(slots=True)
class Armor:
    id: str
    name: str
    rarity: Rarity
    base_defense: int
    upgrade_cost: int
    sell_price: int
    level: int = 1
    durability: int = 100
    max_durability: int = 100
    is_enchanted: bool = False

    @property
    def kind(self) -> ItemKind:
        return "armor"


@dataclass(slots=True)
class Relic:
    """Market-sourced equippable; contributes attack or defense by ``relic_type``."""

    id: str
    name: str
    description: str
    relic_type: ItemKind
    rarity: Rarity
    cost: int
    upgrade_cost: int
    level: int = 1
    base_attack: int | None = None
    base_defense: int | None = None
