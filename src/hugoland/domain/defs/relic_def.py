"""Relic templates offered by the Yojef Market."""
from __future__ import annotations

from dataclasses import dataclass

from hugoland.core.types import ItemKind, Rarity


@dataclass(slots=True)
class RelicDef:
    id: str
    name: str
    description: str
    relic_type: ItemKind
    rarity: Rarity
    stat_min: int
    stat_max: int
    cost_min: int
    cost_max: int
