"""Chest tier definitions (rarity weights per coin cost)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from hugoland.core.types import RARITIES, Rarity


@dataclass(slots=True)
class ChestTierDef:
    """Rarity weights applied to chests costing at least ``min_cost`` coins."""

    id: str
    min_cost: int
    weights: Dict[Rarity, int]
    bonus_gems: int
    item_count: int

    def ordered_weights(self) -> list[int]:
        return [self.weights.get(rarity, 0) for rarity in RARITIES]
