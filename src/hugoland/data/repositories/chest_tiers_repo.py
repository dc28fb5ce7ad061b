"""Repository for chest tier rarity tables."""
from __future__ import annotations

from typing import Dict, List

from hugoland.core.types import RARITIES
from hugoland.data.errors import DataValidationError
from hugoland.data.json_loader import load_json
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import ChestTierDef


class ChestTiersRepository(RepositoryBase[ChestTierDef]):
    """Loads the ordered chest tiers; every tier's weights must sum to 100."""

    def __init__(self, base_path=None) -> None:
        super().__init__("chest_tiers.json", base_path)

    def _load_raw(self) -> list[object]:
        raw = load_json(self._get_file_path())
        if not isinstance(raw, list):
            raise DataValidationError("chest_tiers.json must be a list.")
        return raw

    def _build(self, raw: list[object]) -> Dict[str, ChestTierDef]:
        tiers: Dict[str, ChestTierDef] = {}
        for index, entry in enumerate(raw):
            context = f"chest_tiers[{index}]"
            mapping = self._require_mapping(entry, context)
            tier_id = self._require_str(mapping.get("id"), f"{context}.id")
            weights_map = self._require_mapping(mapping.get("weights"), f"{context}.weights")
            unknown = set(weights_map) - set(RARITIES)
            if unknown:
                raise DataValidationError(f"{context}.weights has unknown rarities {sorted(unknown)}.")
            weights = {
                rarity: self._require_int(weights_map.get(rarity, 0), f"{context}.weights.{rarity}", minimum=0)
                for rarity in RARITIES
            }
            if sum(weights.values()) != 100:
                raise DataValidationError(f"{context}.weights must sum to 100.")
            tiers[tier_id] = ChestTierDef(
                id=tier_id,
                min_cost=self._require_int(mapping.get("min_cost"), f"{context}.min_cost", minimum=0),
                weights=weights,
                bonus_gems=self._require_int(mapping.get("bonus_gems"), f"{context}.bonus_gems", minimum=0),
                item_count=self._require_int(mapping.get("item_count"), f"{context}.item_count", minimum=1),
            )
        return tiers

    def tiers_by_cost(self) -> List[ChestTierDef]:
        return sorted(self.all(), key=lambda tier: tier.min_cost)

    def tier_for_cost(self, cost: int) -> ChestTierDef:
        """Return the most expensive tier whose minimum cost ``cost`` reaches."""
        eligible = [tier for tier in self.tiers_by_cost() if tier.min_cost <= cost]
        if not eligible:
            raise KeyError(cost)
        return eligible[-1]
