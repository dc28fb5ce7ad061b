"""Repository for Yojef Market relic templates."""
from __future__ import annotations

from typing import Dict

from hugoland.core.types import ITEM_KINDS, RARITIES
from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import RelicDef


class RelicsRepository(RepositoryBase[RelicDef]):
    def __init__(self, base_path=None) -> None:
        super().__init__("relics.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, RelicDef]:
        relics: Dict[str, RelicDef] = {}
        for relic_id, payload in raw.items():
            context = f"relics.{relic_id}"
            mapping = self._require_mapping(payload, context)
            relic_type = self._require_str(mapping.get("relic_type"), f"{context}.relic_type")
            if relic_type not in ITEM_KINDS:
                raise DataValidationError(f"{context}.relic_type must be one of {ITEM_KINDS}.")
            rarity = self._require_str(mapping.get("rarity"), f"{context}.rarity")
            if rarity not in RARITIES:
                raise DataValidationError(f"{context}.rarity must be one of {RARITIES}.")
            stat_min = self._require_int(mapping.get("stat_min"), f"{context}.stat_min", minimum=1)
            stat_max = self._require_int(mapping.get("stat_max"), f"{context}.stat_max", minimum=stat_min)
            cost_min = self._require_int(mapping.get("cost_min"), f"{context}.cost_min", minimum=1)
            cost_max = self._require_int(mapping.get("cost_max"), f"{context}.cost_max", minimum=cost_min)
            relics[relic_id] = RelicDef(
                id=relic_id,
                name=self._require_str(mapping.get("name"), f"{context}.name"),
                description=self._require_str(mapping.get("description"), f"{context}.description"),
                relic_type=relic_type,  # type: ignore[arg-type]
                rarity=rarity,  # type: ignore[arg-type]
                stat_min=stat_min,
                stat_max=stat_max,
                cost_min=cost_min,
                cost_max=cost_max,
            )
        return relics
