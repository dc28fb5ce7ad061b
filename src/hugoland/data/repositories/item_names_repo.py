"""Repository for generated item name pools."""
from __future__ import annotations

from typing import Dict

from hugoland.core.types import ITEM_KINDS, RARITIES, ItemKind, Rarity
from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import ItemNamePoolDef


class ItemNamesRepository(RepositoryBase[ItemNamePoolDef]):
    """Loads name pools keyed by item kind, then rarity."""

    def __init__(self, base_path=None) -> None:
        super().__init__("item_names.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemNamePoolDef]:
        pools: Dict[str, ItemNamePoolDef] = {}
        for kind in ITEM_KINDS:
            by_rarity = self._require_mapping(raw.get(kind), f"item_names.{kind}")
            for rarity in RARITIES:
                context = f"item_names.{kind}.{rarity}"
                names = self._require_list(by_rarity.get(rarity), context)
                if not names:
                    raise DataValidationError(f"{context} must not be empty.")
                pool = ItemNamePoolDef(
                    kind=kind,
                    rarity=rarity,
                    names=tuple(self._require_str(name, context) for name in names),
                )
                pools[pool.id] = pool
        return pools

    def pool(self, kind: ItemKind, rarity: Rarity) -> ItemNamePoolDef:
        return self.get(f"{kind}:{rarity}")
