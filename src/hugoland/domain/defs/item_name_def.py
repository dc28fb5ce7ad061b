"""Name pools for generated weapons and armor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from hugoland.core.types import ItemKind, Rarity


@dataclass(slots=True)
class ItemNamePoolDef:
    kind: ItemKind
    rarity: Rarity
    names: Tuple[str, ...]

    @property
    def id(self) -> str:
        return f"{self.kind}:{self.rarity}"
