"""Shared type aliases for the core and domain layers."""
from typing import Literal

Rarity = Literal["common", "rare", "epic", "legendary", "mythical"]
ItemKind = Literal["weapon", "armor"]
GameModeName = Literal["normal", "blitz", "bloodlust", "survival"]

RARITIES: tuple[Rarity, ...] = ("common", "rare", "epic", "legendary", "mythical")
ITEM_KINDS: tuple[ItemKind, ...] = ("weapon", "armor")
GAME_MODES: tuple[GameModeName, ...] = ("normal", "blitz", "bloodlust", "survival")

__all__ = ["GAME_MODES", "ITEM_KINDS", "RARITIES", "GameModeName", "ItemKind", "Rarity"]
