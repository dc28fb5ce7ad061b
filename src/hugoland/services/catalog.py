"""Bundle of definition repositories shared by the services."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hugoland.data.repositories import (
    AchievementsRepository,
    AdventureSkillsRepository,
    ChestTiersRepository,
    EnemiesRepository,
    ItemNamesRepository,
    MenuSkillsRepository,
    PlayerTagsRepository,
    RelicsRepository,
)


@dataclass(slots=True)
class GameCatalog:
    adventure_skills: AdventureSkillsRepository
    menu_skills: MenuSkillsRepository
    achievements: AchievementsRepository
    player_tags: PlayerTagsRepository
    chest_tiers: ChestTiersRepository
    enemies: EnemiesRepository
    item_names: ItemNamesRepository
    relics: RelicsRepository

    @classmethod
    def load(cls, base_path: Path | str | None = None) -> "GameCatalog":
        """Build every repository against the same definitions directory."""
        return cls(
            adventure_skills=AdventureSkillsRepository(base_path),
            menu_skills=MenuSkillsRepository(base_path),
            achievements=AchievementsRepository(base_path),
            player_tags=PlayerTagsRepository(base_path),
            chest_tiers=ChestTiersRepository(base_path),
            enemies=EnemiesRepository(base_path),
            item_names=ItemNamesRepository(base_path),
            relics=RelicsRepository(base_path),
        )
