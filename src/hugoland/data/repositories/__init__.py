"""Repository exports."""

from .adventure_skills_repo import AdventureSkillsRepository
from .chest_tiers_repo import ChestTiersRepository
from .enemies_repo import EnemiesRepository
from .item_names_repo import ItemNamesRepository
from .menu_skills_repo import MenuSkillsRepository
from .milestones_repo import AchievementsRepository, PlayerTagsRepository
from .relics_repo import RelicsRepository

__all__ = [
    "AchievementsRepository",
    "AdventureSkillsRepository",
    "ChestTiersRepository",
    "EnemiesRepository",
    "ItemNamesRepository",
    "MenuSkillsRepository",
    "PlayerTagsRepository",
    "RelicsRepository",
]
