"""Repositories for achievement and player-tag definitions."""
from __future__ import annotations

from typing import Dict

from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import MilestoneDef
from hugoland.domain.milestones import METRICS


class _MilestonesRepository(RepositoryBase[MilestoneDef]):
    def _build(self, raw: dict[str, object]) -> Dict[str, MilestoneDef]:
        milestones: Dict[str, MilestoneDef] = {}
        for milestone_id, payload in raw.items():
            context = f"{self._filename}:{milestone_id}"
            mapping = self._require_mapping(payload, context)
            metric = self._require_str(mapping.get("metric"), f"{context}.metric")
            if metric not in METRICS:
                raise DataValidationError(f"{context}.metric '{metric}' is not a known metric.")
            milestones[milestone_id] = MilestoneDef(
                id=milestone_id,
                name=self._require_str(mapping.get("name"), f"{context}.name"),
                description=self._require_str(mapping.get("description"), f"{context}.description"),
                metric=metric,
                threshold=self._require_int(mapping.get("threshold"), f"{context}.threshold", minimum=1),
            )
        return milestones


class AchievementsRepository(_MilestonesRepository):
    def __init__(self, base_path=None) -> None:
        super().__init__("achievements.json", base_path)


class PlayerTagsRepository(_MilestonesRepository):
    def __init__(self, base_path=None) -> None:
        super().__init__("player_tags.json", base_path)
