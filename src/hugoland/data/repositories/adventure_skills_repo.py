"""Repository for adventure skill definitions."""
from __future__ import annotations

from typing import Dict

from hugoland.data.errors import DataValidationError
from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.adventure import AdventureSkillType
from hugoland.domain.defs import AdventureSkillDef


class AdventureSkillsRepository(RepositoryBase[AdventureSkillDef]):
    """Loads the adventure skill catalog; every id must name a known skill type."""

    def __init__(self, base_path=None) -> None:
        super().__init__("adventure_skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, AdventureSkillDef]:
        skills: Dict[str, AdventureSkillDef] = {}
        known = {member.value for member in AdventureSkillType}
        for skill_id, payload in raw.items():
            if skill_id not in known:
                raise DataValidationError(f"adventure skill '{skill_id}' has no matching skill type.")
            context = f"adventure_skills.{skill_id}"
            mapping = self._require_mapping(payload, context)
            skills[skill_id] = AdventureSkillDef(
                id=skill_id,
                name=self._require_str(mapping.get("name"), f"{context}.name"),
                description=self._require_str(mapping.get("description"), f"{context}.description"),
            )
        return skills
