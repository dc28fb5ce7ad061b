"""Repository for menu skill definitions."""
from __future__ import annotations

from typing import Dict

from hugoland.data.repositories.base import RepositoryBase
from hugoland.domain.defs import MenuSkillDef


class MenuSkillsRepository(RepositoryBase[MenuSkillDef]):
    def __init__(self, base_path=None) -> None:
        super().__init__("menu_skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, MenuSkillDef]:
        skills: Dict[str, MenuSkillDef] = {}
        for skill_id, payload in raw.items():
            context = f"menu_skills.{skill_id}"
            mapping = self._require_mapping(payload, context)
            skills[skill_id] = MenuSkillDef(
                id=skill_id,
                name=self._require_str(mapping.get("name"), f"{context}.name"),
                description=self._require_str(mapping.get("description"), f"{context}.description"),
                duration_hours=self._require_int(
                    mapping.get("duration_hours"), f"{context}.duration_hours", minimum=1
                ),
            )
        return skills
