"""Timed menu buffs bought with coins."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from hugoland.core.clock import Clock
from hugoland.core.rng import RNG
from hugoland.domain.rules import GameRules
from hugoland.domain.state import GameState, MenuSkill
from hugoland.services.catalog import GameCatalog
from hugoland.services.transition import Transition, draft

logger = logging.getLogger(__name__)


class MenuSkillService:
    def __init__(self, catalog: GameCatalog, rng: RNG, clock: Clock, rules: GameRules) -> None:
        self._catalog = catalog
        self._rng = rng
        self._clock = clock
        self._rules = rules

    def roll_skill(self, state: GameState) -> Transition[MenuSkill | None]:
        """Pay for a random buff; it replaces whatever buff was active."""
        if state.coins < self._rules.menu_skill_cost:
            return Transition(state, None)
        now = self._clock.now()
        skill_def = self._rng.choice(self._catalog.menu_skills.all())
        skill = MenuSkill(
            id=skill_def.id,
            name=skill_def.name,
            description=skill_def.description,
            duration_hours=skill_def.duration_hours,
            activated_at=now,
            expires_at=now + timedelta(hours=skill_def.duration_hours),
        )
        new_state = draft(state)
        new_state.coins -= self._rules.menu_skill_cost
        new_state.skills.active_menu_skill = skill
        new_state.skills.last_roll_time = now
        logger.debug("Rolled menu skill %s until %s", skill.id, skill.expires_at.isoformat())
        return Transition(new_state, skill)

    @staticmethod
    def expire(state: GameState, now: datetime) -> bool:
        """Drop the active buff once it has run out. Mutates ``state``."""
        skill = state.skills.active_menu_skill
        if skill is None or skill.is_active(now):
            return False
        state.skills.active_menu_skill = None
        return True
