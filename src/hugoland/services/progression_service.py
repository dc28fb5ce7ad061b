"""Skill points, prestige, research and direct experience edits."""
from __future__ import annotations

import logging

from hugoland.domain.progression import experience_to_next
from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import apply_total_stats
from hugoland.domain.state import GameState, Progression
from hugoland.services.transition import Transition, draft

logger = logging.getLogger(__name__)


class ProgressionService:
    def __init__(self, rules: GameRules) -> None:
        self._rules = rules

    def upgrade_skill(self, state: GameState, skill_id: str) -> Transition[bool]:
        progression = state.progression
        if progression.skill_points <= 0 or not skill_id or skill_id in progression.unlocked_skills:
            return Transition(state, False)
        new_state = draft(state)
        new_state.progression.skill_points -= 1
        new_state.progression.unlocked_skills.append(skill_id)
        return Transition(new_state, True)

    def prestige(self, state: GameState) -> Transition[bool]:
        """Trade a level of at least ``prestige_min_level`` for prestige points."""
        if state.progression.level < self._rules.prestige_min_level:
            return Transition(state, False)
        new_state = draft(state)
        old = new_state.progression
        points = old.level // self._rules.prestige_level_divisor
        new_state.progression = Progression(
            experience_to_next=self._rules.initial_experience_to_next,
            prestige_level=old.prestige_level + 1,
            prestige_points=old.prestige_points + points,
            mastery_levels=old.mastery_levels,
        )
        stats = new_state.player_stats
        stats.hp = stats.base_hp
        stats.max_hp = stats.base_hp
        stats.attack = stats.base_attack
        stats.defense = stats.base_defense
        logger.info("Prestige %s reached (+%s points)", old.prestige_level + 1, points)
        return Transition(new_state, True)

    def set_experience(self, state: GameState, experience: int) -> Transition[bool]:
        """Derive level and carry from a total experience amount, starting at level 1."""
        if experience < 0:
            return Transition(state, False)
        new_state = draft(state)
        progression = new_state.progression
        level = 1
        remaining = experience
        while remaining >= experience_to_next(level, self._rules):
            remaining -= experience_to_next(level, self._rules)
            level += 1
        progression.level = level
        progression.experience = remaining
        progression.experience_to_next = experience_to_next(level, self._rules)
        return Transition(new_state, True)

    def upgrade_research(self, state: GameState) -> Transition[bool]:
        """Buy the next research level; only available when the research rule is enabled."""
        if not self._rules.research_enabled:
            return Transition(state, False)
        cost = self._rules.research_base_cost * (state.research.level + 1)
        if state.coins < cost:
            return Transition(state, False)
        new_state = draft(state)
        new_state.coins -= cost
        new_state.research.level += 1
        new_state.research.total_spent += cost
        new_state.statistics.total_research_spent += cost
        apply_total_stats(new_state, self._rules)
        return Transition(new_state, True)
