"""Trivia-driven combat: skill selection, answers and combat resolution."""
from __future__ import annotations

import logging
import math
from typing import List

from hugoland.core.clock import Clock
from hugoland.core.rng import RNG
from hugoland.domain.adventure import (
    ActiveAdventureSkill,
    AdventureSkillOffer,
    AdventureSkillType,
    HitContext,
    MissContext,
    apply_immediate_transform,
    resolve_incoming_damage,
    resolve_outgoing_damage,
    try_prevent_death,
)
from hugoland.domain.progression import (
    add_experience,
    apply_mode_multipliers,
    base_zone_reward,
    streak_multiplier,
)
from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import apply_total_stats
from hugoland.domain.state import CombatPhase, GameState
from hugoland.services.catalog import GameCatalog
from hugoland.services.factories import create_enemy, create_random_item
from hugoland.services.milestone_service import MilestoneService
from hugoland.services.transition import Transition, draft

logger = logging.getLogger(__name__)


class CombatService:
    """Owns the idle -> selecting -> in_combat -> idle cycle."""

    def __init__(
        self,
        catalog: GameCatalog,
        rng: RNG,
        clock: Clock,
        rules: GameRules,
        milestones: MilestoneService | None = None,
    ) -> None:
        self._catalog = catalog
        self._rng = rng
        self._clock = clock
        self._rules = rules
        self._milestones = milestones or MilestoneService(catalog, clock)

    def start_combat(self, state: GameState) -> Transition[List[AdventureSkillOffer] | None]:
        """Spawn an enemy for the current zone and offer adventure skills."""
        if state.combat_phase is not CombatPhase.IDLE:
            return Transition(state, None)
        new_state = draft(state)
        stats = new_state.player_stats
        if stats.hp <= 0:
            stats.hp = stats.max_hp
        mode = new_state.game_mode
        if mode.current == "survival" and mode.survival_lives <= 0:
            mode.survival_lives = mode.max_survival_lives

        enemy = create_enemy(new_state.zone, self._catalog.enemies, self._rng)
        catalog = self._catalog.adventure_skills.all()
        count = min(self._rules.adventure_skill_offer_count, len(catalog))
        offers = [
            AdventureSkillOffer(
                id=skill_def.id,
                skill_type=AdventureSkillType(skill_def.id),
                name=skill_def.name,
                description=skill_def.description,
            )
            for skill_def in self._rng.sample(catalog, count)
        ]
        new_state.adventure.selected_skill = None
        new_state.adventure.available_skills = offers
        new_state.adventure.pending_enemy = enemy
        new_state.combat_phase = CombatPhase.SELECTING
        return Transition(new_state, list(offers))

    def select_adventure_skill(self, state: GameState, skill_id: str) -> Transition[bool]:
        if state.combat_phase is not CombatPhase.SELECTING:
            return Transition(state, False)
        offer = next(
            (
                candidate
                for candidate in state.adventure.available_skills
                if skill_id in (candidate.id, candidate.skill_type.value)
            ),
            None,
        )
        if offer is None:
            return Transition(state, False)
        new_state = draft(state)
        skill = ActiveAdventureSkill.activate(offer.skill_type, offer.name)
        new_state.adventure.selected_skill = skill
        stats = new_state.player_stats
        stats.hp, stats.attack, stats.defense = apply_immediate_transform(
            skill, stats.hp, stats.attack, stats.defense
        )
        self._begin_combat(new_state)
        new_state.add_log(f"{offer.name} is active for this battle.", self._rules.combat_log_limit)
        return Transition(new_state, True)

    def skip_adventure_skills(self, state: GameState) -> Transition[bool]:
        if state.combat_phase is not CombatPhase.SELECTING:
            return Transition(state, False)
        new_state = draft(state)
        new_state.adventure.selected_skill = None
        self._begin_combat(new_state)
        return Transition(new_state, True)

    def use_skip_card(self, state: GameState) -> Transition[bool]:
        """Spend the skip card to count the current question as answered correctly."""
        skill = state.adventure.selected_skill
        if (
            not state.in_combat
            or skill is None
            or skill.skill_type is not AdventureSkillType.SKIP_CARD
            or skill.used
        ):
            return Transition(state, False)
        new_state = draft(state)
        assert new_state.adventure.selected_skill is not None
        new_state.adventure.selected_skill.used = True
        new_state.add_log("Skip card used: the question counts as correct.", self._rules.combat_log_limit)
        self._resolve_hit(new_state, None)
        return Transition(new_state, True)

    def attack(self, state: GameState, hit: bool, category: str | None = None) -> Transition[bool]:
        """Resolve one answered question against the current enemy."""
        if not state.in_combat or state.current_enemy is None:
            return Transition(state, False)
        new_state = draft(state)
        if hit:
            self._resolve_hit(new_state, category)
        else:
            self._resolve_miss(new_state, category)
        return Transition(new_state, True)

    def _log(self, state: GameState, message: str) -> None:
        state.add_log(message, self._rules.combat_log_limit)

    def _begin_combat(self, state: GameState) -> None:
        enemy = state.adventure.pending_enemy
        if enemy is None:
            enemy = create_enemy(state.zone, self._catalog.enemies, self._rng)
        state.current_enemy = enemy
        state.adventure.pending_enemy = None
        state.adventure.available_skills = []
        state.combat_phase = CombatPhase.IN_COMBAT
        state.combat_started_at = self._clock.now()
        state.has_used_revival = False
        state.combat_log = []
        self._log(state, f"You enter combat in Zone {state.zone} against {enemy.name}!")

    def _end_combat(self, state: GameState) -> None:
        state.current_enemy = None
        state.combat_phase = CombatPhase.IDLE
        state.combat_started_at = None
        state.adventure.selected_skill = None
        state.adventure.pending_enemy = None
        apply_total_stats(state, self._rules)

    def _resolve_hit(self, state: GameState, category: str | None) -> None:
        enemy = state.current_enemy
        assert enemy is not None
        stats = state.player_stats
        state.statistics.record_answer(True, category)

        streak = state.knowledge_streak
        streak.current += 1
        streak.best = max(streak.best, streak.current)
        streak.multiplier = streak_multiplier(streak.current, self._rules)
        state.statistics.longest_streak = max(state.statistics.longest_streak, streak.best)

        ctx = resolve_outgoing_damage(
            state.adventure.selected_skill,
            HitContext(
                damage=max(1, stats.attack - enemy.defense),
                player_hp=stats.hp,
                player_max_hp=stats.max_hp,
                enemy_max_hp=enemy.max_hp,
                category=category,
            ),
            self._rng,
        )
        for message in ctx.messages:
            self._log(state, message)
        if ctx.hp_cost:
            stats.hp = max(1, stats.hp - ctx.hp_cost)
        if ctx.heal:
            stats.hp = min(stats.max_hp, stats.hp + ctx.heal)

        enemy.hp = max(0, enemy.hp - ctx.damage)
        state.statistics.total_damage_dealt += ctx.damage
        self._log(state, f"You deal {ctx.damage} damage! Enemy HP: {enemy.hp}/{enemy.max_hp}")
        if enemy.hp <= 0:
            self._resolve_victory(state)

    def _resolve_miss(self, state: GameState, category: str | None) -> None:
        enemy = state.current_enemy
        assert enemy is not None
        stats = state.player_stats
        state.statistics.record_answer(False, category)
        state.knowledge_streak.current = 0
        state.knowledge_streak.multiplier = streak_multiplier(0, self._rules)

        ctx = resolve_incoming_damage(
            state.adventure.selected_skill,
            MissContext(damage=max(1, enemy.attack - stats.defense)),
        )
        for message in ctx.messages:
            self._log(state, message)
        stats.hp = max(0, stats.hp - ctx.damage)
        state.statistics.total_damage_taken += ctx.damage
        self._log(state, f"Enemy deals {ctx.damage} damage! Your HP: {stats.hp}/{stats.max_hp}")
        if stats.hp <= 0:
            self._resolve_lethal(state)

    def _resolve_lethal(self, state: GameState) -> None:
        stats = state.player_stats
        saved = try_prevent_death(state.adventure.selected_skill, stats.max_hp)
        if saved is not None:
            stats.hp, message = saved
            self._log(state, message)
            return
        if not state.has_used_revival:
            state.has_used_revival = True
            stats.hp = math.floor(stats.max_hp * self._rules.revival_hp_ratio)
            state.statistics.revivals += 1
            self._log(state, "You have been revived with 50% HP!")
            return

        state.statistics.total_deaths += 1
        mode = state.game_mode
        if mode.current == "survival":
            mode.survival_lives = max(0, mode.survival_lives - 1)
            if mode.survival_lives > 0:
                stats.hp = stats.max_hp
                self._log(state, f"You died! {mode.survival_lives} lives remaining.")
                return
            self._log(state, "All lives lost! Game Over!")
        else:
            self._log(state, "You have been defeated!")
        logger.debug("Player defeated in zone %s", state.zone)
        self._end_combat(state)

    def _resolve_victory(self, state: GameState) -> None:
        rules = self._rules
        now = self._clock.now()
        cleared_zone = state.zone
        reward = base_zone_reward(cleared_zone, rules)
        multiplier = state.knowledge_streak.multiplier

        coins = math.floor(reward.coins * multiplier)
        gems = math.floor(reward.gems * multiplier)
        coins, gems = apply_mode_multipliers(coins, gems, state.game_mode.current, rules)
        experience = reward.experience
        skills = state.skills
        if skills.menu_skill_active("golden_touch", now):
            coins = math.floor(coins * 1.5)
        if skills.menu_skill_active("luck_gem", now):
            gems = math.floor(gems * 1.5)
        if skills.menu_skill_active("xp_surge", now):
            experience *= 2
        if state.cheats.infinite_coins:
            coins = rules.cheat_currency_amount
        if state.cheats.infinite_gems:
            gems = rules.cheat_currency_amount

        state.coins += coins
        state.gems += gems
        state.zone += 1
        stats = state.statistics
        stats.coins_earned += coins
        stats.gems_earned += gems
        stats.total_victories += 1
        stats.zones_reached = max(stats.zones_reached, state.zone)
        if state.combat_started_at is not None:
            elapsed = (now - state.combat_started_at).total_seconds()
            if stats.fastest_victory <= 0 or elapsed < stats.fastest_victory:
                stats.fastest_victory = elapsed

        levels = add_experience(state.progression, experience, rules)
        if state.zone >= rules.premium_zone:
            state.is_premium = True

        self._log(state, f"Victory! You earned {coins} coins and {gems} gems!")
        self._log(state, f"Advancing to Zone {state.zone}!")
        if levels:
            self._log(state, f"Level up! You are now level {state.progression.level}.")

        if cleared_zone >= rules.item_drop_min_zone and self._rng.chance(rules.item_drop_chance):
            item = create_random_item(
                self._catalog.item_names, self._rng, enchant_chance=rules.enchant_chance
            )
            state.inventory.add_item(item)
            state.collection_book.register_found_item(item.kind, item.name, item.rarity)
            stats.items_collected += 1
            self._log(state, f"{item.name} ({item.rarity}) dropped!")

        unlocks = self._milestones.record(state, now)
        for milestone_id in unlocks.achievements:
            self._log(state, f"Achievement unlocked: {self._milestones.achievement_name(milestone_id)}!")

        self._end_combat(state)
        if state.game_mode.current != "survival":
            state.player_stats.hp = state.player_stats.max_hp
        logger.debug("Zone %s cleared for %s coins and %s gems", cleared_zone, coins, gems)
