from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache

from hugoland.core.clock import ManualClock
from hugoland.core.types import Rarity
from hugoland.domain.adventure import ActiveAdventureSkill, AdventureSkillOffer, AdventureSkillType
from hugoland.domain.entities import Armor, Enemy, Relic, Weapon
from hugoland.domain.rules import GameRules
from hugoland.domain.state import CombatPhase, GameState, new_game_state
from hugoland.services.catalog import GameCatalog

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
RULES = GameRules()


@lru_cache(maxsize=1)
def get_catalog() -> GameCatalog:
    return GameCatalog.load()


def make_clock(start: datetime = NOW) -> ManualClock:
    return ManualClock(start)


def make_state(**overrides) -> GameState:
    state = new_game_state(NOW, RULES)
    for name, value in overrides.items():
        setattr(state, name, value)
    return state


def make_weapon(
    item_id: str = "weapon_a",
    *,
    name: str = "Rusty Sword",
    rarity: Rarity = "common",
    base_attack: int = 15,
    upgrade_cost: int = 5,
    sell_price: int = 10,
    level: int = 1,
) -> Weapon:
    return Weapon(
        id=item_id,
        name=name,
        rarity=rarity,
        base_attack=base_attack,
        upgrade_cost=upgrade_cost,
        sell_price=sell_price,
        level=level,
    )


def make_armor(
    item_id: str = "armor_a",
    *,
    name: str = "Leather Vest",
    rarity: Rarity = "common",
    base_defense: int = 8,
    upgrade_cost: int = 5,
    sell_price: int = 10,
    level: int = 1,
) -> Armor:
    return Armor(
        id=item_id,
        name=name,
        rarity=rarity,
        base_defense=base_defense,
        upgrade_cost=upgrade_cost,
        sell_price=sell_price,
        level=level,
    )


def make_relic(
    relic_id: str = "relic_a",
    *,
    relic_type: str = "weapon",
    stat: int = 50,
    cost: int = 40,
    upgrade_cost: int = 20,
) -> Relic:
    return Relic(
        id=relic_id,
        name="Blade of Yojef",
        description="An ancient edge",
        relic_type=relic_type,  # type: ignore[arg-type]
        rarity="legendary",
        cost=cost,
        upgrade_cost=upgrade_cost,
        base_attack=stat if relic_type == "weapon" else None,
        base_defense=stat if relic_type == "armor" else None,
    )


def make_enemy(*, hp: int = 100, attack: int = 30, defense: int = 5, zone: int = 1) -> Enemy:
    return Enemy(id="enemy_test", name="Goblin", zone=zone, hp=hp, max_hp=hp, attack=attack, defense=defense)


def make_offer(skill_id: str) -> AdventureSkillOffer:
    skill_def = get_catalog().adventure_skills.get(skill_id)
    return AdventureSkillOffer(
        id=skill_id,
        skill_type=AdventureSkillType(skill_id),
        name=skill_def.name,
        description=skill_def.description,
    )


def make_selecting_state(*skill_ids: str, enemy: Enemy | None = None) -> GameState:
    state = make_state()
    state.combat_phase = CombatPhase.SELECTING
    state.adventure.available_skills = [make_offer(skill_id) for skill_id in skill_ids]
    state.adventure.pending_enemy = enemy or make_enemy()
    return state


def make_combat_state(
    enemy: Enemy | None = None,
    skill: AdventureSkillType | None = None,
) -> GameState:
    state = make_state()
    state.combat_phase = CombatPhase.IN_COMBAT
    state.current_enemy = enemy or make_enemy()
    state.combat_started_at = NOW
    if skill is not None:
        state.adventure.selected_skill = ActiveAdventureSkill.activate(skill, skill.value)
    return state
