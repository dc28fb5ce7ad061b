"""Adventure skills: the per-combat modifier picked before a fight.

A combat carries at most one ``ActiveAdventureSkill``. It names its variant
and holds the runtime counters that variant needs (shield charges, stacks,
once-per-combat markers). Effects are resolved by matching on the variant.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from hugoland.core.rng import RNG


class AdventureSkillType(str, Enum):
    RISKER = "risker"
    LIGHTNING_CHAIN = "lightning_chain"
    SKIP_CARD = "skip_card"
    METAL_SHIELD = "metal_shield"
    TRUTH_LIES = "truth_lies"
    RAMP = "ramp"
    DODGE = "dodge"
    BERSERKER = "berserker"
    VAMPIRIC = "vampiric"
    PHOENIX = "phoenix"
    TIME_SLOW = "time_slow"
    CRITICAL_STRIKE = "critical_strike"
    SHIELD_WALL = "shield_wall"
    POISON_BLADE = "poison_blade"
    ARCANE_SHIELD = "arcane_shield"
    BATTLE_FRENZY = "battle_frenzy"
    ELEMENTAL_MASTERY = "elemental_mastery"
    SHADOW_STEP = "shadow_step"
    HEALING_AURA = "healing_aura"
    DOUBLE_STRIKE = "double_strike"
    MANA_SHIELD = "mana_shield"
    BERSERK_RAGE = "berserk_rage"
    DIVINE_PROTECTION = "divine_protection"
    STORM_CALL = "storm_call"
    BLOOD_PACT = "blood_pact"
    FROST_ARMOR = "frost_armor"
    FIREBALL = "fireball"


LIGHTNING_CHAIN_CHANCE = 0.3
CRITICAL_STRIKE_CHANCE = 0.2
FIREBALL_CHANCE = 0.25
STORM_CALL_CHANCE = 0.2
RAMP_STEP = 0.1
FRENZY_STEP = 0.05
VAMPIRIC_RATIO = 0.25
HEALING_AURA_HP = 10
SHIELD_WALL_HITS = 3
ARCANE_SHIELD_POOL = 100
POISON_TURNS = 3
BLOOD_PACT_HP_RATIO = 0.05


@dataclass(slots=True)
class AdventureSkillOffer:
    """One of the candidate skills shown on the pre-combat selection screen."""

    id: str
    skill_type: AdventureSkillType
    name: str
    description: str


@dataclass(slots=True)
class ActiveAdventureSkill:
    skill_type: AdventureSkillType
    name: str
    used: bool = False
    primed: bool = False
    stacks: int = 0
    charges: int = 0

    @classmethod
    def activate(cls, skill_type: AdventureSkillType, name: str) -> "ActiveAdventureSkill":
        match skill_type:
            case AdventureSkillType.SHIELD_WALL:
                charges = SHIELD_WALL_HITS
            case AdventureSkillType.ARCANE_SHIELD:
                charges = ARCANE_SHIELD_POOL
            case _:
                charges = 0
        return cls(skill_type=skill_type, name=name, charges=charges)


@dataclass(slots=True)
class HitContext:
    """Inputs and side effects of resolving one correct answer."""

    damage: int
    player_hp: int
    player_max_hp: int
    enemy_max_hp: int
    category: str | None = None
    heal: int = 0
    hp_cost: int = 0
    messages: List[str] = field(default_factory=list)


@dataclass(slots=True)
class MissContext:
    damage: int
    messages: List[str] = field(default_factory=list)


def apply_immediate_transform(skill: ActiveAdventureSkill, hp: int, attack: int, defense: int) -> tuple[int, int, int]:
    """Return (hp, attack, defense) after the one-off transform a skill applies on selection."""
    match skill.skill_type:
        case AdventureSkillType.RISKER:
            return math.floor(hp * 0.5), math.floor(attack * 2), defense
        case AdventureSkillType.BERSERKER:
            return hp, math.floor(attack * 1.5), math.floor(defense * 0.75)
        case _:
            return hp, attack, defense


def resolve_outgoing_damage(skill: ActiveAdventureSkill | None, ctx: HitContext, rng: RNG) -> HitContext:
    """Apply the selected skill to a correct answer's damage.

    Probabilistic effects make exactly one draw each.
    """
    if skill is None:
        return ctx
    damage = ctx.damage
    match skill.skill_type:
        case AdventureSkillType.LIGHTNING_CHAIN:
            if rng.chance(LIGHTNING_CHAIN_CHANCE):
                damage *= 2
                ctx.messages.append("Lightning chains for double damage!")
        case AdventureSkillType.CRITICAL_STRIKE:
            if rng.chance(CRITICAL_STRIKE_CHANCE):
                damage *= 3
                ctx.messages.append("Critical strike for triple damage!")
        case AdventureSkillType.DOUBLE_STRIKE:
            damage *= 2
            ctx.messages.append("Double strike hits twice!")
        case AdventureSkillType.HEALING_AURA:
            ctx.heal += HEALING_AURA_HP
            ctx.messages.append(f"Healing aura restores {HEALING_AURA_HP} HP!")
        case AdventureSkillType.RAMP:
            damage = math.floor(damage * (1 + RAMP_STEP * skill.stacks))
            skill.stacks += 1
        case AdventureSkillType.BATTLE_FRENZY:
            damage = math.floor(damage * (1 + FRENZY_STEP * skill.stacks))
            skill.stacks += 1
        case AdventureSkillType.BERSERK_RAGE:
            missing = 1 - (ctx.player_hp / ctx.player_max_hp) if ctx.player_max_hp > 0 else 0
            damage = math.floor(damage * (1 + missing))
        case AdventureSkillType.ELEMENTAL_MASTERY:
            if ctx.category:
                damage = math.floor(damage * 1.25)
                ctx.messages.append(f"{ctx.category} mastery empowers your strike!")
        case AdventureSkillType.BLOOD_PACT:
            cost = max(1, math.floor(ctx.player_max_hp * BLOOD_PACT_HP_RATIO))
            ctx.hp_cost += min(cost, max(0, ctx.player_hp - 1))
            damage = math.floor(damage * 1.75)
            ctx.messages.append("Blood pact feeds on your vitality!")
        case AdventureSkillType.FIREBALL:
            if rng.chance(FIREBALL_CHANCE):
                damage = math.floor(damage * 1.5)
                ctx.messages.append("A fireball engulfs the battlefield!")
        case AdventureSkillType.STORM_CALL:
            if rng.chance(STORM_CALL_CHANCE):
                damage += max(1, math.floor(ctx.enemy_max_hp * 0.1))
                ctx.messages.append("Lightning answers your call!")
        case AdventureSkillType.POISON_BLADE:
            if skill.charges > 0:
                poison = max(1, math.floor(ctx.enemy_max_hp * 0.05))
                damage += poison
                skill.charges -= 1
                ctx.messages.append(f"Poison deals {poison} extra damage!")
            else:
                skill.charges = POISON_TURNS
                ctx.messages.append("Your blade poisons the enemy!")
        case _:
            pass
    ctx.damage = damage
    if skill.skill_type is AdventureSkillType.VAMPIRIC:
        healing = math.floor(damage * VAMPIRIC_RATIO)
        ctx.heal += healing
        ctx.messages.append(f"Vampiric healing restores {healing} HP!")
    return ctx


def resolve_incoming_damage(skill: ActiveAdventureSkill | None, ctx: MissContext) -> MissContext:
    """Apply the selected skill's reductions to the damage of a wrong answer."""
    if skill is None:
        return ctx
    damage = ctx.damage
    match skill.skill_type:
        case AdventureSkillType.DODGE:
            if not skill.used:
                skill.used = True
                damage = 0
                ctx.messages.append("You dodge the attack!")
        case AdventureSkillType.SHADOW_STEP:
            if skill.primed and not skill.used:
                skill.used = True
                damage = 0
                ctx.messages.append("You shadow step out of harm's way!")
            else:
                skill.primed = True
        case AdventureSkillType.METAL_SHIELD:
            damage = math.floor(damage * 0.5)
        case AdventureSkillType.BERSERKER:
            damage = math.floor(damage * 1.25)
        case AdventureSkillType.FROST_ARMOR:
            damage = math.floor(damage * 0.75)
        case AdventureSkillType.MANA_SHIELD:
            absorbed = math.ceil(damage * 0.5)
            damage -= absorbed
            skill.stacks += absorbed
        case AdventureSkillType.SHIELD_WALL:
            if skill.charges > 0:
                skill.charges -= 1
                damage = math.floor(damage * 0.25)
                ctx.messages.append(f"Shield wall holds ({skill.charges} hits left)!")
        case AdventureSkillType.ARCANE_SHIELD:
            if skill.charges > 0:
                absorbed = min(skill.charges, damage)
                skill.charges -= absorbed
                damage -= absorbed
                ctx.messages.append(f"Arcane shield absorbs {absorbed} damage!")
        case AdventureSkillType.BATTLE_FRENZY:
            skill.stacks = 0
        case _:
            pass
    ctx.damage = max(0, damage)
    return ctx


def try_prevent_death(skill: ActiveAdventureSkill | None, max_hp: int) -> tuple[int, str] | None:
    """Return (hp, message) when the skill saves the player from a lethal hit."""
    if skill is None or skill.used:
        return None
    match skill.skill_type:
        case AdventureSkillType.DIVINE_PROTECTION:
            skill.used = True
            return 1, "Divine protection keeps you standing!"
        case AdventureSkillType.PHOENIX:
            skill.used = True
            return math.floor(max_hp * 0.5), "You rise from the ashes like a phoenix!"
        case _:
            return None
