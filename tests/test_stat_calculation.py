from hugoland.domain.adventure import AdventureSkillType
from hugoland.domain.rules import GameRules
from hugoland.domain.stat_calculation import apply_total_stats, calculate_total_stats
from hugoland.domain.state import CombatPhase
from tests.helpers.builders import RULES, make_armor, make_combat_state, make_relic, make_state, make_weapon


def test_totals_without_equipment_are_base_stats() -> None:
    totals = calculate_total_stats(make_state(), RULES)

    assert (totals.attack, totals.defense, totals.max_hp) == (20, 10, 100)


def test_equipment_adds_per_level_increments() -> None:
    state = make_state()
    state.inventory.weapons.append(make_weapon(base_attack=15, level=2))
    state.inventory.armor.append(make_armor(base_defense=8, level=3))
    state.inventory.current_weapon_id = "weapon_a"
    state.inventory.current_armor_id = "armor_a"

    totals = calculate_total_stats(state, RULES)

    assert totals.attack == 20 + 15 + 10
    assert totals.defense == 10 + 8 + 10


def test_unequipped_items_do_not_count() -> None:
    state = make_state()
    state.inventory.weapons.append(make_weapon(base_attack=99))

    assert calculate_total_stats(state, RULES).attack == 20


def test_equipped_relics_sum_with_level_bonus() -> None:
    state = make_state()
    blade = make_relic("relic_blade", stat=50)
    blade.level = 2
    state.inventory.equipped_relics = [blade, make_relic("relic_ward", relic_type="armor", stat=30)]

    totals = calculate_total_stats(state, RULES)

    assert totals.attack == 20 + 50 + 22
    assert totals.defense == 10 + 30


def test_garden_bonus_is_a_percentage_of_every_stat() -> None:
    state = make_state()
    state.inventory.weapons.append(make_weapon(base_attack=15))
    state.inventory.current_weapon_id = "weapon_a"
    state.garden.total_growth_bonus = 10.0

    totals = calculate_total_stats(state, RULES)

    assert totals.attack == 38
    assert totals.defense == 11
    assert totals.max_hp == 110


def test_research_bonus_only_applies_when_enabled() -> None:
    state = make_state()
    state.research.level = 2

    assert calculate_total_stats(state, RULES).attack == 20
    assert calculate_total_stats(state, GameRules(research_enabled=True)).attack == 24


def test_durability_scaling_is_optional() -> None:
    state = make_state()
    weapon = make_weapon(base_attack=20)
    weapon.durability = 50
    state.inventory.weapons.append(weapon)
    state.inventory.current_weapon_id = weapon.id

    assert calculate_total_stats(state, RULES).attack == 40
    assert calculate_total_stats(state, GameRules(apply_durability_scaling=True)).attack == 30


def test_apply_total_stats_keeps_hp_ratio() -> None:
    state = make_state()
    state.player_stats.hp = 50
    state.garden.total_growth_bonus = 20.0

    apply_total_stats(state, RULES)

    assert state.player_stats.max_hp == 120
    assert state.player_stats.hp == 60


def test_selected_skill_transform_holds_during_combat() -> None:
    state = make_combat_state(skill=AdventureSkillType.BERSERKER)

    totals = calculate_total_stats(state, RULES)

    assert (totals.attack, totals.defense, totals.max_hp) == (30, 7, 100)


def test_skill_transform_ignored_outside_combat() -> None:
    state = make_combat_state(skill=AdventureSkillType.RISKER)
    state.combat_phase = CombatPhase.IDLE
    state.current_enemy = None

    assert calculate_total_stats(state, RULES).attack == 20


def test_equipping_mid_combat_keeps_the_skill_transform() -> None:
    state = make_combat_state(skill=AdventureSkillType.RISKER)
    state.inventory.weapons.append(make_weapon(base_attack=15))
    state.inventory.current_weapon_id = "weapon_a"

    apply_total_stats(state, RULES)

    assert state.player_stats.attack == (20 + 15) * 2
