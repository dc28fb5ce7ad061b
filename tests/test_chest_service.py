from datetime import timedelta

from hugoland.domain.state import MenuSkill
from hugoland.services.chest_service import ChestService
from tests.helpers.builders import NOW, RULES, get_catalog, make_clock, make_state
from tests.helpers.invariant_asserts import assert_state_invariants
from tests.helpers.scripted_rng import ScriptedRNG


def _make_service(rng) -> ChestService:
    return ChestService(get_catalog(), rng, make_clock(), RULES)


def test_open_chest_pays_out_an_item() -> None:
    # rarity roll, gem roll, weapon coin flip, enchant roll
    rng = ScriptedRNG(randoms=[0.1, 0.5, 0.3, 0.9], choices=[0], ints=[12])
    state = make_state(coins=500, gems=10)

    result = _make_service(rng).open_chest(state, 200)

    new_state = result.state
    reward = result.value
    assert reward.type == "items"
    assert reward.gems == 0
    assert len(reward.items) == 1
    item = reward.items[0]
    assert item.rarity == "common"
    assert item.name == "Rusty Sword"
    assert item.base_attack == 12
    assert not item.is_enchanted
    assert new_state.coins == 300
    assert new_state.gems == 10
    assert [weapon.id for weapon in new_state.inventory.weapons] == [item.id]
    assert new_state.collection_book.weapons == {"Rusty Sword": True}
    assert new_state.collection_book.total_weapons_found == 1
    assert new_state.collection_book.rarity_stats["common"] == 1
    assert new_state.statistics.chests_opened == 1
    assert new_state.statistics.items_collected == 1
    assert state.coins == 500
    assert_state_invariants(new_state)


def test_open_chest_can_pay_out_gems_instead() -> None:
    rng = ScriptedRNG(randoms=[0.1, 0.1])

    result = _make_service(rng).open_chest(make_state(coins=500, gems=10), 200)

    assert result.value.type == "gems"
    assert result.value.gems == 15
    assert result.value.items == []
    assert result.state.gems == 25
    assert result.state.coins == 300
    assert result.state.inventory.weapons == []


def test_gold_chest_yields_two_items_of_one_rarity() -> None:
    # gold weights: common 20, rare 40 -> 0.3 lands in rare
    rng = ScriptedRNG(randoms=[0.3, 0.5, 0.9, 0.9, 0.1, 0.9])

    result = _make_service(rng).open_chest(make_state(coins=500), 400)

    assert len(result.value.items) == 2
    assert {item.rarity for item in result.value.items} == {"rare"}
    assert result.state.coins == 100


def test_enchanter_buff_raises_enchant_chance() -> None:
    rng = ScriptedRNG(randoms=[0.1, 0.5, 0.3, 0.2])
    state = make_state(coins=500)
    state.skills.active_menu_skill = MenuSkill(
        id="enchanter",
        name="Enchanter",
        description="",
        duration_hours=2,
        activated_at=NOW,
        expires_at=NOW + timedelta(hours=2),
    )

    result = _make_service(rng).open_chest(state, 0)

    assert result.value.items[0].is_enchanted
    assert result.value.items[0].name.startswith("Enchanted ")


def test_open_chest_without_coins_is_rejected() -> None:
    state = make_state(coins=100)

    result = _make_service(ScriptedRNG()).open_chest(state, 200)

    assert result.value is None
    assert result.state is state


def test_purchase_mythical_grants_a_mythical_item() -> None:
    result = _make_service(ScriptedRNG(randoms=[0.3])).purchase_mythical(make_state(coins=1000), 1000)

    item = result.value.items[0]
    assert item.rarity == "mythical"
    assert result.state.coins == 0
    assert result.state.collection_book.rarity_stats["mythical"] == 1


def test_cheat_item_requires_the_cheat() -> None:
    service = _make_service(ScriptedRNG())
    state = make_state()

    refused = service.generate_cheat_item(state)
    state.cheats.obtain_any_item = True
    granted = service.generate_cheat_item(state)

    assert refused.value is None
    assert refused.state is state
    assert granted.value.rarity == "mythical"
    assert len(granted.state.inventory.weapons) + len(granted.state.inventory.armor) == 1
