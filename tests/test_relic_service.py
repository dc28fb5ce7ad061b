from hugoland.services.relic_service import RelicService
from tests.helpers.builders import RULES, make_relic, make_state
from tests.helpers.invariant_asserts import assert_stats_derived


def _make_service() -> RelicService:
    return RelicService(RULES)


def test_purchase_relic_moves_offer_into_inventory() -> None:
    state = make_state(gems=50)
    state.market.items = [make_relic("relic_a", cost=40), make_relic("relic_b", cost=45)]

    result = _make_service().purchase_relic(state, "relic_a")

    new_state = result.state
    assert result.value is True
    assert new_state.gems == 10
    assert [relic.id for relic in new_state.inventory.relics] == ["relic_a"]
    assert [relic.id for relic in new_state.market.items] == ["relic_b"]
    assert len(state.market.items) == 2


def test_purchase_relic_without_gems_is_rejected() -> None:
    state = make_state(gems=10)
    state.market.items = [make_relic(cost=40)]

    result = _make_service().purchase_relic(state, "relic_a")

    assert result.value is False
    assert result.state is state


def test_equip_relic_applies_its_bonus() -> None:
    state = make_state()
    state.inventory.relics = [make_relic(stat=50)]

    result = _make_service().equip_relic(state, "relic_a")

    assert result.value is True
    assert result.state.inventory.relics == []
    assert [relic.id for relic in result.state.inventory.equipped_relics] == ["relic_a"]
    assert result.state.player_stats.attack == 70


def test_equip_relic_respects_the_cap() -> None:
    state = make_state()
    state.inventory.equipped_relics = [make_relic(f"relic_{index}") for index in range(5)]
    state.inventory.relics = [make_relic("relic_extra")]

    result = _make_service().equip_relic(state, "relic_extra")

    assert result.value is False
    assert result.state is state


def test_unequip_relic_returns_it_to_inventory() -> None:
    service = _make_service()
    state = make_state()
    state.inventory.relics = [make_relic(stat=50)]
    equipped = service.equip_relic(state, "relic_a").state

    result = service.unequip_relic(equipped, "relic_a")

    assert result.value is True
    assert result.state.inventory.equipped_relics == []
    assert result.state.player_stats.attack == 20


def test_upgrade_equipped_relic_refreshes_stats() -> None:
    service = _make_service()
    state = make_state(gems=30)
    state.inventory.relics = [make_relic(stat=50, upgrade_cost=20)]
    state = service.equip_relic(state, "relic_a").state

    result = service.upgrade_relic(state, "relic_a")

    relic = result.state.inventory.equipped_relics[0]
    assert result.value is True
    assert relic.level == 2
    assert relic.base_attack == 72
    assert relic.upgrade_cost == 30
    assert result.state.gems == 10
    assert result.state.statistics.items_upgraded == 1
    assert result.state.player_stats.attack == 20 + 72 + 22
    assert_stats_derived(result.state)


def test_sell_relic_only_sells_unequipped_relics() -> None:
    service = _make_service()
    state = make_state()
    state.inventory.relics = [make_relic("relic_a", cost=41)]
    state.inventory.equipped_relics = [make_relic("relic_b")]

    sold = service.sell_relic(state, "relic_a")
    refused = service.sell_relic(state, "relic_b")

    assert sold.value is True
    assert sold.state.gems == 20
    assert sold.state.inventory.relics == []
    assert refused.value is False
    assert refused.state is state
