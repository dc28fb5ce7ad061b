from datetime import timedelta

import pytest

from hugoland.domain.state import MenuSkill
from hugoland.services.combat_service import CombatService
from hugoland.services.time_service import TimeService
from tests.helpers.builders import NOW, RULES, get_catalog, make_clock, make_selecting_state, make_state
from tests.helpers.invariant_asserts import assert_stats_derived
from tests.helpers.scripted_rng import ScriptedRNG


def _make_service(clock) -> TimeService:
    return TimeService(get_catalog(), ScriptedRNG(), clock, RULES)


def _away_state(hours: float):
    state = make_state()
    state.offline_progress.last_save_time = NOW - timedelta(hours=hours)
    return state


def _menu_skill(skill_id: str, activated_at) -> MenuSkill:
    return MenuSkill(
        id=skill_id,
        name=skill_id,
        description="",
        duration_hours=8,
        activated_at=activated_at,
        expires_at=activated_at + timedelta(hours=8),
    )


def test_offline_time_is_capped_at_eight_hours() -> None:
    result = _make_service(make_clock()).hydrate(_away_state(10))

    report = result.value
    offline = result.state.offline_progress
    assert report.hours_away == pytest.approx(10)
    assert report.hours_credited == pytest.approx(8)
    assert report.coins == 96
    assert report.gems == 0
    assert offline.offline_coins == 96
    assert offline.offline_gems == 0
    assert offline.offline_time == 8 * 3600
    assert result.state.coins == 500


def test_offline_gems_scale_with_zone() -> None:
    state = _away_state(2)
    state.zone = 12

    result = _make_service(make_clock()).hydrate(state)

    assert result.value.coins == 68
    assert result.value.gems == 4


def test_short_absences_earn_nothing() -> None:
    result = _make_service(make_clock()).hydrate(_away_state(0.05))

    assert result.value.coins == 0
    assert result.state.offline_progress.offline_coins == 0


def test_coin_vacuum_doubles_offline_coins() -> None:
    state = _away_state(10)
    state.skills.active_menu_skill = _menu_skill("coin_vacuum", NOW - timedelta(hours=11))

    result = _make_service(make_clock()).hydrate(state)

    assert result.value.coins == 192
    assert result.state.skills.active_menu_skill is None


def test_hydrate_fills_the_market_and_offers_a_daily_reward() -> None:
    result = _make_service(make_clock()).hydrate(make_state())

    market = result.state.market
    assert len(market.items) == RULES.market_size
    assert market.last_refresh == NOW
    assert market.next_refresh == NOW + timedelta(minutes=5)
    assert result.state.daily_rewards.available_reward is not None


def test_hydrate_caps_garden_growth_at_the_offline_limit() -> None:
    state = _away_state(10)
    garden = state.garden
    garden.is_planted = True
    garden.water_hours_remaining = 24.0
    garden.last_growth_update = NOW - timedelta(hours=10)

    result = _make_service(make_clock()).hydrate(state)

    assert result.state.garden.growth_cm == pytest.approx(4)
    assert result.state.garden.water_hours_remaining == pytest.approx(16)


def test_claim_offline_rewards_moves_pending_amounts() -> None:
    service = _make_service(make_clock())
    state = service.hydrate(_away_state(10)).state

    claimed = service.claim_offline_rewards(state)
    again = service.claim_offline_rewards(claimed.state)

    assert claimed.value is True
    assert claimed.state.coins == 596
    assert claimed.state.offline_progress.offline_coins == 0
    assert claimed.state.statistics.coins_earned == 96
    assert again.value is False
    assert again.state is claimed.state


def test_refresh_market_waits_for_the_interval() -> None:
    clock = make_clock()
    service = _make_service(clock)
    state = service.hydrate(make_state()).state

    early = service.refresh_market(state)
    forced = service.refresh_market(state, force=True)
    clock.advance(6 * 60)
    due = service.refresh_market(state)

    assert early.value is False
    assert early.state is state
    assert forced.value is True
    assert due.value is True
    assert due.state.market.next_refresh == clock.now() + timedelta(minutes=5)


def test_tick_accumulates_play_time() -> None:
    clock = make_clock()
    service = _make_service(clock)
    state = service.hydrate(make_state()).state

    clock.advance(60)
    state = service.tick(state).state
    clock.advance(30)
    state = service.tick(state).state

    assert state.statistics.total_play_time == pytest.approx(90)
    assert state.skills.play_time_this_session == pytest.approx(90)

def test_tick_growth_keeps_the_risker_transform_in_combat() -> None:
    clock = make_clock()
    state = make_selecting_state("risker")
    garden = state.garden
    garden.is_planted = True
    garden.water_hours_remaining = 24.0
    garden.last_growth_update = NOW
    state = CombatService(get_catalog(), ScriptedRNG(), clock, RULES).select_adventure_skill(state, "risker").state
    clock.advance(hours=1)

    ticked = _make_service(clock).tick(state).state

    assert ticked.in_combat
    assert ticked.garden.growth_cm == pytest.approx(0.5)
    assert ticked.player_stats.attack == 40
    assert_stats_derived(ticked)


def test_tick_offers_a_daily_reward_after_midnight() -> None:
    clock = make_clock()
    service = _make_service(clock)
    state = service.hydrate(make_state()).state
    state.daily_rewards.available_reward = None
    state.daily_rewards.current_streak = 1
    state.daily_rewards.last_claim_date = NOW
    clock.advance(hours=13)

    ticked = service.tick(state).state

    assert ticked.daily_rewards.available_reward.day == 2


def test_tick_records_milestones_met_outside_combat() -> None:
    clock = make_clock()
    service = _make_service(clock)
    state = service.hydrate(make_state()).state
    state.zone = 20

    ticked = service.tick(state).state

    assert "zone_10" in ticked.achievements
