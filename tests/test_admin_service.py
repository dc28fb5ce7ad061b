from hugoland.services.admin_service import AdminService
from tests.helpers.builders import make_state


def test_add_currency_requires_a_positive_amount() -> None:
    service = AdminService()
    state = make_state()

    assert service.add_coins(state, 250).state.coins == 750
    assert service.add_gems(state, 5).state.gems == 5
    assert service.add_coins(state, 0).state is state
    assert service.add_gems(state, -3).value is False


def test_teleport_clamps_to_zone_one_and_tracks_reach() -> None:
    service = AdminService()

    far = service.teleport_to_zone(make_state(), 42).state
    low = service.teleport_to_zone(make_state(), -5).state

    assert far.zone == 42
    assert far.statistics.zones_reached == 42
    assert low.zone == 1


def test_set_game_mode_validates_and_refills_survival_lives() -> None:
    service = AdminService()
    state = make_state()
    state.game_mode.survival_lives = 0

    survival = service.set_game_mode(state, "survival").state
    blitz = service.set_game_mode(state, "blitz").state
    bogus = service.set_game_mode(state, "hardcore")

    assert survival.game_mode.current == "survival"
    assert survival.game_mode.survival_lives == 3
    assert blitz.game_mode.speed_mode_active
    assert bogus.value is False
    assert bogus.state is state


def test_toggle_cheat_flips_known_cheats_only() -> None:
    service = AdminService()
    state = make_state()

    on = service.toggle_cheat(state, "infinite_gems").state
    off = service.toggle_cheat(on, "infinite_gems").state
    unknown = service.toggle_cheat(state, "god_mode")

    assert on.cheats.infinite_gems
    assert not off.cheats.infinite_gems
    assert unknown.value is False


def test_update_settings_is_all_or_nothing() -> None:
    service = AdminService()
    state = make_state()

    applied = service.update_settings(state, {"sound_volume": 10, "dark_mode": True})
    wrong_type = service.update_settings(state, {"sound_volume": 10, "dark_mode": "yes"})
    unknown = service.update_settings(state, {"font": "serif"})

    assert applied.value is True
    assert applied.state.settings.sound_volume == 10
    assert applied.state.settings.dark_mode is True
    assert wrong_type.state is state
    assert unknown.value is False
    assert state.settings.sound_volume == 50
