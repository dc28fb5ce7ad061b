from hugoland.core.scheduler import Scheduler
from hugoland.data.storage import MemoryStorage
from hugoland.services.controllers import MiningController, MiningRateLimiter
from hugoland.services.game_store import GameStore
from hugoland.services.mining_service import MiningService
from tests.helpers.builders import RULES, get_catalog, make_clock, make_state
from tests.helpers.scripted_rng import ScriptedRNG


def test_mine_gem_usually_yields_a_regular_gem() -> None:
    state = make_state()

    result = MiningService(ScriptedRNG(randoms=[0.5]), RULES).mine_gem(state, 12.0, 30.0)

    assert result.value.gems == 1
    assert result.value.shiny_gems == 0
    assert (result.value.x, result.value.y) == (12.0, 30.0)
    assert result.state.gems == 1
    assert result.state.mining.total_gems_mined == 1
    assert state.gems == 0


def test_mine_gem_can_yield_a_shiny_gem() -> None:
    result = MiningService(ScriptedRNG(randoms=[0.01]), RULES).mine_gem(make_state(), 0, 0)

    assert result.value.shiny_gems == 1
    assert result.state.shiny_gems == 1
    assert result.state.gems == 0
    assert result.state.mining.total_shiny_gems_mined == 1


def test_exchange_shiny_gems_at_ten_to_one() -> None:
    state = make_state(shiny_gems=5)

    result = MiningService(ScriptedRNG(), RULES).exchange_shiny_gems(state, 3)

    assert result.value is True
    assert result.state.shiny_gems == 2
    assert result.state.gems == 30


def test_exchange_more_than_owned_is_rejected() -> None:
    state = make_state(shiny_gems=5)

    result = MiningService(ScriptedRNG(), RULES).exchange_shiny_gems(state, 10)

    assert result.value is False
    assert result.state is state


def test_limiter_blocks_the_sixth_click_for_thirty_seconds() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    limiter = MiningRateLimiter(clock, scheduler)

    for _ in range(5):
        assert limiter.try_acquire() is None
        clock.advance(1)
        scheduler.run_pending()

    assert limiter.try_acquire() == "rate_limited"
    assert limiter.is_blocked
    assert limiter.block_remaining == 30

    clock.advance(10)
    scheduler.run_pending()
    assert limiter.try_acquire() == "blocked"
    assert limiter.block_remaining == 20

    clock.advance(20)
    scheduler.run_pending()
    assert not limiter.is_blocked
    assert limiter.clicks_in_window == 0
    assert limiter.try_acquire() is None


def test_limiter_enforces_cooldown_between_clicks() -> None:
    clock = make_clock()
    limiter = MiningRateLimiter(clock, Scheduler(clock))

    assert limiter.try_acquire() is None
    clock.advance(0.5)
    assert limiter.try_acquire() == "cooldown"
    clock.advance(0.5)
    assert limiter.try_acquire() is None


def test_limiter_window_slides() -> None:
    clock = make_clock()
    limiter = MiningRateLimiter(clock, Scheduler(clock))

    for _ in range(4):
        assert limiter.try_acquire() is None
        clock.advance(3)

    assert limiter.clicks_in_window == 3


def test_limiter_close_cancels_its_timers() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    limiter = MiningRateLimiter(clock, scheduler)

    limiter.close()

    assert scheduler.pending() == []


def test_controller_routes_accepted_clicks_to_the_store() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    store = GameStore(
        MemoryStorage(),
        catalog=get_catalog(),
        rng=ScriptedRNG(randoms=[0.5, 0.5]),
        clock=clock,
        rules=RULES,
        scheduler=scheduler,
    )
    controller = MiningController(store, MiningRateLimiter(clock, scheduler))

    assert controller.click(1, 1).reason == "not_loaded"
    store.load()
    accepted = controller.click(1, 1)
    rejected = controller.click(1, 1)

    assert accepted.accepted
    assert accepted.result.gems == 1
    assert rejected.reason == "cooldown"
    assert store.state.gems == 1
