import random

from sumstrike.config import GameConfig
from sumstrike.events.bus import EVENT_TARGET_CHANGED, EventBus
from sumstrike.systems.board_ops import fill, live_tiles, tile_values
from sumstrike.systems.target_system import TargetSystem
from sumstrike.utils.game_state import get_game_state
from sumstrike.world import create_world
from tests.helpers import place_tiles


def _setup(seed=0, config=None):
    bus = EventBus()
    world = create_world(bus, config=config, rng=random.Random(seed))
    return bus, world, TargetSystem(world, bus)


def test_target_is_sum_of_two_to_four_live_tiles():
    for seed in range(50):
        _, world, targets = _setup(seed)
        fill(world, 4)
        target = targets.regenerate()
        state = get_game_state(world)
        picked = state.target_tile_ids
        assert 2 <= len(picked) <= 4
        assert len(set(picked)) == len(picked)
        live = {tile.uid for _, tile, _ in live_tiles(world)}
        assert set(picked) <= live
        assert target == state.target_sum == sum(tile_values(world, picked))


def test_subset_size_capped_by_tile_count():
    _, world, targets = _setup(1)
    uids = place_tiles(world, {(9, 0): 4, (9, 1): 5})
    for _ in range(10):
        assert targets.regenerate() == 9
        assert sorted(get_game_state(world).target_tile_ids) == sorted(uids.values())


def test_single_tile_board_targets_that_tile():
    _, world, targets = _setup(2)
    place_tiles(world, {(9, 0): 7})
    assert targets.regenerate() == 7


def test_empty_board_leaves_neutral_target():
    bus, world, targets = _setup(3)
    captured = {}
    bus.subscribe(EVENT_TARGET_CHANGED, lambda s, **k: captured.update(k))
    state = get_game_state(world)
    state.target_sum = 12
    assert targets.regenerate() == 0
    assert state.target_sum == 0
    assert state.target_tile_ids == []
    assert captured == {"target_sum": 0, "tile_ids": []}


def test_same_seed_same_target():
    config = GameConfig()
    results = []
    for _ in range(2):
        _, world, targets = _setup(42, config)
        fill(world, 4)
        results.append((targets.regenerate(), list(get_game_state(world).target_tile_ids)))
    assert results[0] == results[1]
