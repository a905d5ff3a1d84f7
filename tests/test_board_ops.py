import random

import pytest

from sumstrike.config import GameConfig
from sumstrike.events.bus import EventBus
from sumstrike.systems.board_ops import (
    append_row,
    apply_gravity,
    entity_for_tile,
    fill,
    is_overflowing,
    live_tiles,
    remove_tiles,
    shift_up,
    tile_at,
    tile_count,
)
from sumstrike.world import create_world
from tests.helpers import place_tiles


def _world(rows=10, cols=6, seed=3):
    config = GameConfig(rows=rows, cols=cols, initial_rows=min(4, rows))
    return create_world(EventBus(), config=config, rng=random.Random(seed))


def _cells(world):
    return [(position.row, position.col) for _, _, position in live_tiles(world)]


def _assert_unique_cells(world):
    cells = _cells(world)
    assert len(cells) == len(set(cells))


def _assert_packed(world, rows, cols):
    by_col = {}
    for row, col in _cells(world):
        by_col.setdefault(col, []).append(row)
    for col, occupied in by_col.items():
        occupied.sort()
        assert occupied == list(range(rows - len(occupied), rows)), f"column {col} has a gap: {occupied}"


def test_fill_populates_bottom_rows_only():
    world = _world()
    uids = fill(world, 4)
    assert len(uids) == 24
    assert len(set(uids)) == 24
    rows = {row for row, _ in _cells(world)}
    assert rows == {6, 7, 8, 9}
    for _, tile, _ in live_tiles(world):
        assert 1 <= tile.value <= 9
    _assert_unique_cells(world)


def test_fill_replaces_previous_tiles():
    world = _world()
    first = set(fill(world, 4))
    second = set(fill(world, 2))
    assert tile_count(world) == 12
    assert not first & second


def test_shift_up_then_append_row():
    world = _world()
    fill(world, 2)
    shift_up(world)
    assert {row for row, _ in _cells(world)} == {7, 8}
    spawned = append_row(world)
    assert len(spawned) == 6
    for uid in spawned:
        entity = entity_for_tile(world, uid)
        assert entity is not None
    assert {row for row, _ in _cells(world)} == {7, 8, 9}
    _assert_unique_cells(world)


def test_append_row_refuses_occupied_bottom_row():
    world = _world()
    fill(world, 1)
    with pytest.raises(RuntimeError):
        append_row(world)


def test_overflow_detected_on_top_row():
    world = _world(rows=3, cols=2)
    place_tiles(world, {(2, 0): 1, (1, 0): 2})
    assert not is_overflowing(world)
    place_tiles(world, {(2, 0): 1, (1, 0): 2, (0, 0): 3})
    assert is_overflowing(world)
    with pytest.raises(RuntimeError):
        shift_up(world)


def test_remove_tiles_returns_survivors_and_ignores_unknown_ids():
    world = _world(rows=4, cols=2)
    uids = place_tiles(world, {(3, 0): 1, (3, 1): 2, (2, 0): 3})
    remaining = remove_tiles(world, {uids[(3, 0)], "missing"})
    assert sorted(tile.value for tile in remaining) == [2, 3]
    assert entity_for_tile(world, uids[(3, 0)]) is None
    assert tile_count(world) == 2


def test_gravity_closes_gaps_within_each_column():
    world = _world(rows=4, cols=2)
    uids = place_tiles(
        world,
        {(3, 0): 1, (2, 0): 2, (1, 0): 3, (0, 0): 4, (3, 1): 5, (1, 1): 6},
    )
    remove_tiles(world, {uids[(2, 0)], uids[(3, 0)]})
    moves = apply_gravity(world)
    assert {move.uid for move in moves} == {uids[(1, 0)], uids[(0, 0)], uids[(1, 1)]}
    assert all(move.source[1] == move.target[1] for move in moves)
    assert tile_at(world, 3, 0).uid == uids[(1, 0)]
    assert tile_at(world, 2, 0).uid == uids[(0, 0)]
    assert tile_at(world, 2, 1).uid == uids[(1, 1)]
    assert tile_at(world, 3, 1).uid == uids[(3, 1)]
    _assert_packed(world, 4, 2)


def test_gravity_on_packed_board_is_a_no_op():
    world = _world()
    fill(world, 4)
    before = _cells(world)
    assert apply_gravity(world) == []
    assert _cells(world) == before


def test_random_removals_always_leave_packed_unique_columns():
    rng = random.Random(11)
    for seed in range(20):
        world = _world(seed=seed)
        fill(world, 6)
        for _ in range(4):
            tiles = [tile.uid for _, tile, _ in live_tiles(world)]
            if not tiles:
                break
            remove_tiles(world, rng.sample(tiles, min(len(tiles), rng.randint(1, 5))))
            apply_gravity(world)
            _assert_packed(world, 10, 6)
            _assert_unique_cells(world)


def test_ids_stay_unique_while_rows_stack_up():
    world = _world(rows=6, cols=3)
    seen = set(fill(world, 2))
    while not is_overflowing(world):
        shift_up(world)
        spawned = append_row(world)
        assert not seen & set(spawned)
        seen.update(spawned)
    live = [tile.uid for _, tile, _ in live_tiles(world)]
    assert len(live) == 18
    assert len(set(live)) == len(live)
