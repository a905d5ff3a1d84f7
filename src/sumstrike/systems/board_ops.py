from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from esper import World

from sumstrike.components.board_position import BoardPosition
from sumstrike.components.tile import NumberTile
from sumstrike.utils.game_state import get_board, get_config

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
TileEntry = Tuple[int, NumberTile, BoardPosition]


@dataclass(frozen=True, slots=True)
class GravityMove:
    uid: str
    source: Position
    target: Position


def _rng(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def live_tiles(world: World) -> List[TileEntry]:
    """Every tile on the board as (entity, tile, position), top row first."""
    entries = [
        (entity, tile, position)
        for entity, (tile, position) in world.get_components(NumberTile, BoardPosition)
    ]
    entries.sort(key=lambda entry: (entry[2].row, entry[2].col))
    return entries


def tile_count(world: World) -> int:
    return len(world.get_component(NumberTile))


def entity_for_tile(world: World, uid: str) -> int | None:
    for entity, tile in world.get_component(NumberTile):
        if tile.uid == uid:
            return entity
    return None


def tile_at(world: World, row: int, col: int) -> NumberTile | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return world.component_for_entity(entity, NumberTile)
    return None


def tile_values(world: World, uids: Iterable[str]) -> List[int]:
    """Values for ``uids`` in the given order; ids not on the board are skipped."""
    by_uid: Dict[str, int] = {tile.uid: tile.value for _, tile in world.get_component(NumberTile)}
    return [by_uid[uid] for uid in uids if uid in by_uid]


def spawn_tile(world: World, row: int, col: int, value: int | None = None) -> int:
    config = get_config(world)
    if value is None:
        value = _rng(world).randint(1, config.max_value)
    uid = world.tile_ids()
    return world.create_entity(NumberTile(uid=uid, value=value), BoardPosition(row=row, col=col))


def clear_board(world: World) -> None:
    for entity, _ in list(world.get_component(NumberTile)):
        world.delete_entity(entity, immediate=True)


def fill(world: World, initial_rows: int) -> List[str]:
    """Replace the board contents with ``initial_rows`` full rows at the bottom."""
    board = get_board(world)
    clear_board(world)
    initial_rows = max(0, min(initial_rows, board.rows))
    spawned: List[str] = []
    for offset in range(initial_rows):
        row = board.rows - 1 - offset
        for col in range(board.cols):
            entity = spawn_tile(world, row, col)
            spawned.append(world.component_for_entity(entity, NumberTile).uid)
    logger.debug("filled %d rows (%d tiles)", initial_rows, len(spawned))
    return spawned


def is_overflowing(world: World) -> bool:
    return any(position.row == 0 for _, position in world.get_component(BoardPosition))


def shift_up(world: World) -> None:
    if is_overflowing(world):
        raise RuntimeError("shift_up called while a tile occupies row 0")
    for _, position in world.get_component(BoardPosition):
        position.row -= 1


def append_row(world: World) -> List[str]:
    board = get_board(world)
    bottom = board.rows - 1
    if any(position.row == bottom for _, position in world.get_component(BoardPosition)):
        raise RuntimeError("append_row called while the bottom row is occupied")
    spawned: List[str] = []
    for col in range(board.cols):
        entity = spawn_tile(world, bottom, col)
        spawned.append(world.component_for_entity(entity, NumberTile).uid)
    return spawned


def remove_tiles(world: World, uids: Iterable[str]) -> List[NumberTile]:
    """Delete the tiles whose ids are in ``uids`` and return the survivors."""
    doomed = set(uids)
    victims = [entity for entity, tile in world.get_component(NumberTile) if tile.uid in doomed]
    for entity in victims:
        world.delete_entity(entity, immediate=True)
    return [tile for _, tile, _ in live_tiles(world)]


def compute_gravity_moves(world: World) -> List[GravityMove]:
    board = get_board(world)
    columns: Dict[int, List[TileEntry]] = {}
    for entry in live_tiles(world):
        columns.setdefault(entry[2].col, []).append(entry)
    moves: List[GravityMove] = []
    for col, entries in sorted(columns.items()):
        entries.sort(key=lambda entry: entry[2].row, reverse=True)
        for index, (_, tile, position) in enumerate(entries):
            target_row = board.rows - 1 - index
            if position.row != target_row:
                moves.append(GravityMove(uid=tile.uid, source=(position.row, col), target=(target_row, col)))
    return moves


def apply_gravity(world: World) -> List[GravityMove]:
    """Close gaps in every column, bottom-most tile first; columns never mix."""
    moves = compute_gravity_moves(world)
    if not moves:
        return moves
    targets = {move.uid: move.target for move in moves}
    for _, (tile, position) in world.get_components(NumberTile, BoardPosition):
        target = targets.get(tile.uid)
        if target is not None:
            position.row = target[0]
    return moves

