from __future__ import annotations

import random
from typing import Dict, Mapping, Tuple

from esper import World

from sumstrike.components.tile import NumberTile
from sumstrike.config import GameConfig
from sumstrike.events.bus import EventBus
from sumstrike.systems.board_ops import clear_board, spawn_tile
from sumstrike.systems.game_controller import GameController
from sumstrike.world import create_world


def make_session(
    seed: int = 0,
    config: GameConfig | None = None,
) -> Tuple[EventBus, World, GameController]:
    """Build a bus, world and controller sharing one seeded random source."""

    bus = EventBus()
    world = create_world(bus, config=config, rng=random.Random(seed))
    controller = GameController(world, bus)
    return bus, world, controller


def place_tiles(world: World, cells: Mapping[Tuple[int, int], int]) -> Dict[Tuple[int, int], str]:
    """Replace the board with tiles of known values; returns the uid at each cell."""

    clear_board(world)
    uids: Dict[Tuple[int, int], str] = {}
    for (row, col), value in cells.items():
        entity = spawn_tile(world, row, col, value)
        uids[(row, col)] = world.component_for_entity(entity, NumberTile).uid
    return uids


def drive_ticks(controller: GameController, count: int, dt: float = 1.0) -> None:
    for _ in range(count):
        controller.tick(dt)
