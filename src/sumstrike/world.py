import random
from typing import Callable

from esper import World

from sumstrike.components.board import Board
from sumstrike.components.game_state import GameMode, GameState
from sumstrike.components.selection import Selection
from sumstrike.config import GameConfig
from sumstrike.events.bus import EventBus
from sumstrike.utils.tile_ids import TileIdFactory


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.MENU,
    *,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    id_factory: Callable[[], str] | None = None,
) -> World:
    """Build a world holding the board, game state and selection singletons.

    ``rng`` and ``id_factory`` are shared by every system that spawns tiles or
    picks targets, so injecting them makes a whole session reproducible.
    """
    config = (config or GameConfig()).validate()
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)
    setattr(world, "tile_ids", id_factory or TileIdFactory())

    world.create_entity(
        GameState(mode=initial_mode, time_left=config.time_limit, level=config.level),
        Selection(),
    )
    world.create_entity(Board(rows=config.rows, cols=config.cols))
    return world
