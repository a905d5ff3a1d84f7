from __future__ import annotations

import logging

from esper import World

from sumstrike.components.board import Board
from sumstrike.components.game_state import GameMode, GameState
from sumstrike.components.selection import Selection
from sumstrike.config import GameConfig
from sumstrike.events.bus import EVENT_GAME_MODE_CHANGED, EventBus

logger = logging.getLogger(__name__)


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState component not found; build the world with create_world()")


def get_selection(world: World) -> Selection:
    """Return the shared Selection component, creating it if absent."""
    for _, selection in world.get_component(Selection):
        return selection
    selection = Selection()
    world.create_entity(selection)
    return selection


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found; build the world with create_world()")


def get_config(world: World) -> GameConfig:
    config = getattr(world, "config", None)
    if config is None:
        raise RuntimeError("world has no GameConfig; build the world with create_world()")
    return config


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> bool:
    """Update the global game mode and emit a change event when it differs."""

    previous_mode: GameMode | None = None
    for _, state in world.get_component(GameState):
        previous_mode = state.mode
        if state.mode == mode:
            return False
        state.mode = mode
        logger.debug("game mode %s -> %s", previous_mode.name, mode.name)
        event_bus.emit(
            EVENT_GAME_MODE_CHANGED,
            previous_mode=previous_mode,
            new_mode=mode,
        )
        return True
    # No existing GameState component; create a new one.
    world.create_entity(GameState(mode=mode))
    event_bus.emit(
        EVENT_GAME_MODE_CHANGED,
        previous_mode=previous_mode,
        new_mode=mode,
    )
    return True
