from __future__ import annotations

import logging
import random

from esper import World

from sumstrike.components.tile import NumberTile
from sumstrike.events.bus import EVENT_TARGET_CHANGED, EventBus
from sumstrike.utils.game_state import get_config, get_game_state

logger = logging.getLogger(__name__)


class TargetSystem:
    """Picks target sums that are reachable from the tiles on the board.

    A target is the sum of a random handful of distinct live tiles, so at the
    moment it is generated at least one subset (the one it was built from)
    hits it exactly. Rows added afterwards may bury those tiles; that is part
    of the pressure of the game and is not corrected here.
    """

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()

    def regenerate(self) -> int:
        state = get_game_state(self.world)
        tiles = sorted((tile for _, tile in self.world.get_component(NumberTile)), key=lambda tile: tile.uid)
        if not tiles:
            state.target_sum = 0
            state.target_tile_ids = []
            logger.debug("board empty; target left neutral")
            self.event_bus.emit(EVENT_TARGET_CHANGED, target_sum=0, tile_ids=[])
            return 0
        picked = self._rng.sample(tiles, self._subset_size(len(tiles)))
        state.target_sum = sum(tile.value for tile in picked)
        state.target_tile_ids = [tile.uid for tile in picked]
        logger.debug("new target %d from %s", state.target_sum, state.target_tile_ids)
        self.event_bus.emit(
            EVENT_TARGET_CHANGED,
            target_sum=state.target_sum,
            tile_ids=list(state.target_tile_ids),
        )
        return state.target_sum

    def _subset_size(self, available: int) -> int:
        config = get_config(self.world)
        upper = min(config.max_target_tiles, available)
        lower = min(config.min_target_tiles, upper)
        return self._rng.randint(lower, upper)
