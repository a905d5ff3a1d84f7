from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from esper import World

from sumstrike.events.bus import (
    EVENT_BIG_CLEAR,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EventBus,
)
from sumstrike.systems.board_ops import GravityMove, apply_gravity, remove_tiles, tile_count, tile_values
from sumstrike.systems.selection_system import SelectionSystem
from sumstrike.systems.target_system import TargetSystem
from sumstrike.utils.game_state import get_config, get_game_state

logger = logging.getLogger(__name__)


class MatchOutcome(Enum):
    MATCH = "match"
    OVERSHOOT = "overshoot"
    PENDING = "pending"


@dataclass(slots=True)
class Resolution:
    outcome: MatchOutcome
    points: int = 0
    tile_ids: List[str] = field(default_factory=list)
    moves: List[GravityMove] = field(default_factory=list)
    big_clear: bool = False


class MatchResolutionSystem:
    """Compares the selection against the target after each selection change.

    Run exactly once per accepted toggle. An exact hit scores, clears the
    tiles, compacts the columns and rolls a new target; an overshoot only
    drops the selection (and rolls a new target, since the selection is now
    empty); anything below the target waits for more picks. Deselecting back
    to an empty selection also rolls a new target while tiles remain.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        selection: SelectionSystem,
        targets: TargetSystem,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.selection = selection
        self.targets = targets

    def evaluate(self) -> Resolution:
        state = get_game_state(self.world)
        current = self.selection.current_sum()
        if state.target_sum > 0 and current == state.target_sum:
            return self._resolve_match()
        if current > state.target_sum:
            cleared = self.selection.clear(reason="overshoot")
            logger.debug("overshoot: %d > %d with %s", current, state.target_sum, cleared)
            self.targets.regenerate()
            return Resolution(MatchOutcome.OVERSHOOT, tile_ids=cleared)
        selected = self.selection.tile_ids
        if not selected and tile_count(self.world):
            logger.debug("selection emptied by deselect; rolling a new target")
            self.targets.regenerate()
        return Resolution(MatchOutcome.PENDING, tile_ids=selected)

    def _resolve_match(self) -> Resolution:
        state = get_game_state(self.world)
        config = get_config(self.world)
        tile_ids = self.selection.tile_ids
        values = tile_values(self.world, tile_ids)
        points = len(tile_ids) * config.points_per_tile
        state.score += points
        state.best_score = max(state.best_score, state.score)

        remove_tiles(self.world, tile_ids)
        moves = apply_gravity(self.world)
        self.selection.clear(reason="match")
        logger.debug("cleared %s for %d points", tile_ids, points)

        self.event_bus.emit(EVENT_MATCH_CLEARED, tile_ids=list(tile_ids), values=values, points=points)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=list(moves))
        big_clear = points > config.big_clear_threshold
        if big_clear:
            self.event_bus.emit(EVENT_BIG_CLEAR, points=points, tile_ids=list(tile_ids))

        self.targets.regenerate()
        return Resolution(MatchOutcome.MATCH, points=points, tile_ids=tile_ids, moves=moves, big_clear=big_clear)
