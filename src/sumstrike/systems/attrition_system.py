from __future__ import annotations

import logging
from typing import Callable, List

from esper import World

from sumstrike.components.game_state import GameMode, PlayMode
from sumstrike.config import GameConfig
from sumstrike.events.bus import EVENT_COUNTDOWN, EVENT_ROW_ADDED, EventBus
from sumstrike.systems.board_ops import append_row, is_overflowing, shift_up
from sumstrike.systems.target_system import TargetSystem
from sumstrike.utils.game_state import get_config, get_game_state
from sumstrike.utils.scheduler import EventScheduler

logger = logging.getLogger(__name__)

ROW_ATTRITION = "row_attrition"
COUNTDOWN = "countdown"


class AttritionSystem:
    """Pushes new rows onto the board on the cadence of the active play mode.

    Classic mode adds one row a short moment after every clear. Time attack
    runs a one second countdown that adds a row whenever it runs out and
    starts over after each clear. Both go through the scheduler owned by the
    controller, which only advances its clock while a game is being played.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        scheduler: EventScheduler,
        targets: TargetSystem,
        *,
        on_overflow: Callable[[], None],
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler
        self.targets = targets
        self._on_overflow = on_overflow

    @property
    def config(self) -> GameConfig:
        return get_config(self.world)

    def start(self, play_mode: PlayMode) -> None:
        self.scheduler.cancel_all()
        get_game_state(self.world).time_left = self.config.time_limit
        if play_mode == PlayMode.TIME_ATTACK:
            self._arm_countdown()

    def stop(self) -> None:
        self.scheduler.cancel_all()

    def suspend(self) -> None:
        # A pending classic row-add stays queued; it is frozen with the clock.
        self.scheduler.cancel(COUNTDOWN)

    def resume(self) -> None:
        if get_game_state(self.world).play_mode == PlayMode.TIME_ATTACK:
            self._arm_countdown()

    def after_clear(self) -> None:
        state = get_game_state(self.world)
        if state.play_mode == PlayMode.CLASSIC:
            self.scheduler.schedule(ROW_ATTRITION, self.config.classic_row_delay, self._on_deferred_row)
        elif state.play_mode == PlayMode.TIME_ATTACK:
            state.time_left = self.config.time_limit

    def add_row_or_overflow(self) -> bool:
        """Shared row check: end the game if the top row is taken, otherwise shift and append.

        Returns True when a row was added.
        """
        if is_overflowing(self.world):
            logger.info("top row occupied; board overflowed")
            self._on_overflow()
            return False
        shift_up(self.world)
        spawned: List[str] = append_row(self.world)
        logger.debug("row added: %s", spawned)
        self.event_bus.emit(EVENT_ROW_ADDED, tile_ids=list(spawned))
        state = get_game_state(self.world)
        if state.target_sum == 0:
            self.targets.regenerate()
        return True

    def _arm_countdown(self) -> None:
        self.scheduler.schedule_repeating(COUNTDOWN, self.config.countdown_interval, self._on_countdown)

    def _on_countdown(self) -> None:
        state = get_game_state(self.world)
        if state.mode != GameMode.PLAYING:
            return
        if state.time_left <= 1:
            if not self.add_row_or_overflow():
                return
            state.time_left = self.config.time_limit
        else:
            state.time_left -= 1
        self.event_bus.emit(EVENT_COUNTDOWN, time_left=state.time_left)

    def _on_deferred_row(self) -> None:
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        self.add_row_or_overflow()
