"""Top-level state machine composing the board, selection, matching and attrition."""
from __future__ import annotations

import logging
import random

from esper import World

from sumstrike.components.game_state import GameMode, PlayMode
from sumstrike.config import GameConfig
from sumstrike.events.bus import (
    EVENT_GAME_OVER,
    EVENT_MODE_SELECT,
    EVENT_PAUSE_TOGGLE,
    EVENT_QUIT,
    EVENT_RESTART,
    EVENT_STATE_CHANGED,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EventBus,
)
from sumstrike.snapshot import GameSnapshot, build_snapshot
from sumstrike.systems.attrition_system import AttritionSystem
from sumstrike.systems.board_ops import clear_board, fill
from sumstrike.systems.match_resolution import MatchOutcome, MatchResolutionSystem
from sumstrike.systems.selection_system import SelectionSystem
from sumstrike.systems.target_system import TargetSystem
from sumstrike.utils.game_state import get_config, get_game_state, set_game_mode
from sumstrike.utils.scheduler import EventScheduler

logger = logging.getLogger(__name__)


class GameController:
    """Routes player input and timer ticks into the engine.

    Every public transition runs to completion and returns the snapshot that
    follows it. Accepted transitions also publish that snapshot on
    ``EVENT_STATE_CHANGED``; rejected ones (wrong phase, stale tile id) leave
    the state untouched and publish nothing.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
        scheduler: EventScheduler | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler or EventScheduler()
        rng = rng or getattr(world, "random", None) or random.Random()
        self.selection = SelectionSystem(world, event_bus)
        self.targets = TargetSystem(world, event_bus, rng=rng)
        self.resolver = MatchResolutionSystem(world, event_bus, self.selection, self.targets)
        self.attrition = AttritionSystem(
            world,
            event_bus,
            self.scheduler,
            self.targets,
            on_overflow=self._on_overflow,
        )

        self.event_bus.subscribe(EVENT_MODE_SELECT, self._on_mode_select)
        self.event_bus.subscribe(EVENT_TILE_CLICK, self._on_tile_click)
        self.event_bus.subscribe(EVENT_PAUSE_TOGGLE, self._on_pause_toggle)
        self.event_bus.subscribe(EVENT_RESTART, self._on_restart)
        self.event_bus.subscribe(EVENT_QUIT, self._on_quit)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)

    @property
    def config(self) -> GameConfig:
        return get_config(self.world)

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select_mode(self, play_mode: PlayMode | str) -> GameSnapshot:
        if self.mode != GameMode.MENU:
            return self.snapshot()
        try:
            play_mode = PlayMode(play_mode)
        except ValueError:
            logger.debug("ignoring unknown play mode %r", play_mode)
            return self.snapshot()
        self._start_session(play_mode)
        return self._publish("select_mode")

    def restart(self) -> GameSnapshot:
        state = get_game_state(self.world)
        if state.mode != GameMode.GAME_OVER or state.play_mode is None:
            return self.snapshot()
        self._start_session(state.play_mode)
        return self._publish("restart")

    def toggle_pause(self) -> GameSnapshot:
        mode = self.mode
        if mode == GameMode.PLAYING:
            self.attrition.suspend()
            set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
            return self._publish("pause")
        if mode == GameMode.PAUSED:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
            self.attrition.resume()
            return self._publish("resume")
        return self.snapshot()

    def quit(self) -> GameSnapshot:
        self.attrition.stop()
        self.selection.clear(reason="quit")
        clear_board(self.world)
        state = get_game_state(self.world)
        state.target_sum = 0
        state.target_tile_ids = []
        changed = set_game_mode(self.world, self.event_bus, GameMode.MENU)
        state.play_mode = None
        if not changed:
            return self.snapshot()
        return self._publish("quit")

    def click_tile(self, tile_id: str) -> GameSnapshot:
        if self.mode != GameMode.PLAYING:
            return self.snapshot()
        if not self.selection.toggle(tile_id):
            return self.snapshot()
        resolution = self.resolver.evaluate()
        if resolution.outcome == MatchOutcome.MATCH:
            self.attrition.after_clear()
        return self._publish(resolution.outcome.value)

    def tick(self, dt: float) -> GameSnapshot:
        """Advance scheduled attrition by ``dt`` seconds; only runs while playing."""
        if self.mode != GameMode.PLAYING:
            return self.snapshot()
        if not self.scheduler.advance(dt):
            return self.snapshot()
        return self._publish("tick")

    def snapshot(self) -> GameSnapshot:
        return build_snapshot(self.world)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_mode_select(self, sender, **payload) -> None:
        play_mode = payload.get("mode")
        if play_mode is None:
            return
        self.select_mode(play_mode)

    def _on_tile_click(self, sender, **payload) -> None:
        tile_id = payload.get("tile_id")
        if tile_id is None:
            return
        self.click_tile(tile_id)

    def _on_pause_toggle(self, sender, **payload) -> None:
        self.toggle_pause()

    def _on_restart(self, sender, **payload) -> None:
        self.restart()

    def _on_quit(self, sender, **payload) -> None:
        self.quit()

    def _on_tick(self, sender, **payload) -> None:
        dt = payload.get("dt")
        try:
            dt_value = float(dt)
        except (TypeError, ValueError):
            return
        self.tick(dt_value)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_session(self, play_mode: PlayMode) -> None:
        config = self.config
        state = get_game_state(self.world)
        self.attrition.stop()
        self.selection.clear(reason="reset")
        state.play_mode = play_mode
        state.score = 0
        state.level = config.level
        fill(self.world, config.initial_rows)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.attrition.start(play_mode)
        self.targets.regenerate()
        logger.info("started %s game", play_mode.value)

    def _on_overflow(self) -> None:
        state = get_game_state(self.world)
        self.scheduler.cancel_all()
        self.selection.clear(reason="game_over")
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        logger.info("game over with score %d", state.score)
        self.event_bus.emit(EVENT_GAME_OVER, score=state.score, play_mode=state.play_mode)

    def _publish(self, reason: str) -> GameSnapshot:
        snapshot = self.snapshot()
        self.event_bus.emit(EVENT_STATE_CHANGED, snapshot=snapshot, reason=reason)
        return snapshot
