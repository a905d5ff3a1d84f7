"""Entry point for the SumStrike arcade front end.

Sets up the event bus, world and controller, then forwards window input and
frame deltas to the engine and draws the latest snapshot.
"""
import logging

import arcade
from arcade import Window, run, set_background_color, color

from sumstrike.components.game_state import GameMode, PlayMode
from sumstrike.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from sumstrike.events.bus import (
    EVENT_BIG_CLEAR,
    EVENT_MODE_SELECT,
    EVENT_PAUSE_TOGGLE,
    EVENT_QUIT,
    EVENT_RESTART,
    EVENT_STATE_CHANGED,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EventBus,
)
from sumstrike.snapshot import GameSnapshot
from sumstrike.systems.game_controller import GameController
from sumstrike.ui.layout import cell_at_point, cell_origin, compute_board_geometry
from sumstrike.world import create_world

ACCENT = (0, 255, 65)
TILE_COLOR = (40, 40, 46)
DANGER_COLOR = (239, 68, 68)
BIG_CLEAR_FLASH_SECONDS = 0.6


class SumStrikeWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "SumStrike")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)
        self.controller = GameController(self.world, self.event_bus)
        self.snapshot: GameSnapshot = self.controller.snapshot()
        self._flash_left = 0.0
        self.event_bus.subscribe(EVENT_STATE_CHANGED, self._on_state_changed)
        self.event_bus.subscribe(EVENT_BIG_CLEAR, self._on_big_clear)
        set_background_color(color.BLACK)

    def _on_state_changed(self, sender, **payload):
        snapshot = payload.get("snapshot")
        if snapshot is not None:
            self.snapshot = snapshot

    def _on_big_clear(self, sender, **payload):
        self._flash_left = BIG_CLEAR_FLASH_SECONDS

    def _geometry(self):
        return compute_board_geometry(self.width, self.height, self.snapshot.rows, self.snapshot.cols)

    def on_update(self, delta_time: float):
        if self._flash_left > 0.0:
            self._flash_left = max(0.0, self._flash_left - delta_time)
        if self.snapshot.mode == GameMode.PLAYING:
            self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if button != arcade.MOUSE_BUTTON_LEFT or self.snapshot.mode != GameMode.PLAYING:
            return
        cell = cell_at_point(x, y, self._geometry(), self.snapshot.rows, self.snapshot.cols)
        if cell is None:
            return
        tile = self.snapshot.cell(*cell)
        if tile is not None:
            self.event_bus.emit(EVENT_TILE_CLICK, tile_id=tile.uid)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.KEY_1:
            self.event_bus.emit(EVENT_MODE_SELECT, mode=PlayMode.CLASSIC)
        elif symbol == arcade.key.KEY_2:
            self.event_bus.emit(EVENT_MODE_SELECT, mode=PlayMode.TIME_ATTACK)
        elif symbol in (arcade.key.P, arcade.key.SPACE):
            self.event_bus.emit(EVENT_PAUSE_TOGGLE)
        elif symbol == arcade.key.R:
            self.event_bus.emit(EVENT_RESTART)
        elif symbol == arcade.key.ESCAPE:
            self.event_bus.emit(EVENT_QUIT)

    def on_draw(self):
        self.clear()
        snapshot = self.snapshot
        if snapshot.mode == GameMode.MENU:
            self._draw_menu(snapshot)
            return
        self._draw_hud(snapshot)
        self._draw_board(snapshot)
        if snapshot.paused:
            self._draw_overlay("PAUSED", "P to resume, Esc to quit")
        elif snapshot.game_over:
            self._draw_overlay("GAME OVER", f"Final score {snapshot.score}. R to retry, Esc for menu")

    def _draw_menu(self, snapshot: GameSnapshot):
        cx = self.width / 2
        cy = self.height / 2
        arcade.draw_text("SUMSTRIKE", cx, cy + 120, ACCENT, 40, anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text("1  Classic", cx, cy + 20, color.WHITE, 22, anchor_x="center", anchor_y="center")
        arcade.draw_text("2  Time Attack", cx, cy - 20, color.WHITE, 22, anchor_x="center", anchor_y="center")
        if snapshot.best_score:
            arcade.draw_text(
                f"Best {snapshot.best_score}",
                cx,
                cy - 90,
                color.GRAY,
                16,
                anchor_x="center",
                anchor_y="center",
            )

    def _draw_hud(self, snapshot: GameSnapshot):
        top = self.height - 40
        arcade.draw_text(f"Score {snapshot.score}", 20, top, color.WHITE, 18, anchor_y="center", bold=True)
        arcade.draw_text(
            str(snapshot.target_sum),
            self.width / 2,
            top,
            ACCENT if self._flash_left > 0.0 else color.WHITE,
            32,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        if snapshot.play_mode == PlayMode.TIME_ATTACK:
            timer_color = DANGER_COLOR if snapshot.time_left <= 3 else color.WHITE
            arcade.draw_text(
                f"{snapshot.time_left}s",
                self.width - 20,
                top,
                timer_color,
                18,
                anchor_x="right",
                anchor_y="center",
                bold=True,
            )
        if snapshot.hand:
            sum_color = DANGER_COLOR if snapshot.current_sum > snapshot.target_sum else ACCENT
            hand = " + ".join(str(value) for value in snapshot.hand)
            arcade.draw_text(
                f"{hand} = {snapshot.current_sum}",
                self.width / 2,
                top - 45,
                sum_color,
                16,
                anchor_x="center",
                anchor_y="center",
            )

    def _draw_board(self, snapshot: GameSnapshot):
        geometry = self._geometry()
        tile_size, start_x, start_y = geometry
        board_top = start_y + snapshot.rows * tile_size
        arcade.draw_lbwh_rectangle_outline(
            start_x,
            start_y,
            snapshot.cols * tile_size,
            snapshot.rows * tile_size,
            (60, 60, 60),
            border_width=1,
        )
        danger_y = board_top - tile_size
        line_width = 4 if snapshot.in_danger else 2
        arcade.draw_line(start_x, danger_y, start_x + snapshot.cols * tile_size, danger_y, DANGER_COLOR, line_width)
        for tile in snapshot.tiles:
            left, bottom = cell_origin(tile.row, tile.col, geometry, snapshot.rows)
            fill = ACCENT if tile.selected else TILE_COLOR
            text = color.BLACK if tile.selected else color.WHITE
            arcade.draw_lbwh_rectangle_filled(left + 2, bottom + 2, tile_size - 4, tile_size - 4, fill)
            arcade.draw_text(
                str(tile.value),
                left + tile_size / 2,
                bottom + tile_size / 2,
                text,
                tile_size * 0.35,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )

    def _draw_overlay(self, title: str, subtitle: str):
        arcade.draw_lbwh_rectangle_filled(0, 0, self.width, self.height, (0, 0, 0, 200))
        cx = self.width / 2
        cy = self.height / 2
        arcade.draw_text(title, cx, cy + 20, color.WHITE, 32, anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text(subtitle, cx, cy - 30, color.GRAY, 14, anchor_x="center", anchor_y="center")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    SumStrikeWindow()
    run()

if __name__ == "__main__":
    main()
