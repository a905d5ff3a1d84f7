"""Read-only views of a session handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from sumstrike.components.game_state import GameMode, PlayMode
from sumstrike.components.selected import Selected
from sumstrike.systems.board_ops import live_tiles, tile_values
from sumstrike.utils.game_state import get_board, get_game_state, get_selection


@dataclass(frozen=True, slots=True)
class TileSnapshot:
    uid: str
    value: int
    row: int
    col: int
    selected: bool = False


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    mode: GameMode
    play_mode: Optional[PlayMode]
    rows: int
    cols: int
    tiles: Tuple[TileSnapshot, ...]
    selection: Tuple[str, ...]
    hand: Tuple[int, ...]
    target_sum: int
    current_sum: int
    score: int
    best_score: int
    time_left: int
    level: int

    @property
    def game_over(self) -> bool:
        return self.mode == GameMode.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.mode == GameMode.PAUSED

    @property
    def in_danger(self) -> bool:
        """True when a tile sits on the top row, i.e. the next row push ends the game."""
        return any(tile.row == 0 for tile in self.tiles)

    def tile(self, uid: str) -> TileSnapshot | None:
        for tile in self.tiles:
            if tile.uid == uid:
                return tile
        return None

    def cell(self, row: int, col: int) -> TileSnapshot | None:
        for tile in self.tiles:
            if tile.row == row and tile.col == col:
                return tile
        return None


def build_snapshot(world: World) -> GameSnapshot:
    state = get_game_state(world)
    board = get_board(world)
    selection = tuple(get_selection(world).tile_ids)
    tiles = tuple(
        TileSnapshot(
            uid=tile.uid,
            value=tile.value,
            row=position.row,
            col=position.col,
            selected=world.has_component(entity, Selected),
        )
        for entity, tile, position in live_tiles(world)
    )
    hand = tuple(tile_values(world, selection))
    return GameSnapshot(
        mode=state.mode,
        play_mode=state.play_mode,
        rows=board.rows,
        cols=board.cols,
        tiles=tiles,
        selection=selection,
        hand=hand,
        target_sum=state.target_sum,
        current_sum=sum(hand),
        score=state.score,
        best_score=state.best_score,
        time_left=state.time_left,
        level=state.level,
    )
