"""Construction-time game parameters.

Defaults come from :mod:`sumstrike.constants`; a world can be built with a
different :class:`GameConfig` (tests use small boards), but nothing here is
changed while a game is running.
"""
from __future__ import annotations

from dataclasses import dataclass

from sumstrike.constants import (
    BIG_CLEAR_THRESHOLD,
    CLASSIC_ROW_DELAY,
    COUNTDOWN_INTERVAL,
    GRID_COLS,
    GRID_ROWS,
    INITIAL_ROWS,
    MAX_TARGET_TILES,
    MAX_VALUE,
    MIN_TARGET_TILES,
    POINTS_PER_TILE,
    STARTING_LEVEL,
    TIME_LIMIT,
)


@dataclass(frozen=True, slots=True)
class GameConfig:
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    initial_rows: int = INITIAL_ROWS
    max_value: int = MAX_VALUE
    min_target_tiles: int = MIN_TARGET_TILES
    max_target_tiles: int = MAX_TARGET_TILES
    points_per_tile: int = POINTS_PER_TILE
    big_clear_threshold: int = BIG_CLEAR_THRESHOLD
    time_limit: int = TIME_LIMIT
    countdown_interval: float = COUNTDOWN_INTERVAL
    classic_row_delay: float = CLASSIC_ROW_DELAY
    level: int = STARTING_LEVEL

    def validate(self) -> "GameConfig":
        """Raise ``ValueError`` on parameters the engine cannot run with."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"board must have at least one row and column, got {self.rows}x{self.cols}")
        if not 0 <= self.initial_rows <= self.rows:
            raise ValueError(f"initial_rows must be within 0..{self.rows}, got {self.initial_rows}")
        if self.max_value < 1:
            raise ValueError(f"max_value must be positive, got {self.max_value}")
        if self.min_target_tiles < 1 or self.max_target_tiles < self.min_target_tiles:
            raise ValueError(
                "target tile bounds must satisfy 1 <= min <= max, "
                f"got {self.min_target_tiles}..{self.max_target_tiles}"
            )
        if self.time_limit < 1:
            raise ValueError(f"time_limit must be at least one second, got {self.time_limit}")
        if self.countdown_interval <= 0 or self.classic_row_delay < 0:
            raise ValueError("countdown_interval must be positive and classic_row_delay non-negative")
        return self
