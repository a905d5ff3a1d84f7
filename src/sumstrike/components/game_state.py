"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class GameMode(Enum):
    """High-level phases of the state machine."""
    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class PlayMode(Enum):
    """Rule set chosen from the menu."""
    CLASSIC = "classic"
    TIME_ATTACK = "time"


@dataclass
class GameState:
    """Singleton component storing the mutable root of a session."""
    mode: GameMode = GameMode.MENU
    play_mode: Optional[PlayMode] = None
    target_sum: int = 0
    # Tiles the current target was built from, recorded at generation time.
    target_tile_ids: List[str] = field(default_factory=list)
    score: int = 0
    best_score: int = 0
    time_left: int = 0
    level: int = 1

    @property
    def game_over(self) -> bool:
        return self.mode == GameMode.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.mode == GameMode.PAUSED
