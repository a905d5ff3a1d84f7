from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float (seconds)


# ============================================================================
# INPUT
# ============================================================================
EVENT_TILE_CLICK = "tile_click"            # payload: tile_id=str
EVENT_MODE_SELECT = "mode_select"          # payload: mode=PlayMode
EVENT_PAUSE_TOGGLE = "pause_toggle"        # payload: None
EVENT_RESTART = "restart"                  # payload: None
EVENT_QUIT = "quit"                        # payload: None


# ============================================================================
# SELECTION & TARGET
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: tile_id=str, current_sum=int
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: tile_id=str, current_sum=int
EVENT_SELECTION_CLEARED = "selection_cleared"      # payload: tile_ids=list[str], reason=str
EVENT_TARGET_CHANGED = "target_changed"            # payload: target_sum=int, tile_ids=list[str]


# ============================================================================
# BOARD
# ============================================================================
EVENT_MATCH_CLEARED = "match_cleared"              # payload: tile_ids=list[str], values=list[int], points=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove]
EVENT_BIG_CLEAR = "big_clear"                      # payload: points=int, tile_ids=list[str]
EVENT_ROW_ADDED = "row_added"                      # payload: tile_ids=list[str]
EVENT_COUNTDOWN = "countdown"                      # payload: time_left=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_GAME_OVER = "game_over"                      # payload: score=int, play_mode=PlayMode
EVENT_STATE_CHANGED = "state_changed"              # payload: snapshot=GameSnapshot, reason=str
