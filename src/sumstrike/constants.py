GRID_ROWS = 10
GRID_COLS = 6
INITIAL_ROWS = 4
MAX_VALUE = 9

# Target sums are built from this many distinct tiles (inclusive bounds).
MIN_TARGET_TILES = 2
MAX_TARGET_TILES = 4

POINTS_PER_TILE = 10
# Clears worth strictly more than this emit the big clear signal.
BIG_CLEAR_THRESHOLD = 30

# Timing, in seconds.
TIME_LIMIT = 10
COUNTDOWN_INTERVAL = 1.0
CLASSIC_ROW_DELAY = 0.3

# Reserved for difficulty scaling; currently constant.
STARTING_LEVEL = 1

# ============================================================================
# WINDOW / PRESENTATION
# ============================================================================
WINDOW_WIDTH = 480
WINDOW_HEIGHT = 760
BOTTOM_MARGIN = 20
# Space above the board for score, target and timer readouts.
HUD_HEIGHT = 110
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.85
