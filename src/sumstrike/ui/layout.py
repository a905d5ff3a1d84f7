from typing import Optional, Tuple

from sumstrike.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    GRID_COLS,
    GRID_ROWS,
    HUD_HEIGHT,
)


def compute_board_geometry(
    window_width: int,
    window_height: int,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
):
    """Return (tile_size, start_x, start_y) for a board centred horizontally.

    ``start_y`` is the bottom edge of the board in window coordinates (arcade's
    origin is bottom-left). Used by both drawing and click mapping so the two
    never disagree.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_origin(row: int, col: int, geometry, rows: int = GRID_ROWS) -> Tuple[float, float]:
    """Bottom-left pixel of a cell; row 0 is drawn at the top of the board."""
    tile_size, start_x, start_y = geometry
    return start_x + col * tile_size, start_y + (rows - 1 - row) * tile_size


def cell_at_point(
    x: float,
    y: float,
    geometry,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
) -> Optional[Tuple[int, int]]:
    tile_size, start_x, start_y = geometry
    if x < start_x or y < start_y:
        return None
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    if col >= cols or row_from_bottom >= rows:
        return None
    return rows - 1 - row_from_bottom, col
