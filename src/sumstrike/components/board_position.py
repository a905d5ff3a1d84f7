from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Grid cell of a live tile. Row 0 is the top (danger) edge."""
    row: int
    col: int
