from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class NumberTile:
    """Identity and face value of a tile.

    Both fields are fixed at spawn; the cell a tile occupies lives in a separate
    BoardPosition component so shifts and gravity never touch this one.
    """
    uid: str
    value: int
