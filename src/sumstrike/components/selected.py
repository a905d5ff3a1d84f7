from dataclasses import dataclass


@dataclass(slots=True)
class Selected:
    """Tag for tiles currently in the player's selection."""
    pass
