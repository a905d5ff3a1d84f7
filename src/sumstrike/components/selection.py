from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class Selection:
    """Ordered tile ids chosen by the player (insertion order, not board order)."""

    tile_ids: List[str] = field(default_factory=list)

    def __contains__(self, tile_id: str) -> bool:
        return tile_id in self.tile_ids

    def __len__(self) -> int:
        return len(self.tile_ids)
