from __future__ import annotations

from typing import List

from esper import World

from sumstrike.components.selected import Selected
from sumstrike.events.bus import (
    EVENT_SELECTION_CLEARED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EventBus,
)
from sumstrike.systems.board_ops import entity_for_tile, tile_values
from sumstrike.utils.game_state import get_game_state, get_selection


class SelectionSystem:
    """Tracks which tiles the player has picked and what they add up to."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus

    @property
    def tile_ids(self) -> List[str]:
        return list(get_selection(self.world).tile_ids)

    def current_sum(self) -> int:
        return sum(tile_values(self.world, get_selection(self.world).tile_ids))

    def toggle(self, tile_id: str) -> bool:
        """Flip membership of ``tile_id``; returns False when the toggle was ignored."""
        state = get_game_state(self.world)
        if state.game_over or state.paused:
            return False
        entity = entity_for_tile(self.world, tile_id)
        if entity is None:
            return False
        selection = get_selection(self.world)
        if tile_id in selection:
            selection.tile_ids.remove(tile_id)
            if self.world.has_component(entity, Selected):
                self.world.remove_component(entity, Selected)
            self.event_bus.emit(EVENT_TILE_DESELECTED, tile_id=tile_id, current_sum=self.current_sum())
        else:
            selection.tile_ids.append(tile_id)
            self.world.add_component(entity, Selected())
            self.event_bus.emit(EVENT_TILE_SELECTED, tile_id=tile_id, current_sum=self.current_sum())
        return True

    def clear(self, reason: str) -> List[str]:
        selection = get_selection(self.world)
        cleared = list(selection.tile_ids)
        selection.tile_ids.clear()
        for entity, _ in list(self.world.get_component(Selected)):
            self.world.remove_component(entity, Selected)
        if cleared:
            self.event_bus.emit(EVENT_SELECTION_CLEARED, tile_ids=cleared, reason=reason)
        return cleared
