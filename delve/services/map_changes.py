"""Applies map change requests queued by area events.

Events only queue requests on GameState; the caller owns its AreaMap and
decides when to apply them. Requests are applied in queue order and a
request that cannot be applied is logged and skipped.
"""

from __future__ import annotations

import logging

from ..core.area_map import AreaMap
from ..core.state import DoorOpenChange, GameState, ObjectStateChange
from ..core.tiles import TileSetLookup

logger = logging.getLogger(__name__)


def apply_map_changes(
    area_map: AreaMap,
    state: GameState,
    tilesets: TileSetLookup,
) -> tuple[AreaMap, GameState]:
    """Apply every queued map change.

    Args:
        area_map: Map to apply changes to
        state: State holding the queue
        tilesets: Resolves tileset ids, for opening doors

    Returns:
        (new map, state with an empty queue)
    """
    for change in state.map_changes:
        updated: AreaMap | None
        match change:
            case ObjectStateChange():
                updated = area_map.update_object_state(change.object_id, change.state)
                label = f"object {change.object_id} -> {change.state.value}"
            case DoorOpenChange():
                updated = area_map.open_door(change.x, change.y, tilesets)
                label = f"open door at ({change.x}, {change.y})"
            case _:
                updated = None
                label = repr(change)

        if updated is None:
            logger.warning(f"Map change skipped on {area_map.id}: {label}")
            continue
        logger.debug(f"Map change applied on {area_map.id}: {label}")
        area_map = updated

    return area_map, state.clear_map_changes()
