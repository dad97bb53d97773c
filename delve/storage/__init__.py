"""Data loading and lookup for Delve.

Usage:
    from delve.storage import AreaMapLoader

    loader = AreaMapLoader()
    loader.load_bundled().raise_for_errors()
    area_map = loader.area_maps.get_by_id("event-demo-map")
"""

from .registry import Registry, AreaMapRegistry, TileSetRegistry
from .loader import (
    BUNDLED_DATA_DIR,
    AreaMapLoader,
    LoadReport,
    parse_area_map,
    parse_tileset,
)

__all__ = [
    # Registries
    "Registry",
    "AreaMapRegistry",
    "TileSetRegistry",
    # Loader
    "BUNDLED_DATA_DIR",
    "AreaMapLoader",
    "LoadReport",
    "parse_area_map",
    "parse_tileset",
]
