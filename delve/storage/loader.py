"""YAML data loader for Delve.

Parses tileset and area map definitions into the core object graph:
ASCII grids become tile rows, and nested precondition/action records become
typed rule models. Everything is validated here, at load time, so the
movement and event services can trust their inputs.

A bad area map does not stop the others from loading: problems are collected
per area, logged, and returned in a LoadReport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..core.actions import Action, action_from_dict
from ..core.area_map import AreaMap
from ..core.constants import AREAS_FILE_NAME, TILESETS_FILE_NAME
from ..core.errors import DataIntegrityError
from ..core.events import AreaEvent, EventArea, EventTrigger
from ..core.objects import EncounterZone, InteractiveObject, SpawnPoint
from ..core.preconditions import Precondition, precondition_from_dict
from ..core.tiles import Tile, TileSet
from ..core.types import Position, Rect
from ..logging_config import log_load
from .registry import AreaMapRegistry, TileSetRegistry

logger = logging.getLogger(__name__)

# Bundled demo data shipped with the package
BUNDLED_DATA_DIR = Path(__file__).parent.parent / "data"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _ident(raw: Any) -> str:
    return str(raw.get("id", "?")) if isinstance(raw, dict) else "?"


def _describe(e: ValidationError) -> str:
    """Flatten a pydantic error into one line."""
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


def parse_tileset(data: dict[str, Any]) -> TileSet:
    """Parse one tileset definition.

    Raises:
        DataIntegrityError: Missing fields or invalid tile types
    """
    if not isinstance(data, dict):
        raise DataIntegrityError("Invalid tileset: expected a mapping")
    try:
        return TileSet.model_validate(data)
    except ValidationError as e:
        raise DataIntegrityError(
            f"Invalid tileset '{data.get('id', '?')}'", errors=[_describe(e)]
        ) from e


def _parse_grid(grid: str | list[str]) -> list[str]:
    # Keep leading spaces, drop trailing whitespace and blank lines
    if isinstance(grid, list):
        grid = "\n".join(str(row) for row in grid)
    rows = [line.rstrip() for line in str(grid).split("\n")]
    return [row for row in rows if row]


def _parse_event(
    raw: dict[str, Any],
    where: str,
    errors: list[str],
) -> AreaEvent | None:
    if not isinstance(raw, dict):
        errors.append(f"{where}: event must be a mapping")
        return None
    event_id = raw.get("id")
    where = f"{where} event '{event_id}'"

    trigger_value = raw.get("trigger")
    try:
        trigger = EventTrigger(trigger_value)
    except ValueError:
        valid = ", ".join(t.value for t in EventTrigger)
        errors.append(f"{where}: Invalid trigger type '{trigger_value}' (expected one of: {valid})")
        trigger = None

    preconditions: list[Precondition] = []
    for raw_pre in raw.get("preconditions") or []:
        try:
            preconditions.append(precondition_from_dict(raw_pre))
        except DataIntegrityError as e:
            errors.append(f"{where}: {e}")

    actions: list[Action] = []
    for raw_action in raw.get("actions") or []:
        try:
            actions.append(action_from_dict(raw_action))
        except DataIntegrityError as e:
            errors.append(f"{where}: {e}")

    if trigger is None:
        return None
    try:
        return AreaEvent(
            id=event_id,
            trigger=trigger,
            preconditions=tuple(preconditions),
            actions=tuple(actions),
            one_time=raw.get("one_time", False),
            description=raw.get("description"),
        )
    except ValidationError as e:
        errors.append(f"{where}: {_describe(e)}")
        return None


def _parse_event_area(
    raw: dict[str, Any],
    width: int,
    height: int,
    errors: list[str],
) -> EventArea | None:
    if not isinstance(raw, dict):
        errors.append("Event area must be a mapping")
        return None
    area_id = raw.get("id")
    where = f"Event area '{area_id}'"

    area_x = raw.get("x", 0)
    area_y = raw.get("y", 0)
    if not _is_int(area_x) or not _is_int(area_y):
        errors.append(f"{where}: x and y must be integers (got {area_x!r}, {area_y!r})")
        return None

    area_w = raw.get("width", 0)
    area_h = raw.get("height", 0)
    if not _is_int(area_w) or not _is_int(area_h) or area_w < 1 or area_h < 1:
        errors.append(f"{where}: width and height must be positive (got {area_w}x{area_h})")
        return None

    bounds = Rect(area_x, area_y, area_w, area_h)
    if not bounds.fits_within(width, height):
        errors.append(
            f"{where}: bounds ({bounds.x}, {bounds.y}, {bounds.width}x{bounds.height}) "
            f"extend outside the map ({width}x{height})"
        )

    events = [_parse_event(ev, where, errors) for ev in raw.get("events") or []]
    try:
        return EventArea(
            id=area_id,
            x=bounds.x,
            y=bounds.y,
            width=area_w,
            height=area_h,
            events=tuple(e for e in events if e is not None),
            description=raw.get("description"),
        )
    except ValidationError as e:
        errors.append(f"{where}: {_describe(e)}")
        return None


def parse_area_map(data: dict[str, Any], tileset: TileSet) -> AreaMap:
    """Parse one area map definition against its tileset.

    Args:
        data: Area definition (id, grid, player_spawn, objects, event areas...)
        tileset: Tileset resolving the grid characters

    Returns:
        The validated AreaMap

    Raises:
        DataIntegrityError: Listing every problem found in the definition
    """
    map_id = data.get("id", "?")
    errors: list[str] = []

    rows = _parse_grid(data.get("grid") or "")
    if not rows:
        raise DataIntegrityError(f"Area map '{map_id}' is invalid", errors=["Grid is empty"])

    height = len(rows)
    width = max(len(row) for row in rows)

    # Grid
    grid: list[tuple[Tile, ...]] = []
    for y, row in enumerate(rows):
        tiles: list[Tile] = []
        for x in range(width):
            char = row[x] if x < len(row) else " "
            definition = tileset.get_definition(char)
            if definition is None:
                errors.append(
                    f"Unknown tile character '{char}' at ({x}, {y}). "
                    f"Available characters: {', '.join(tileset.chars)}"
                )
                continue
            tiles.append(definition.to_tile())
        grid.append(tuple(tiles))
    grid_complete = all(len(r) == width for r in grid)

    # Player spawn
    player_spawn: SpawnPoint | None = None
    try:
        player_spawn = SpawnPoint.model_validate(data.get("player_spawn"))
    except ValidationError as e:
        errors.append(f"Player spawn: {_describe(e)}")
    if player_spawn is not None:
        if not player_spawn.position.in_bounds(width, height):
            errors.append(
                f"Player spawn ({player_spawn.x}, {player_spawn.y}) is out of bounds ({width}x{height})"
            )
        elif grid_complete and not grid[player_spawn.y][player_spawn.x].walkable:
            errors.append(f"Player spawn ({player_spawn.x}, {player_spawn.y}) is not on a walkable tile")

    # Interactive objects
    objects: list[InteractiveObject] = []
    seen_object_ids: set[str] = set()
    for raw in data.get("interactive_objects") or []:
        try:
            obj = InteractiveObject.model_validate(raw)
        except ValidationError as e:
            errors.append(f"Interactive object '{_ident(raw)}': {_describe(e)}")
            continue
        if obj.id in seen_object_ids:
            errors.append(f"Duplicate interactive object id '{obj.id}'")
            continue
        seen_object_ids.add(obj.id)
        if not obj.position.in_bounds(width, height):
            errors.append(f"Interactive object '{obj.id}' at ({obj.x}, {obj.y}) is out of bounds")
        objects.append(obj)

    # Spawns and encounter zones
    npc_spawns: list[SpawnPoint] = []
    for raw in data.get("npc_spawns") or []:
        try:
            spawn = SpawnPoint.model_validate(raw)
        except ValidationError as e:
            errors.append(f"NPC spawn: {_describe(e)}")
            continue
        if not spawn.position.in_bounds(width, height):
            errors.append(f"NPC spawn '{spawn.id}' at ({spawn.x}, {spawn.y}) is out of bounds")
        npc_spawns.append(spawn)

    encounter_zones: list[EncounterZone] = []
    for raw in data.get("encounter_zones") or []:
        try:
            zone = EncounterZone.model_validate(raw)
        except ValidationError as e:
            errors.append(f"Encounter zone '{_ident(raw)}': {_describe(e)}")
            continue
        if not Position(zone.x, zone.y).in_bounds(width, height):
            errors.append(f"Encounter zone '{zone.id}' at ({zone.x}, {zone.y}) is out of bounds")
        encounter_zones.append(zone)

    # Event areas
    event_areas: list[EventArea] = []
    seen_area_ids: set[str] = set()
    seen_event_ids: set[str] = set()
    for raw in data.get("event_areas") or []:
        area = _parse_event_area(raw, width, height, errors)
        if area is None:
            continue
        if area.id in seen_area_ids:
            errors.append(f"Duplicate event area id '{area.id}'")
            continue
        seen_area_ids.add(area.id)
        for event in area.events:
            if event.id in seen_event_ids:
                errors.append(f"Duplicate event id '{event.id}' (event ids must be unique per map)")
            seen_event_ids.add(event.id)
        event_areas.append(area)

    if errors:
        raise DataIntegrityError(f"Area map '{map_id}' is invalid", errors=errors)

    try:
        return AreaMap(
            id=map_id,
            name=data.get("name", ""),
            description=data.get("description", ""),
            width=width,
            height=height,
            grid=tuple(grid),
            tileset_id=tileset.id,
            player_spawn=player_spawn,
            interactive_objects={obj.id: obj for obj in objects},
            npc_spawns=tuple(npc_spawns),
            encounter_zones=tuple(encounter_zones),
            event_areas=tuple(event_areas),
        )
    except ValidationError as e:
        raise DataIntegrityError(f"Area map '{map_id}' is invalid", errors=[_describe(e)]) from e


# -----------------------------------------------------------------------------
# Loader
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class LoadReport:
    """Result of a load pass.

    Attributes:
        loaded: Ids of successfully registered items
        errors: One entry per item that failed to load
    """

    loaded: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def merge(self, other: LoadReport) -> LoadReport:
        return LoadReport(
            loaded=self.loaded + other.loaded,
            errors=self.errors + other.errors,
        )

    def raise_for_errors(self) -> None:
        """Raise DataIntegrityError if anything failed to load."""
        if self.errors:
            raise DataIntegrityError("Data failed to load", errors=self.errors)


class AreaMapLoader:
    """Loads tilesets and area maps from YAML into registries.

    Tilesets must be loaded before the maps that use them.
    """

    def __init__(
        self,
        tilesets: TileSetRegistry | None = None,
        area_maps: AreaMapRegistry | None = None,
    ):
        """Initialize AreaMapLoader.

        Args:
            tilesets: Registry to fill with tilesets (new one if None)
            area_maps: Registry to fill with area maps (new one if None)
        """
        self.tilesets = tilesets if tilesets is not None else TileSetRegistry()
        self.area_maps = area_maps if area_maps is not None else AreaMapRegistry()

    @staticmethod
    def _read_list(text: str, key: str) -> list[dict[str, Any]]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DataIntegrityError(f"Invalid YAML: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get(key), list):
            raise DataIntegrityError(f'Invalid database format: missing or invalid "{key}" list')
        return data[key]

    def load_tilesets(self, text: str) -> LoadReport:
        """Parse and register every tileset in a YAML document.

        Raises:
            DataIntegrityError: The document itself is malformed
        """
        loaded: list[str] = []
        errors: list[str] = []
        for raw in self._read_list(text, "tilesets"):
            try:
                tileset = parse_tileset(raw)
            except DataIntegrityError as e:
                errors.append(str(e))
                continue
            self.tilesets.register(tileset)
            loaded.append(tileset.id)

        for error in errors:
            logger.error(f"Tileset failed to load: {error}")
        log_load(logger, "tilesets", success=not errors, details=f"{len(loaded)} loaded, {len(errors)} errors")
        return LoadReport(loaded=tuple(loaded), errors=tuple(errors))

    def load_area_maps(self, text: str) -> LoadReport:
        """Parse and register every area map in a YAML document.

        Maps with problems are skipped and reported; the rest still load.

        Raises:
            DataIntegrityError: The document itself is malformed
        """
        loaded: list[str] = []
        errors: list[str] = []
        for raw in self._read_list(text, "areas"):
            area_id = raw.get("id", "?") if isinstance(raw, dict) else "?"
            if not isinstance(raw, dict):
                errors.append("Invalid area: expected a mapping")
                continue
            tileset_id = raw.get("tileset_id")
            tileset = self.tilesets.get_by_id(tileset_id) if isinstance(tileset_id, str) else None
            if tileset is None:
                errors.append(f"Tileset '{raw.get('tileset_id')}' not found for area '{area_id}'")
                continue
            try:
                area_map = parse_area_map(raw, tileset)
            except DataIntegrityError as e:
                errors.append(str(e))
                continue
            self.area_maps.register(area_map)
            loaded.append(area_map.id)

        for error in errors:
            logger.error(f"Area map failed to load: {error}")
        log_load(logger, "area maps", success=not errors, details=f"{len(loaded)} loaded, {len(errors)} errors")
        return LoadReport(loaded=tuple(loaded), errors=tuple(errors))

    def load_all(self, tileset_text: str, area_text: str) -> LoadReport:
        """Load tilesets, then area maps."""
        return self.load_tilesets(tileset_text).merge(self.load_area_maps(area_text))

    def load_directory(self, data_dir: Path | str) -> LoadReport:
        """Load tilesets.yaml and areas.yaml from a directory.

        Raises:
            DataIntegrityError: A data file is missing or malformed
        """
        data_path = Path(data_dir)
        tileset_path = data_path / TILESETS_FILE_NAME
        area_path = data_path / AREAS_FILE_NAME
        for path in (tileset_path, area_path):
            if not path.exists():
                log_load(logger, "read", path, success=False, details="missing")
                raise DataIntegrityError(f"Data file not found: {path}")

        report = self.load_all(
            tileset_path.read_text(encoding="utf-8"),
            area_path.read_text(encoding="utf-8"),
        )
        log_load(logger, "directory", data_path, success=report.ok)
        return report

    def load_bundled(self) -> LoadReport:
        """Load the demo data shipped with the package."""
        return self.load_directory(BUNDLED_DATA_DIR)
