"""Delve - Grid exploration with area events."""

import argparse
import logging
import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from delve import __version__
from delve.logging_config import setup_logging
from delve.core.area_map import AreaMap, AreaMapLookup
from delve.core.constants import DATA_DIR_ENV, LOG_DIR_ENV
from delve.core.errors import DataIntegrityError, UnknownMapError
from delve.core.state import GameState, GlobalValue
from delve.core.tiles import TileSetLookup
from delve.core.types import Direction
from delve.services.event_processor import EventProcessor
from delve.services.map_changes import apply_map_changes
from delve.services.movement import MoveRejected, MovementValidator
from delve.storage.loader import BUNDLED_DATA_DIR, AreaMapLoader

logger = logging.getLogger(__name__)

_DIRECTION_LETTERS = {
    "N": Direction.NORTH,
    "S": Direction.SOUTH,
    "E": Direction.EAST,
    "W": Direction.WEST,
}


def parse_walk(sequence: str) -> list[Direction]:
    """Parse a walk like "NNE,S" into directions.

    Letters are case-insensitive; spaces and commas are ignored.

    Raises:
        ValueError: On any other character
    """
    directions = []
    for char in sequence.upper():
        if char in " ,":
            continue
        if char not in _DIRECTION_LETTERS:
            raise ValueError(f"Unknown direction '{char}' (use N, S, E, W)")
        directions.append(_DIRECTION_LETTERS[char])
    return directions


def parse_variable(text: str) -> tuple[str, GlobalValue]:
    """Parse NAME=VALUE. The value is read as YAML, so true/3/2.5 keep their types."""
    name, sep, raw = text.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"Expected NAME=VALUE, got '{text}'")
    try:
        value = yaml.safe_load(raw) if raw.strip() else ""
    except yaml.YAMLError:
        value = raw
    if not isinstance(value, (bool, int, float, str)):
        value = raw
    return name.strip(), value


def start_session(area_map: AreaMap, variables: dict[str, GlobalValue] | None = None) -> GameState:
    """Create a fresh session state at the map's player spawn."""
    spawn = area_map.player_spawn
    return GameState(
        global_variables=dict(variables or {}),
        current_map_id=area_map.id,
        player_position=spawn.position,
        player_direction=spawn.direction,
    )


def walk(
    area_map: AreaMap,
    state: GameState,
    directions: list[Direction],
    tilesets: TileSetLookup,
    area_maps: AreaMapLookup | None = None,
    processor: EventProcessor | None = None,
) -> tuple[AreaMap, GameState]:
    """Take each step in turn, printing messages and rejections.

    A rejected step leaves everything unchanged; the walk carries on with
    the next step. When an event teleports the player, the walk continues on
    the target map, resolved through area_maps. Maps already visited keep
    their changes (opened doors and so on) for the rest of the walk.

    Returns:
        (map the player ends on, final state)

    Raises:
        UnknownMapError: A teleport names a map area_maps cannot resolve
    """
    processor = processor or EventProcessor()
    visited: dict[str, AreaMap] = {area_map.id: area_map}

    for step, direction in enumerate(directions, start=1):
        x, y = state.player_position
        result = MovementValidator.validate(area_map, x, y, direction)

        if isinstance(result, MoveRejected):
            print(f"{step:>3}. {direction.value:<5} blocked: {result.message}")
            continue

        seen = len(state.message_log)
        state = state.model_copy(
            update={
                "player_position": result.final_position,
                "player_direction": direction,
            }
        )
        state = processor.process_movement(state, area_map, x, y, result.final_x, result.final_y)
        area_map, state = apply_map_changes(area_map, state, tilesets)
        visited[area_map.id] = area_map

        door = " through the door" if result.passed_through_door else ""
        print(f"{step:>3}. {direction.value:<5} -> ({result.final_x}, {result.final_y}){door}")
        for text in state.messages[seen:]:
            print(f"       \"{text}\"")

        target_id = state.current_map_id
        if target_id is not None and target_id != area_map.id:
            target = visited.get(target_id) or (area_maps(target_id) if area_maps else None)
            if target is None:
                raise UnknownMapError(target_id)
            logger.info(f"Teleported from {area_map.id} to {target_id}")
            area_map = target
            visited[area_map.id] = area_map
            px, py = state.player_position
            print(f"       teleported to {area_map.id} ({px}, {py})")

    return area_map, state


def list_maps(loader: AreaMapLoader) -> None:
    """Print every loaded map."""
    for area_map in loader.area_maps.get_all():
        spawn = area_map.player_spawn
        print(
            f"{area_map.id}: {area_map.name or '(unnamed)'} "
            f"{area_map.width}x{area_map.height}, spawn ({spawn.x}, {spawn.y}), "
            f"{len(area_map.event_areas)} event areas"
        )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for Delve."""
    # Load environment variables first
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Delve - Grid exploration with area events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  delve --list                              # List bundled maps
  delve --walk EE --var has-demo-key=false  # Try the locked door
  delve --map event-demo-map --walk NEEEEENSSWWWSENS
  delve --data ./mydata --list              # Use your own data
        """,
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=Path(os.environ[DATA_DIR_ENV]) if os.environ.get(DATA_DIR_ENV) else None,
        help=f"Directory with tilesets.yaml and areas.yaml (default: ${DATA_DIR_ENV} or bundled demo)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=Path(os.environ.get(LOG_DIR_ENV) or "data"),
        help=f"Log directory (default: ${LOG_DIR_ENV} or data/)",
    )
    parser.add_argument(
        "--map",
        metavar="ID",
        help="Map to explore (default: first loaded map)",
    )
    parser.add_argument(
        "--walk",
        metavar="SEQ",
        default="",
        help="Steps to take, as N/S/E/W letters",
    )
    parser.add_argument(
        "--var",
        metavar="NAME=VALUE",
        action="append",
        default=[],
        help="Set a global variable before walking (repeatable)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List loaded maps and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )

    args = parser.parse_args(argv)

    try:
        directions = parse_walk(args.walk)
        variables = dict(parse_variable(v) for v in args.var)
    except ValueError as e:
        parser.error(str(e))

    # Setup logging
    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(args.log_dir, console_level=console_level)

    data_dir = args.data or BUNDLED_DATA_DIR
    print(f"Delve v{__version__}")
    print(f"Data directory: {data_dir.absolute()}")
    print(f"Log file: {log_path}")
    print()

    loader = AreaMapLoader()
    try:
        report = loader.load_directory(data_dir)
    except DataIntegrityError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    for error in report.errors:
        print(f"Warning: {error}", file=sys.stderr)

    if args.list:
        list_maps(loader)
        return 0

    map_ids = loader.area_maps.get_all_ids()
    map_id = args.map or (map_ids[0] if map_ids else None)
    area_map = loader.area_maps.get_by_id(map_id) if map_id else None
    if area_map is None:
        print(f"Error: map '{map_id}' not found", file=sys.stderr)
        return 1

    state = start_session(area_map, variables)
    logger.info(f"Exploring {area_map.id} with {len(directions)} steps")
    print(f"{area_map.name or area_map.id} - start at {tuple(state.player_position)}")

    try:
        area_map, state = walk(
            area_map, state, directions, loader.tilesets.get_by_id, loader.area_maps.get_by_id
        )
    except UnknownMapError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    final = state.player_position
    print()
    print(f"Final position: ({final.x}, {final.y}) facing {state.player_direction.value}")
    print(f"Final map: {area_map.id}")
    if state.global_variables:
        for name, value in sorted(state.global_variables.items()):
            print(f"  {name} = {value!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
