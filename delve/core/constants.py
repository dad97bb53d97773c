"""Shared constants for Delve.

Centralizes values used across multiple modules to ensure consistency.
"""

# Tile char a closed door turns into when opened, unless the object says otherwise
DEFAULT_OPEN_DOOR_CHAR = "D"

# Data files expected inside a data directory
TILESETS_FILE_NAME = "tilesets.yaml"
AREAS_FILE_NAME = "areas.yaml"

# Environment variables read by the CLI
DATA_DIR_ENV = "DELVE_DATA_DIR"
LOG_DIR_ENV = "DELVE_LOG_DIR"
