"""Stable constants shared across the loader, scanner, and renderers."""

from __future__ import annotations

from typing import Final

# Schema version for rpgscrape.toml.
CONFIG_SCHEMA_VERSION: Final[int] = 1

# Project layout, relative to the project root.
DEFAULT_DATA_DIR: Final[str] = "data"
MAP_INFOS_FILE: Final[str] = "MapInfos.json"
SYSTEM_FILE: Final[str] = "System.json"
COMMON_EVENTS_FILE: Final[str] = "CommonEvents.json"
MAP_FILE_TEMPLATE: Final[str] = "Map{map_id:03d}.json"

# RPG Maker reserves id 0 and pre-selects id 1 in every editor dropdown.
RESERVED_ID: Final[int] = 0
DEFAULT_SLOT_ID: Final[int] = 1

REPORT_RULE: Final[str] = "========================================="
SECTION_RULE: Final[str] = "--------------------------------------------------"


def map_file_name(map_id: int) -> str:
    """Return the ``MapNNN.json`` file name for ``map_id``."""

    return MAP_FILE_TEMPLATE.format(map_id=map_id)


__all__ = [
    "COMMON_EVENTS_FILE",
    "CONFIG_SCHEMA_VERSION",
    "DEFAULT_DATA_DIR",
    "DEFAULT_SLOT_ID",
    "MAP_FILE_TEMPLATE",
    "MAP_INFOS_FILE",
    "REPORT_RULE",
    "RESERVED_ID",
    "SECTION_RULE",
    "SYSTEM_FILE",
    "map_file_name",
]
