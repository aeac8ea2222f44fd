"""
rpgmaker-scraper — shared builders for RPG Maker project payloads in tests

File: tests/project_fixtures.py
Last updated: 2026-10-19

Purpose
- Build raw JSON payloads shaped like the editor's data files and write them
  to a temporary project folder.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path

JSONDict = dict[str, object]


def command(code: int, *parameters: object, indent: int = 0) -> JSONDict:
    return {"code": code, "indent": indent, "parameters": list(parameters)}


def conditions(
    *,
    switch1: tuple[int, bool] = (1, False),
    switch2: tuple[int, bool] = (1, False),
    variable: tuple[int, bool] = (1, False),
    variable_value: int = 0,
) -> JSONDict:
    """Page conditions; defaults match an untouched editor page (all ids 1, invalid)."""

    return {
        "actorId": 1,
        "actorValid": False,
        "itemId": 1,
        "itemValid": False,
        "selfSwitchCh": "A",
        "selfSwitchValid": False,
        "switch1Id": switch1[0],
        "switch1Valid": switch1[1],
        "switch2Id": switch2[0],
        "switch2Valid": switch2[1],
        "variableId": variable[0],
        "variableValid": variable[1],
        "variableValue": variable_value,
    }


def page(commands: Sequence[JSONDict] = (), *, gate: JSONDict | None = None) -> JSONDict:
    return {
        "conditions": gate if gate is not None else conditions(),
        "list": [*commands, command(0)],
        "trigger": 0,
    }


def event(
    event_id: int,
    name: str,
    pages: Sequence[JSONDict],
    *,
    x: int = 0,
    y: int = 0,
    note: str = "",
) -> JSONDict:
    return {"id": event_id, "name": name, "note": note, "x": x, "y": y, "pages": list(pages)}


def common_event(
    event_id: int,
    name: str,
    commands: Sequence[JSONDict] = (),
    *,
    trigger: int = 0,
    switch_id: int = 1,
) -> JSONDict:
    return {
        "id": event_id,
        "name": name,
        "switchId": switch_id,
        "trigger": trigger,
        "list": [*commands, command(0)],
    }


def name_array(names: Mapping[int, str], *, size: int | None = None) -> list[str | None]:
    """Position-indexed editor name array; slot 0 is always empty."""

    length = size if size is not None else max(names, default=0) + 1
    values: list[str | None] = ["" for _ in range(length)]
    for identifier, name in names.items():
        values[identifier] = name
    return values


def write_project(
    root: Path,
    *,
    variables: Mapping[int, str] | None = None,
    switches: Mapping[int, str] | None = None,
    maps: Mapping[int, tuple[str, Sequence[JSONDict | None]]] | None = None,
    common_events: Sequence[JSONDict] = (),
    skip_map_files: Sequence[int] = (),
) -> Path:
    """Write a minimal project under ``root`` and return ``root``."""

    data_dir = root / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    map_entries = dict(maps or {})

    map_infos: list[JSONDict | None] = [None]
    for map_id in sorted(map_entries):
        map_infos.append({"id": map_id, "name": map_entries[map_id][0], "order": map_id})
    _dump(data_dir / "MapInfos.json", map_infos)

    system = {
        "gameTitle": "Test Project",
        "variables": name_array(variables or {}),
        "switches": name_array(switches or {}),
    }
    _dump(data_dir / "System.json", system)

    _dump(data_dir / "CommonEvents.json", [None, *common_events])

    for map_id, (_, events) in map_entries.items():
        if map_id in skip_map_files:
            continue
        _dump(data_dir / f"Map{map_id:03d}.json", {"events": [None, *events]})

    return root


def _dump(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")
