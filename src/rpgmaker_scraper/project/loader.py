"""
rpgmaker-scraper — project loader.

File: src/rpgmaker_scraper/project/loader.py
Last updated: 2026-10-19

Purpose
- Load name tables, map events, and common events from a project's data folder.

Functional requirements
- Required files (MapInfos.json, System.json, CommonEvents.json) are fatal
  when missing or unreadable; nothing is scanned after a setup fault.
- The queried identifier is validated against the name tables before any
  map file is opened.
- A map listed in MapInfos.json whose file is missing, unreadable, or has no
  ``events`` array is logged and skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rpgmaker_scraper.constants import (
    COMMON_EVENTS_FILE,
    DEFAULT_DATA_DIR,
    MAP_INFOS_FILE,
    SYSTEM_FILE,
    map_file_name,
)
from rpgmaker_scraper.domain.models import CommonEvent, Event
from rpgmaker_scraper.domain.query import Query
from rpgmaker_scraper.observability.logging import get_logger
from rpgmaker_scraper.project.files import (
    ProjectLoadError,
    read_json_array,
    read_json_object,
    resolve_data_dir,
)
from rpgmaker_scraper.project.name_tables import NameTables


@dataclass(frozen=True, slots=True)
class MapData:
    map_id: int
    name: str
    events: tuple[Event, ...]

    @property
    def file_name(self) -> str:
        return map_file_name(self.map_id)


@dataclass(frozen=True, slots=True)
class ProjectData:
    data_dir: Path
    tables: NameTables
    maps: tuple[MapData, ...]
    common_events: tuple[CommonEvent, ...]

    @property
    def event_count(self) -> int:
        return sum(len(item.events) for item in self.maps)


class ProjectLoader:
    """Reads one project's data folder; every public method is a fresh read."""

    def __init__(
        self,
        project_root: str | Path,
        *,
        data_dir: str = DEFAULT_DATA_DIR,
        logger: Any | None = None,
    ) -> None:
        self._project_root = Path(project_root)
        self._data_dir_name = data_dir
        self._logger = logger if logger is not None else get_logger(__name__)

    def data_dir(self) -> Path:
        return resolve_data_dir(self._project_root, self._data_dir_name)

    def read_common_events_document(self) -> list[object]:
        return read_json_array(self.data_dir() / COMMON_EVENTS_FILE)

    def load_name_tables(self, common_events_document: list[object] | None = None) -> NameTables:
        data_dir = self.data_dir()
        self._logger.info("loading_name_tables", data_dir=str(data_dir))
        system_path = data_dir / SYSTEM_FILE
        system = read_json_object(system_path)
        try:
            return NameTables.from_documents(
                map_infos=read_json_array(data_dir / MAP_INFOS_FILE),
                system=system,
                common_events=(
                    common_events_document
                    if common_events_document is not None
                    else read_json_array(data_dir / COMMON_EVENTS_FILE)
                ),
            )
        except ProjectLoadError as exc:
            if exc.path is None:
                raise ProjectLoadError(str(exc), path=system_path) from exc
            raise

    def load_map(self, map_id: int, name: str) -> MapData | None:
        path = self.data_dir() / map_file_name(map_id)
        log = self._logger.bind(map_id=map_id, path=str(path))
        if not path.is_file():
            log.warning("map_file_missing")
            return None
        try:
            document = read_json_object(path)
        except ProjectLoadError as exc:
            log.error("map_file_unreadable", error=str(exc))
            return None

        raw_events = document.get("events")
        if not isinstance(raw_events, list):
            log.warning("map_without_events")
            return None

        events: list[Event] = []
        for raw_event in raw_events:
            if not raw_event:
                continue
            event = Event.from_json(raw_event)
            if event is not None:
                events.append(event)
        return MapData(map_id=map_id, name=name, events=tuple(events))

    def load_maps(self, tables: NameTables) -> tuple[MapData, ...]:
        maps: list[MapData] = []
        for map_id in sorted(tables.maps):
            loaded = self.load_map(map_id, tables.map_name(map_id))
            if loaded is not None:
                maps.append(loaded)
        self._logger.info("maps_loaded", map_count=len(maps))
        return tuple(maps)

    def load_common_events(
        self, common_events_document: list[object] | None = None
    ) -> tuple[CommonEvent, ...]:
        raw_entries = (
            common_events_document
            if common_events_document is not None
            else self.read_common_events_document()
        )
        common_events: list[CommonEvent] = []
        for raw_entry in raw_entries:
            if not raw_entry:
                continue
            common_event = CommonEvent.from_json(raw_entry)
            if common_event is not None:
                common_events.append(common_event)
        self._logger.info("common_events_loaded", common_event_count=len(common_events))
        return tuple(common_events)

    def load(self, query: Query) -> ProjectData:
        """Load the whole project after validating ``query`` against the name tables."""

        # CommonEvents.json feeds both the name table and the scan; read it once.
        common_events_document = self.read_common_events_document()
        tables = self.load_name_tables(common_events_document)
        target_name = tables.resolve_query(query)
        self._logger.info(
            "query_resolved",
            mode=query.mode.value,
            target_id=query.target_id,
            target_name=target_name,
        )
        return ProjectData(
            data_dir=self.data_dir(),
            tables=tables,
            maps=self.load_maps(tables),
            common_events=self.load_common_events(common_events_document),
        )


def load_project(
    project_root: str | Path,
    query: Query,
    *,
    data_dir: str = DEFAULT_DATA_DIR,
) -> ProjectData:
    """Convenience wrapper around ``ProjectLoader(...).load(query)``."""

    return ProjectLoader(project_root, data_dir=data_dir).load(query)


__all__ = [
    "MapData",
    "ProjectData",
    "ProjectLoader",
    "load_project",
]
