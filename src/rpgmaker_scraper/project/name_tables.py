"""
rpgmaker-scraper — id to name lookup tables.

File: src/rpgmaker_scraper/project/name_tables.py
Last updated: 2026-10-19

Purpose
- Resolve map, variable, switch, and common event ids to editor names.

Functional requirements
- Variable id 0 is reserved and never resolves.
- An unknown variable id is fatal when it is the queried id
  (``variable_name``); every other lookup synthesizes a placeholder.
- A present-but-empty name renders as ``#<id>``; an absent one as ``#<id> ?``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from rpgmaker_scraper.constants import RESERVED_ID
from rpgmaker_scraper.domain.query import Query, ScanMode
from rpgmaker_scraper.project.files import ProjectLoadError


class NameNotFoundError(LookupError):
    """Raised when an identifier that must exist has no name table entry."""

    def __init__(self, kind: str, identifier: int) -> None:
        super().__init__(
            f"{kind} #{identifier:03d} doesn't exist as a predefined {kind} in this game"
        )
        self.kind = kind
        self.identifier = identifier


def _missing(identifier: int) -> str:
    return f"#{identifier} ?"


def _named(identifier: int, name: str) -> str:
    return name if name else f"#{identifier}"


def sparse_name_array(values: Sequence[object]) -> dict[int, str]:
    """Index a position-keyed name array, skipping absent (non-string) entries."""

    names: dict[int, str] = {}
    for position, value in enumerate(values):
        if isinstance(value, str):
            names[position] = value
    return names


def id_name_records(records: Sequence[object]) -> dict[int, str]:
    """Index an array of ``{"id": .., "name": ..}`` records, skipping nulls."""

    names: dict[int, str] = {}
    for record in records:
        if not isinstance(record, Mapping):
            continue
        identifier = record.get("id")
        name = record.get("name")
        if isinstance(identifier, bool) or not isinstance(identifier, int):
            continue
        if not isinstance(name, str):
            continue
        names[identifier] = name
    return names


def _empty_names() -> Mapping[int, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class NameTables:
    maps: Mapping[int, str] = field(default_factory=_empty_names)
    variables: Mapping[int, str] = field(default_factory=_empty_names)
    switches: Mapping[int, str] = field(default_factory=_empty_names)
    common_events: Mapping[int, str] = field(default_factory=_empty_names)

    @classmethod
    def from_documents(
        cls,
        *,
        map_infos: Sequence[object],
        system: Mapping[str, object],
        common_events: Sequence[object] = (),
    ) -> NameTables:
        variables = system.get("variables")
        switches = system.get("switches")
        if not isinstance(variables, list):
            raise ProjectLoadError("System.json doesn't contain a variables array")
        if not isinstance(switches, list):
            raise ProjectLoadError("System.json doesn't contain a switches array")
        return cls(
            maps=MappingProxyType(id_name_records(map_infos)),
            variables=MappingProxyType(sparse_name_array(variables)),
            switches=MappingProxyType(sparse_name_array(switches)),
            common_events=MappingProxyType(id_name_records(common_events)),
        )

    def variable_name(self, variable_id: int) -> str:
        """Resolve a variable that must exist; raise ``NameNotFoundError`` otherwise."""

        if variable_id == RESERVED_ID or variable_id not in self.variables:
            raise NameNotFoundError("variable", variable_id)
        return _named(variable_id, self.variables[variable_id])

    def display_variable_name(self, variable_id: int) -> str:
        try:
            return self.variable_name(variable_id)
        except NameNotFoundError:
            return _missing(variable_id)

    def switch_name(self, switch_id: int) -> str:
        if switch_id == RESERVED_ID or switch_id not in self.switches:
            return _missing(switch_id)
        return _named(switch_id, self.switches[switch_id])

    def map_name(self, map_id: int) -> str:
        if map_id not in self.maps:
            return _missing(map_id)
        return _named(map_id, self.maps[map_id])

    def common_event_name(self, common_event_id: int) -> str:
        if common_event_id not in self.common_events:
            return _missing(common_event_id)
        return _named(common_event_id, self.common_events[common_event_id])

    def name_for(self, mode: ScanMode, identifier: int) -> str:
        """Display name of a variable or switch, never raising."""

        if mode is ScanMode.VARIABLES:
            return self.display_variable_name(identifier)
        return self.switch_name(identifier)

    def resolve_query(self, query: Query) -> str:
        """Return the queried identifier's name, or raise when it must exist and doesn't."""

        if query.mode is ScanMode.VARIABLES:
            return self.variable_name(query.target_id)
        return self.switch_name(query.target_id)


__all__ = [
    "NameNotFoundError",
    "NameTables",
    "id_name_records",
    "sparse_name_array",
]
