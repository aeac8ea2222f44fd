"""
rpgmaker-scraper — typed project model.

File: src/rpgmaker_scraper/domain/models.py
Last updated: 2026-10-19

Purpose
- Decode the generic JSON trees of map and common-event files into typed,
  immutable entities.

Functional requirements
- ``from_json`` never raises for a missing or mistyped field; it returns
  ``None`` so the caller can exclude the record silently.
- Page numbers and command line numbers are positions in the raw arrays, so
  a skipped record never shifts the numbering shown in the editor.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from rpgmaker_scraper.domain.values import Param, decode_parameters
from rpgmaker_scraper.observability.logging import get_logger


class CommandCode(IntEnum):
    IF_STATEMENT = 111
    CONTROL_SWITCH = 121
    CONTROL_VARIABLE = 122
    SCRIPT_SINGLE_LINE = 355
    SCRIPT_MULTI_LINE = 655


class CommonEventTrigger(IntEnum):
    NONE = 0
    AUTORUN = 1
    PARALLEL = 2


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _has_int(payload: Mapping[str, object], key: str) -> bool:
    return key in payload and _is_int(payload[key])


def _has_bool(payload: Mapping[str, object], key: str) -> bool:
    return key in payload and isinstance(payload[key], bool)


def _has_str(payload: Mapping[str, object], key: str) -> bool:
    return key in payload and isinstance(payload[key], str)


def _reject(kind: str, reason: str, **context: object) -> None:
    get_logger(__name__).debug("record_rejected", record_kind=kind, reason=reason, **context)


@dataclass(frozen=True, slots=True)
class Command:
    """One event command: raw opcode plus decoded parameters."""

    code: int
    parameters: tuple[Param, ...] = ()
    line: int = 0

    @property
    def opcode(self) -> CommandCode | None:
        try:
            return CommandCode(self.code)
        except ValueError:
            return None

    @classmethod
    def from_json(cls, payload: object, *, line: int = 0) -> Command | None:
        if not isinstance(payload, Mapping):
            _reject("command", "not an object", line=line)
            return None
        if not _has_int(payload, "code"):
            _reject("command", "missing integer code", line=line)
            return None
        raw_parameters = payload.get("parameters")
        if not isinstance(raw_parameters, Sequence) or isinstance(raw_parameters, str):
            _reject("command", "missing parameters", line=line)
            return None
        return cls(
            code=int(payload["code"]),
            parameters=decode_parameters(raw_parameters),
            line=line,
        )


@dataclass(frozen=True, slots=True)
class Condition:
    """Activation gate of an event page."""

    switch1_id: int = 0
    switch1_valid: bool = False
    switch2_id: int = 0
    switch2_valid: bool = False
    variable_id: int = 0
    variable_valid: bool = False
    variable_value: int = 0

    @classmethod
    def from_json(cls, payload: object) -> Condition | None:
        if not isinstance(payload, Mapping):
            _reject("condition", "not an object")
            return None
        for key in ("switch1Id", "switch2Id", "variableId", "variableValue"):
            if not _has_int(payload, key):
                _reject("condition", f"missing integer {key}")
                return None
        for key in ("switch1Valid", "switch2Valid", "variableValid"):
            if not _has_bool(payload, key):
                _reject("condition", f"missing boolean {key}")
                return None
        return cls(
            switch1_id=int(payload["switch1Id"]),
            switch1_valid=bool(payload["switch1Valid"]),
            switch2_id=int(payload["switch2Id"]),
            switch2_valid=bool(payload["switch2Valid"]),
            variable_id=int(payload["variableId"]),
            variable_valid=bool(payload["variableValid"]),
            variable_value=int(payload["variableValue"]),
        )


def decode_command_list(raw_list: object) -> tuple[Command, ...]:
    """Decode a raw command array, numbering lines from 1 over the raw positions."""

    if not isinstance(raw_list, Sequence) or isinstance(raw_list, str):
        return ()
    commands: list[Command] = []
    for index, raw_command in enumerate(raw_list, start=1):
        command = Command.from_json(raw_command, line=index)
        if command is not None:
            commands.append(command)
    return tuple(commands)


@dataclass(frozen=True, slots=True)
class EventPage:
    number: int
    conditions: Condition = field(default_factory=Condition)
    commands: tuple[Command, ...] = ()

    @classmethod
    def from_json(cls, payload: object, *, number: int) -> EventPage | None:
        if not isinstance(payload, Mapping):
            _reject("event_page", "not an object", page=number)
            return None
        if "conditions" not in payload:
            _reject("event_page", "missing conditions", page=number)
            return None
        if "list" not in payload:
            _reject("event_page", "missing list", page=number)
            return None
        # A malformed condition block still leaves the page's commands reachable.
        conditions = Condition.from_json(payload["conditions"]) or Condition()
        return cls(
            number=number,
            conditions=conditions,
            commands=decode_command_list(payload["list"]),
        )


@dataclass(frozen=True, slots=True)
class Event:
    """A map event placed at tile ``(x, y)``."""

    id: int
    name: str
    x: int
    y: int
    note: str = ""
    pages: tuple[EventPage, ...] = ()

    @classmethod
    def from_json(cls, payload: object) -> Event | None:
        if not isinstance(payload, Mapping):
            return None
        for key in ("x", "y", "id"):
            if not _has_int(payload, key):
                _reject("event", f"missing integer {key}", event_id=payload.get("id"))
                return None
        if not _has_str(payload, "name"):
            _reject("event", "missing name", event_id=payload["id"])
            return None
        raw_pages = payload.get("pages")
        if not isinstance(raw_pages, Sequence) or isinstance(raw_pages, str):
            _reject("event", "missing pages", event_id=payload["id"])
            return None

        pages: list[EventPage] = []
        for number, raw_page in enumerate(raw_pages, start=1):
            page = EventPage.from_json(raw_page, number=number)
            if page is not None:
                pages.append(page)

        note = payload.get("note")
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            x=int(payload["x"]),
            y=int(payload["y"]),
            note=note if isinstance(note, str) else "",
            pages=tuple(pages),
        )


@dataclass(frozen=True, slots=True)
class CommonEvent:
    id: int
    name: str
    switch_id: int
    trigger: CommonEventTrigger
    commands: tuple[Command, ...] = ()

    @property
    def has_trigger(self) -> bool:
        return self.trigger is not CommonEventTrigger.NONE

    @classmethod
    def from_json(cls, payload: object) -> CommonEvent | None:
        if not isinstance(payload, Mapping):
            return None
        for key in ("id", "switchId", "trigger"):
            if not _has_int(payload, key):
                _reject("common_event", f"missing integer {key}", common_event_id=payload.get("id"))
                return None
        if not _has_str(payload, "name"):
            _reject("common_event", "missing name", common_event_id=payload["id"])
            return None
        if "list" not in payload:
            _reject("common_event", "missing list", common_event_id=payload["id"])
            return None
        try:
            trigger = CommonEventTrigger(int(payload["trigger"]))
        except ValueError:
            _reject("common_event", "unknown trigger", common_event_id=payload["id"])
            return None
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            switch_id=int(payload["switchId"]),
            trigger=trigger,
            commands=decode_command_list(payload["list"]),
        )


__all__ = [
    "Command",
    "CommandCode",
    "CommonEvent",
    "CommonEventTrigger",
    "Condition",
    "Event",
    "EventPage",
    "decode_command_list",
]
