"""Typed project model: parameter values, entities, and decoded command schemas."""

from rpgmaker_scraper.domain.commands import (
    CompareKind,
    ControlSwitch,
    ControlVariableConstant,
    ControlVariableGameData,
    ControlVariableRandom,
    ControlVariableScript,
    ControlVariableVariable,
    DecodedCommand,
    IdRange,
    IfKind,
    IfScript,
    IfSwitch,
    IfVariable,
    Operand,
    ScriptLine,
    decode_command,
)
from rpgmaker_scraper.domain.models import (
    Command,
    CommandCode,
    CommonEvent,
    CommonEventTrigger,
    Condition,
    Event,
    EventPage,
)
from rpgmaker_scraper.domain.query import Query, ScanMode
from rpgmaker_scraper.domain.values import Param, ParamKind, decode_parameter, decode_parameters

__all__ = [
    "Command",
    "CommandCode",
    "CommonEvent",
    "CommonEventTrigger",
    "CompareKind",
    "Condition",
    "ControlSwitch",
    "ControlVariableConstant",
    "ControlVariableGameData",
    "ControlVariableRandom",
    "ControlVariableScript",
    "ControlVariableVariable",
    "DecodedCommand",
    "Event",
    "EventPage",
    "IdRange",
    "IfKind",
    "IfScript",
    "IfSwitch",
    "IfVariable",
    "Operand",
    "Param",
    "ParamKind",
    "Query",
    "ScanMode",
    "ScriptLine",
    "decode_command",
    "decode_parameter",
    "decode_parameters",
]
