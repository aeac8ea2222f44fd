"""Closed per-opcode schemas for the commands the scanner understands.

``decode_command`` inspects a command's raw parameter list once and returns a
typed schema, or ``None`` when the arity or a positional tag does not match
what the opcode requires. Matchers only ever see the typed schemas.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Final, TypeAlias

from rpgmaker_scraper.domain.models import Command, CommandCode
from rpgmaker_scraper.domain.values import Param


class IfKind(IntEnum):
    """Leading tag of a Conditional Branch."""

    SWITCH = 0
    VARIABLE = 1
    SCRIPT = 12


class CompareKind(IntEnum):
    CONSTANT = 0
    VARIABLE = 1


class Operand(IntEnum):
    """Operand kind of a Control Variable command."""

    CONSTANT = 0
    VARIABLE = 1
    RANDOM = 2
    GAME_DATA = 3
    SCRIPT = 4


IF_SWITCH_ARITY: Final[int] = 3
IF_VARIABLE_ARITY: Final[int] = 5
IF_SCRIPT_ARITY: Final[int] = 2
CONTROL_SWITCH_ARITY: Final[int] = 3
SCRIPT_ARITY: Final[int] = 1
CONTROL_VARIABLE_ARITY: Final[dict[Operand, int]] = {
    Operand.CONSTANT: 5,
    Operand.VARIABLE: 5,
    Operand.RANDOM: 6,
    Operand.SCRIPT: 5,
}
# Game data operands vary in length with the data source selected.
_GAME_DATA_MIN_ARITY: Final[int] = 4


@dataclass(frozen=True, slots=True)
class IdRange:
    """Inclusive ``[start, end]`` id range; ``start == end`` is a single id."""

    start: int
    end: int

    def __contains__(self, item: object) -> bool:
        return isinstance(item, int) and self.start <= item <= self.end

    @property
    def is_single(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class IfScript:
    text: str


@dataclass(frozen=True, slots=True)
class IfVariable:
    variable_id: int
    compare: CompareKind
    operand: int
    operator: int


@dataclass(frozen=True, slots=True)
class IfSwitch:
    switch_id: int
    invert: int


@dataclass(frozen=True, slots=True)
class ControlVariableConstant:
    target: IdRange
    operation: int
    value: int


@dataclass(frozen=True, slots=True)
class ControlVariableVariable:
    target: IdRange
    operation: int
    source_id: int


@dataclass(frozen=True, slots=True)
class ControlVariableRandom:
    target: IdRange
    operation: int
    minimum: int
    maximum: int


@dataclass(frozen=True, slots=True)
class ControlVariableGameData:
    target: IdRange
    operation: int


@dataclass(frozen=True, slots=True)
class ControlVariableScript:
    target: IdRange
    operation: int
    text: str


@dataclass(frozen=True, slots=True)
class ControlSwitch:
    target: IdRange
    value: int

    @property
    def turns_on(self) -> bool:
        return self.value == 0


@dataclass(frozen=True, slots=True)
class ScriptLine:
    text: str
    multi_line: bool


DecodedCommand: TypeAlias = (
    IfScript
    | IfVariable
    | IfSwitch
    | ControlVariableConstant
    | ControlVariableVariable
    | ControlVariableRandom
    | ControlVariableGameData
    | ControlVariableScript
    | ControlSwitch
    | ScriptLine
)


def _ints(params: Sequence[Param], *positions: int) -> tuple[int, ...] | None:
    values: list[int] = []
    for position in positions:
        param = params[position]
        if not param.is_integer:
            return None
        values.append(int(param.value))
    return tuple(values)


def _text(params: Sequence[Param], position: int) -> str | None:
    param = params[position]
    if not param.is_string:
        return None
    return str(param.value)


def decode_command(command: Command) -> DecodedCommand | None:
    """Decode ``command`` into its typed schema, or ``None`` if it does not fit."""

    opcode = command.opcode
    params = command.parameters
    if opcode is CommandCode.IF_STATEMENT:
        return _decode_if_statement(params)
    if opcode is CommandCode.CONTROL_VARIABLE:
        return _decode_control_variable(params)
    if opcode is CommandCode.CONTROL_SWITCH:
        return _decode_control_switch(params)
    if opcode in (CommandCode.SCRIPT_SINGLE_LINE, CommandCode.SCRIPT_MULTI_LINE):
        if len(params) != SCRIPT_ARITY:
            return None
        text = _text(params, 0)
        if text is None:
            return None
        return ScriptLine(text=text, multi_line=opcode is CommandCode.SCRIPT_MULTI_LINE)
    return None


def _decode_if_statement(params: Sequence[Param]) -> DecodedCommand | None:
    if not params or not params[0].is_integer:
        return None
    kind = params[0].value

    if kind == IfKind.SCRIPT:
        if len(params) != IF_SCRIPT_ARITY:
            return None
        text = _text(params, 1)
        return None if text is None else IfScript(text=text)

    if kind == IfKind.VARIABLE:
        if len(params) != IF_VARIABLE_ARITY:
            return None
        values = _ints(params, 1, 2, 3, 4)
        if values is None:
            return None
        variable_id, compare, operand, operator = values
        try:
            compare_kind = CompareKind(compare)
        except ValueError:
            return None
        return IfVariable(
            variable_id=variable_id,
            compare=compare_kind,
            operand=operand,
            operator=operator,
        )

    if kind == IfKind.SWITCH:
        if len(params) != IF_SWITCH_ARITY:
            return None
        values = _ints(params, 1, 2)
        if values is None:
            return None
        return IfSwitch(switch_id=values[0], invert=values[1])

    return None


def _decode_control_variable(params: Sequence[Param]) -> DecodedCommand | None:
    if len(params) < _GAME_DATA_MIN_ARITY:
        return None
    header = _ints(params, 0, 1, 2, 3)
    if header is None:
        return None
    start, end, operation, operand_code = header
    try:
        operand = Operand(operand_code)
    except ValueError:
        return None
    target = IdRange(start, end)

    if operand is Operand.GAME_DATA:
        return ControlVariableGameData(target=target, operation=operation)
    if len(params) != CONTROL_VARIABLE_ARITY[operand]:
        return None

    if operand is Operand.SCRIPT:
        text = _text(params, 4)
        if text is None:
            return None
        return ControlVariableScript(target=target, operation=operation, text=text)

    if operand is Operand.RANDOM:
        bounds = _ints(params, 4, 5)
        if bounds is None:
            return None
        return ControlVariableRandom(
            target=target, operation=operation, minimum=bounds[0], maximum=bounds[1]
        )

    value = _ints(params, 4)
    if value is None:
        return None
    if operand is Operand.VARIABLE:
        return ControlVariableVariable(target=target, operation=operation, source_id=value[0])
    return ControlVariableConstant(target=target, operation=operation, value=value[0])


def _decode_control_switch(params: Sequence[Param]) -> DecodedCommand | None:
    if len(params) != CONTROL_SWITCH_ARITY:
        return None
    values = _ints(params, 0, 1, 2)
    if values is None:
        return None
    start, end, value = values
    return ControlSwitch(target=IdRange(start, end), value=value)


__all__ = [
    "CONTROL_SWITCH_ARITY",
    "CONTROL_VARIABLE_ARITY",
    "IF_SCRIPT_ARITY",
    "IF_SWITCH_ARITY",
    "IF_VARIABLE_ARITY",
    "SCRIPT_ARITY",
    "CompareKind",
    "ControlSwitch",
    "ControlVariableConstant",
    "ControlVariableGameData",
    "ControlVariableRandom",
    "ControlVariableScript",
    "ControlVariableVariable",
    "DecodedCommand",
    "IdRange",
    "IfKind",
    "IfScript",
    "IfSwitch",
    "IfVariable",
    "Operand",
    "ScriptLine",
    "decode_command",
]
