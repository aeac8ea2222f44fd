"""
rpgmaker-scraper — per-opcode access matchers.

File: src/rpgmaker_scraper/scanning/matchers.py
Last updated: 2026-10-19

Purpose
- Decide, for one (mode, id) query, whether a page condition, a common event
  trigger, or a single command touches the queried identifier, and how.

Functional requirements
- A matcher either declines (``None``) or accepts with exactly one ``Match``.
- Matchers never raise. Schema mismatches decline at decode time; operator
  and operation codes outside their tables degrade to a placeholder
  description.
- Id 1 is the editor's default selection: a page condition naming it only
  counts when its validity flag is set.
- Switches are written, never read-written; only Control Variable with a
  variable operand can produce ``READWRITE``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from rpgmaker_scraper.constants import DEFAULT_SLOT_ID
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
    IfScript,
    IfSwitch,
    IfVariable,
    ScriptLine,
    decode_command,
)
from rpgmaker_scraper.domain.models import Command, CommonEvent, Condition
from rpgmaker_scraper.domain.query import Query, ScanMode
from rpgmaker_scraper.observability.logging import get_logger
from rpgmaker_scraper.project.name_tables import NameTables
from rpgmaker_scraper.scanning.findings import AccessKind, Match
from rpgmaker_scraper.scanning.script_matcher import ScriptMatcher

COMPARISON_OPERATORS: Final[dict[int, str]] = {
    0: "=",
    1: ">=",
    2: "<=",
    3: ">",
    4: "<",
    5: "!=",
}
ASSIGNMENT_OPERATIONS: Final[dict[int, str]] = {
    0: "=",
    1: "+=",
    2: "-=",
    3: "*=",
    4: "/=",
    5: "%=",
}
MALFORMED_OPERATOR: Final[str] = "malformed operator"
MALFORMED_OPERATION: Final[str] = "malformed operation"

_ControlVariable = (
    ControlVariableConstant
    | ControlVariableVariable
    | ControlVariableRandom
    | ControlVariableGameData
    | ControlVariableScript
)


class AccessClassifier:
    """Classifies gates and commands against one query."""

    def __init__(self, tables: NameTables, query: Query, *, logger: Any | None = None) -> None:
        self._tables = tables
        self._query = query
        self._target = query.target_id
        self._scripts = ScriptMatcher(query.mode, query.target_id)
        self._logger = logger if logger is not None else get_logger(__name__)

    @property
    def query(self) -> Query:
        return self._query

    # ------------------------------------------------------------------
    # Gates
    # ------------------------------------------------------------------

    def match_condition(self, condition: Condition) -> Match | None:
        """Classify an event page's activation condition."""

        if self._query.mode is ScanMode.VARIABLES:
            return self._match_variable_condition(condition)
        return self._match_switch_condition(condition)

    def _match_variable_condition(self, condition: Condition) -> Match | None:
        if not self._counts(condition.variable_id, condition.variable_valid):
            return None
        name = self._variable(condition.variable_id)
        return Match(
            AccessKind.READ,
            condition.variable_valid,
            f"IF {{{name}}} >= {condition.variable_value}:",
        )

    def _match_switch_condition(self, condition: Condition) -> Match | None:
        slots = (
            (condition.switch1_id, condition.switch1_valid),
            (condition.switch2_id, condition.switch2_valid),
        )
        matched = [slot_id for slot_id, valid in slots if self._counts(slot_id, valid)]
        if not matched:
            return None

        valid_ids = [slot_id for slot_id, valid in slots if valid]
        if len(valid_ids) == 2:
            first, second = (self._switch(slot_id) for slot_id in valid_ids)
            description = f"IF {{{first}}} && {{{second}}}:"
        elif valid_ids:
            description = f"IF {{{self._switch(valid_ids[0])}}}:"
        else:
            description = f"IF {{{self._switch(matched[0])}}}:"

        return Match(
            AccessKind.READ,
            condition.switch1_valid or condition.switch2_valid,
            description,
        )

    def match_trigger(self, common_event: CommonEvent) -> Match | None:
        """Classify a common event's autorun/parallel gating switch."""

        if self._query.mode is not ScanMode.SWITCHES:
            return None
        if not common_event.has_trigger or common_event.switch_id != self._target:
            return None
        return Match(AccessKind.READ, True, f"HAS TRIGGER: {common_event.trigger.name}")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def match_command(self, command: Command) -> Match | None:
        """Decode ``command`` once and dispatch it to its opcode's matcher."""

        decoded = decode_command(command)
        if decoded is None:
            return None
        return self.match_decoded(decoded)

    def match_decoded(self, decoded: DecodedCommand) -> Match | None:
        if isinstance(decoded, (IfScript, ScriptLine)):
            return self._scripts.match(decoded.text)
        if isinstance(decoded, IfVariable):
            return self._match_if_variable(decoded)
        if isinstance(decoded, IfSwitch):
            return self._match_if_switch(decoded)
        if isinstance(decoded, ControlSwitch):
            return self._match_control_switch(decoded)
        return self._match_control_variable(decoded)

    def _match_if_variable(self, branch: IfVariable) -> Match | None:
        if self._query.mode is not ScanMode.VARIABLES:
            return None
        if branch.variable_id != self._target:
            return None
        if branch.compare is CompareKind.VARIABLE and branch.operand != self._target:
            return None

        symbol = COMPARISON_OPERATORS.get(branch.operator)
        if symbol is None:
            self._logger.warning("operator_out_of_range", operator=branch.operator)
            return Match(AccessKind.READ, True, MALFORMED_OPERATOR)

        name = self._variable(branch.variable_id)
        if branch.compare is CompareKind.VARIABLE:
            compared = self._variable(branch.operand)
            description = f"IF {{{name}}} {symbol} {{{compared}}}:"
        else:
            description = f"IF {{{name}}} {symbol} {branch.operand}:"
        return Match(AccessKind.READ, True, description)

    def _match_if_switch(self, branch: IfSwitch) -> Match | None:
        if self._query.mode is not ScanMode.SWITCHES:
            return None
        if branch.switch_id != self._target:
            return None
        state = "ON" if branch.invert == 0 else "OFF"
        name = self._switch(branch.switch_id)
        return Match(AccessKind.READ, True, f"IF {{{name}}} is {state}:")

    def _match_control_switch(self, command: ControlSwitch) -> Match | None:
        if self._query.mode is not ScanMode.SWITCHES:
            return None
        if self._target not in command.target:
            return None
        state = "ON" if command.turns_on else "OFF"
        prefix = self._range_label(command.target, self._switch)
        return Match(AccessKind.WRITE, True, f"{prefix} = {state}")

    def _match_control_variable(self, command: _ControlVariable) -> Match | None:
        if self._query.mode is not ScanMode.VARIABLES:
            return None
        if isinstance(command, ControlVariableGameData):
            # Game data operands read engine state, never variables or switches.
            return None
        if isinstance(command, ControlVariableScript):
            return self._scripts.match(command.text)

        in_range = self._target in command.target
        if isinstance(command, ControlVariableVariable):
            reads_target = command.source_id == self._target
            if reads_target and in_range:
                access = AccessKind.READWRITE
            elif reads_target:
                access = AccessKind.READ
            elif in_range:
                access = AccessKind.WRITE
            else:
                return None
        elif in_range:
            access = AccessKind.WRITE
        else:
            return None

        return Match(access, True, self._describe_control_variable(command))

    def _describe_control_variable(
        self,
        command: ControlVariableConstant | ControlVariableVariable | ControlVariableRandom,
    ) -> str:
        symbol = ASSIGNMENT_OPERATIONS.get(command.operation)
        if symbol is None:
            self._logger.warning("operation_out_of_range", operation=command.operation)
            return MALFORMED_OPERATION

        prefix = self._range_label(command.target, self._variable)
        if isinstance(command, ControlVariableVariable):
            return f"{prefix} {symbol} {{{self._variable(command.source_id)}}}"
        if isinstance(command, ControlVariableRandom):
            return f"{prefix} {symbol} Random {command.minimum} .. {command.maximum}"
        return f"{prefix} {symbol} {command.value}"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _counts(self, slot_id: int, valid: bool) -> bool:
        if slot_id != self._target:
            return False
        return slot_id != DEFAULT_SLOT_ID or valid

    def _variable(self, variable_id: int) -> str:
        return self._tables.display_variable_name(variable_id)

    def _switch(self, switch_id: int) -> str:
        return self._tables.switch_name(switch_id)

    @staticmethod
    def _range_label(target: IdRange, namer: Callable[[int], str]) -> str:
        if target.is_single:
            return f"{{{namer(target.start)}}}"
        return f"{{{namer(target.start)}}} .. {{{namer(target.end)}}}"


__all__ = [
    "ASSIGNMENT_OPERATIONS",
    "COMPARISON_OPERATORS",
    "MALFORMED_OPERATION",
    "MALFORMED_OPERATOR",
    "AccessClassifier",
]
