"""Tagged parameter values decoded from raw command parameter lists.

Every command parameter is decoded to the first matching tag in a fixed
priority order: integer, float, boolean, single character, string. A string of
length one becomes ``CHARACTER`` rather than ``STRING``; some commands carry
one-character script lines and those never reach the script matcher.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

ParamValue = int | float | bool | str


class ParamKind(StrEnum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    CHARACTER = "character"
    STRING = "string"


@dataclass(frozen=True, slots=True)
class Param:
    """One decoded command parameter."""

    kind: ParamKind
    value: ParamValue

    @property
    def is_integer(self) -> bool:
        return self.kind is ParamKind.INTEGER

    @property
    def is_string(self) -> bool:
        return self.kind is ParamKind.STRING


def decode_parameter(raw: object) -> Param | None:
    """Decode one raw JSON value, or return ``None`` for unsupported shapes."""

    # bool is an int subclass, so integers must exclude it explicitly.
    if isinstance(raw, int) and not isinstance(raw, bool):
        return Param(ParamKind.INTEGER, raw)
    if isinstance(raw, float):
        return Param(ParamKind.FLOAT, raw)
    if isinstance(raw, bool):
        return Param(ParamKind.BOOLEAN, raw)
    if isinstance(raw, str) and len(raw) == 1:
        return Param(ParamKind.CHARACTER, raw)
    if isinstance(raw, str):
        return Param(ParamKind.STRING, raw)
    return None


def decode_parameters(raw_values: Iterable[object]) -> tuple[Param, ...]:
    """Decode a raw parameter list, dropping values with no supported tag."""

    decoded: list[Param] = []
    for raw in raw_values:
        param = decode_parameter(raw)
        if param is not None:
            decoded.append(param)
    return tuple(decoded)


__all__ = [
    "Param",
    "ParamKind",
    "ParamValue",
    "decode_parameter",
    "decode_parameters",
]
