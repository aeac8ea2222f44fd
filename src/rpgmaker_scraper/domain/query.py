"""The single (mode, id) question a scan answers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ScanMode(StrEnum):
    VARIABLES = "variables"
    SWITCHES = "switches"

    @property
    def noun(self) -> str:
        return "variable" if self is ScanMode.VARIABLES else "switch"


@dataclass(frozen=True, slots=True)
class Query:
    mode: ScanMode
    target_id: int

    def __post_init__(self) -> None:
        if isinstance(self.target_id, bool) or not isinstance(self.target_id, int):
            raise ValueError(f"target id must be an integer, got {type(self.target_id).__name__}")
        if self.target_id < 0:
            raise ValueError(f"target id must be non-negative, got {self.target_id}")

    def describe(self) -> str:
        return f"{self.mode.noun} #{self.target_id:03d}"


__all__ = ["Query", "ScanMode"]
