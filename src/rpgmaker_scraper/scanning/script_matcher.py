"""Heuristic read/write detection inside free-text script lines.

Script commands and script operands carry arbitrary JavaScript, so the
queried id is only found when it appears literally in an accessor or mutator
call. Computed ids (``$gameVariables.value(base + 2)``) are never detected.
"""

from __future__ import annotations

import re

from rpgmaker_scraper.domain.query import ScanMode
from rpgmaker_scraper.scanning.findings import AccessKind, Match

_GLOBALS: dict[ScanMode, str] = {
    ScanMode.VARIABLES: "$gameVariables",
    ScanMode.SWITCHES: "$gameSwitches",
}


class ScriptMatcher:
    """Finds ``<global>.value(<id>)`` and ``<global>.setValue(<id>`` in one line."""

    __slots__ = ("_read_pattern", "_write_pattern")

    def __init__(self, mode: ScanMode, target_id: int) -> None:
        owner = re.escape(_GLOBALS[mode])
        self._read_pattern = re.compile(rf"{owner}\.value\({target_id}\)")
        # The id must not continue into a longer number: setValue(5 vs setValue(50.
        self._write_pattern = re.compile(rf"{owner}\.setValue\({target_id}(?!\d)")

    def match(self, text: str) -> Match | None:
        if self._read_pattern.search(text):
            return Match(AccessKind.READ, True, text.strip())
        if self._write_pattern.search(text):
            return Match(AccessKind.WRITE, True, text.strip())
        return None


__all__ = ["ScriptMatcher"]
