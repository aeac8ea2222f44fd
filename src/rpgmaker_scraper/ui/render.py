"""Report rendering for rpgmaker-scraper.

File: src/rpgmaker_scraper/ui/render.py
Last updated: 2026-10-19

Purpose
- Turn the findings of one scan into the grouped text report, the equivalent
  JSON document, or a coloured console rendering of the text report.
- Respect the NO_COLOR environment variable and the --no-color CLI flag.

What should be included in this file
- Pure ``render_text_report`` / ``render_json_report`` functions.
- ``ConsoleReportWriter`` that prints the same lines through ``rich``.

Functional requirements
- The plain text and the console rendering are built from one line model, so
  they never disagree on content.
- Owner blocks inside a container are separated by one blank line; the
  separator is decided by a fold over the grouped findings, never by state
  carried between calls.
- No classification happens here.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator, Sequence
from typing import IO, Final

from rich.console import Console
from rich.segment import Segment, SegmentLines
from rich.style import Style

from rpgmaker_scraper.constants import (
    COMMON_EVENTS_FILE,
    REPORT_RULE,
    SECTION_RULE,
    map_file_name,
)
from rpgmaker_scraper.domain.query import Query
from rpgmaker_scraper.project.name_tables import NameTables
from rpgmaker_scraper.scanning.aggregator import FindingGroup, ResultAggregator
from rpgmaker_scraper.scanning.findings import (
    AccessKind,
    ContainerKey,
    ContainerKind,
    Finding,
    JSONValue,
    OwnerKind,
)

_Segment = tuple[str, str | None]
_Line = tuple[_Segment, ...]

STYLES: Final[dict[str, Style]] = {
    "rule": Style(color="white"),
    "count": Style(color="green"),
    "header": Style(color="cyan", bold=True),
    "active": Style(color="green"),
    "inactive": Style(color="bright_black"),
    "line": Style(color="bright_black"),
    "missing": Style(color="red"),
    AccessKind.READ.value: Style(color="blue"),
    AccessKind.WRITE.value: Style(color="red"),
    AccessKind.READWRITE.value: Style(color="magenta"),
}


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def _container_title(container: ContainerKey, tables: NameTables) -> str:
    if container.kind is ContainerKind.MAP:
        return f"{map_file_name(container.id)} ('{tables.map_name(container.id)}')"
    name = tables.common_event_name(container.id)
    return f"{COMMON_EVENTS_FILE} #{container.id:03d} ('{name}')"


def _location(finding: Finding) -> str:
    owner = finding.owner
    if owner.kind is OwnerKind.COMMON_EVENT:
        return f"\t@ Common Event #{owner.id:03d} ('{owner.name}'):"
    page = finding.page if finding.page is not None else 0
    return (
        f"\t@ [{owner.x}, {owner.y}] on Event #{owner.id:03d} ('{owner.name}') "
        f"on Event Page #{page:02d}:"
    )


def _finding_lines(finding: Finding) -> Iterator[_Line]:
    state = "ON" if finding.active else "OFF"
    yield (
        (state, "active" if finding.active else "inactive"),
        (" ", None),
        (f"[{finding.access.value}]", finding.access.value),
    )
    yield ((_location(finding), None),)
    if finding.line is not None:
        yield (
            (f"\t\tLine {finding.line:03d}", "line"),
            (f" | {finding.description}", None),
        )
    else:
        yield ((f"\t\t{finding.description}", None),)


def _summary_line(aggregator: ResultAggregator, tables: NameTables, query: Query) -> _Line:
    map_count = len(aggregator.containers(ContainerKind.MAP))
    common_count = len(aggregator.containers(ContainerKind.COMMON_EVENT))
    instances = aggregator.instance_count

    counted = [
        f"{count} {_plural(count, singular, plural)}"
        for count, singular, plural in (
            (map_count, "map", "maps"),
            (common_count, "common event", "common events"),
        )
        if count
    ]

    segments: list[_Segment] = [("Found ", None)]
    for index, part in enumerate(counted):
        if index:
            segments.append((" and ", None))
        segments.append((part, "count"))
    segments.append((" yielding ", None))
    segments.append(
        (f"{instances} separate {_plural(instances, 'instance', 'instances')}", "count")
    )
    query_name = tables.name_for(query.mode, query.target_id)
    segments.append((f" using {query.describe()} ('{query_name}')", None))
    return tuple(segments)


def _group_lines(
    groups: Sequence[FindingGroup],
    *,
    group_blank_lines: bool,
) -> Iterator[_Line]:
    for index, group in enumerate(groups):
        if index and group_blank_lines:
            yield ()
        for finding in group.findings:
            yield from _finding_lines(finding)


def report_lines(
    aggregator: ResultAggregator,
    tables: NameTables,
    query: Query,
    *,
    group_blank_lines: bool = True,
) -> tuple[_Line, ...]:
    """Build the styled line model shared by every text rendering."""

    if aggregator.is_empty:
        return (((f"Couldn't locate any usages of {query.describe()}", "missing"),),)

    lines: list[_Line] = [
        ((REPORT_RULE, "rule"),),
        _summary_line(aggregator, tables, query),
        ((REPORT_RULE, "rule"),),
    ]
    for container in aggregator.containers():
        lines.append(())
        lines.append(((_container_title(container, tables), "header"),))
        lines.append(((SECTION_RULE, "rule"),))
        lines.extend(
            _group_lines(aggregator.groups(container), group_blank_lines=group_blank_lines)
        )
    lines.append(((REPORT_RULE, "rule"),))
    return tuple(lines)


def render_text_report(
    aggregator: ResultAggregator,
    tables: NameTables,
    query: Query,
    *,
    group_blank_lines: bool = True,
) -> str:
    """Render the uncoloured text report, newline-terminated."""

    lines = report_lines(aggregator, tables, query, group_blank_lines=group_blank_lines)
    return "".join("".join(text for text, _ in line) + "\n" for line in lines)


def render_json_report(
    aggregator: ResultAggregator,
    tables: NameTables,
    query: Query,
) -> dict[str, JSONValue]:
    """Render the findings as a JSON-compatible document keyed by container id."""

    maps: dict[str, JSONValue] = {}
    for container in aggregator.containers(ContainerKind.MAP):
        maps[str(container.id)] = {
            "file": map_file_name(container.id),
            "name": tables.map_name(container.id),
            "findings": [finding.to_dict() for finding in aggregator.findings_for(container)],
        }

    common_events: dict[str, JSONValue] = {}
    for container in aggregator.containers(ContainerKind.COMMON_EVENT):
        common_events[str(container.id)] = {
            "name": tables.common_event_name(container.id),
            "findings": [finding.to_dict() for finding in aggregator.findings_for(container)],
        }

    return {
        "mode": query.mode.value,
        "query_id": query.target_id,
        "query_name": tables.name_for(query.mode, query.target_id),
        "container_count": aggregator.container_count,
        "instance_count": aggregator.instance_count,
        "maps": maps,
        "common_events": common_events,
    }


def color_allowed(no_color_flag: bool, *, stream: IO[str] | None = None) -> bool:
    """Check whether color output should be attempted."""

    if no_color_flag:
        return False
    if os.environ.get("NO_COLOR", ""):
        return False
    target = stream if stream is not None else sys.stdout
    return hasattr(target, "isatty") and target.isatty()


class ConsoleReportWriter:
    """Prints the text report through a ``rich`` console.

    With colour disabled the console emits exactly the plain text lines.
    """

    def __init__(
        self,
        *,
        color: bool = True,
        stream: IO[str] | None = None,
        group_blank_lines: bool = True,
    ) -> None:
        self._color = color
        self._group_blank_lines = group_blank_lines
        self._console = Console(
            file=stream if stream is not None else sys.stdout,
            color_system="standard" if color else None,
            force_terminal=color,
            highlight=False,
            soft_wrap=True,
        )

    @property
    def color(self) -> bool:
        return self._color

    @property
    def console(self) -> Console:
        return self._console

    def write(self, aggregator: ResultAggregator, tables: NameTables, query: Query) -> None:
        lines = report_lines(aggregator, tables, query, group_blank_lines=self._group_blank_lines)
        self._console.print(_segment_lines(lines))


def _segment_lines(lines: Sequence[_Line]) -> SegmentLines:
    # Raw segments keep the report's tab indentation; Text would expand it.
    return SegmentLines(
        (
            [
                Segment(fragment, STYLES[style_name] if style_name is not None else None)
                for fragment, style_name in line
            ]
            for line in lines
        ),
        new_lines=True,
    )


__all__ = [
    "STYLES",
    "ConsoleReportWriter",
    "color_allowed",
    "render_json_report",
    "render_text_report",
    "report_lines",
]
