"""
rpgmaker-scraper — unit tests for report rendering

File: tests/unit/ui/test_render.py
Last updated: 2026-10-19

Purpose
- Lock the text report layout, the JSON document shape, and the console
  writer's colour handling.
"""

from __future__ import annotations

import io
import json

import pytest

from rpgmaker_scraper.domain.query import Query, ScanMode
from rpgmaker_scraper.project.name_tables import NameTables
from rpgmaker_scraper.scanning.aggregator import ResultAggregator
from rpgmaker_scraper.scanning.findings import (
    AccessKind,
    ContainerKey,
    ContainerKind,
    Finding,
    OwnerKind,
    OwnerRef,
)
from rpgmaker_scraper.ui.render import (
    ConsoleReportWriter,
    color_allowed,
    render_json_report,
    render_text_report,
)

TABLES = NameTables(
    maps={1: "Town"},
    variables={5: "Gold"},
    switches={9: "Lever"},
    common_events={2: "Payday"},
)
QUERY = Query(ScanMode.VARIABLES, 5)
TOWN = ContainerKey(ContainerKind.MAP, 1)
PAYDAY = ContainerKey(ContainerKind.COMMON_EVENT, 2)
GUARD = OwnerRef(OwnerKind.EVENT, 3, "Guard", x=7, y=8)
CLERK = OwnerRef(OwnerKind.EVENT, 4, "Clerk", x=1, y=2)
PAYDAY_OWNER = OwnerRef(OwnerKind.COMMON_EVENT, 2, "Payday")


def _finding(
    container: ContainerKey,
    owner: OwnerRef,
    access: AccessKind,
    *,
    active: bool = True,
    page: int | None = 1,
    line: int | None = None,
    description: str,
) -> Finding:
    return Finding(
        container=container,
        owner=owner,
        access=access,
        active=active,
        page=page,
        line=line,
        description=description,
    )


def _aggregator() -> ResultAggregator:
    aggregator = ResultAggregator()
    aggregator.add(_finding(TOWN, GUARD, AccessKind.READ, description="IF {Gold} >= 10:"))
    aggregator.add(_finding(TOWN, GUARD, AccessKind.WRITE, line=3, description="{Gold} += 1"))
    aggregator.add(
        _finding(
            TOWN,
            CLERK,
            AccessKind.READWRITE,
            active=False,
            page=2,
            line=12,
            description="{Gold} .. {#6 ?} = {Gold}",
        )
    )
    aggregator.add(
        _finding(
            PAYDAY,
            PAYDAY_OWNER,
            AccessKind.WRITE,
            page=None,
            line=1,
            description="{Gold} += 100",
        )
    )
    return aggregator


EXPECTED_REPORT = """\
=========================================
Found 1 map and 1 common event yielding 4 separate instances using variable #005 ('Gold')
=========================================

Map001.json ('Town')
--------------------------------------------------
ON [READ]
\t@ [7, 8] on Event #003 ('Guard') on Event Page #01:
\t\tIF {Gold} >= 10:
ON [WRITE]
\t@ [7, 8] on Event #003 ('Guard') on Event Page #01:
\t\tLine 003 | {Gold} += 1

OFF [READWRITE]
\t@ [1, 2] on Event #004 ('Clerk') on Event Page #02:
\t\tLine 012 | {Gold} .. {#6 ?} = {Gold}

CommonEvents.json #002 ('Payday')
--------------------------------------------------
ON [WRITE]
\t@ Common Event #002 ('Payday'):
\t\tLine 001 | {Gold} += 100
=========================================
"""


def test_text_report_layout() -> None:
    assert render_text_report(_aggregator(), TABLES, QUERY) == EXPECTED_REPORT


def test_text_report_without_group_blank_lines() -> None:
    report = render_text_report(_aggregator(), TABLES, QUERY, group_blank_lines=False)

    assert "{Gold} += 1\nOFF [READWRITE]" in report


def test_single_map_summary_uses_singular_nouns() -> None:
    aggregator = ResultAggregator()
    aggregator.add(_finding(TOWN, GUARD, AccessKind.READ, description="IF {Gold} >= 1:"))

    report = render_text_report(aggregator, TABLES, QUERY)

    assert "Found 1 map yielding 1 separate instance using variable #005 ('Gold')" in report
    assert "common event" not in report


def test_common_event_only_summary_omits_map_count() -> None:
    aggregator = ResultAggregator()
    aggregator.add(
        _finding(
            PAYDAY,
            PAYDAY_OWNER,
            AccessKind.WRITE,
            page=None,
            line=1,
            description="{Gold} += 100",
        )
    )

    report = render_text_report(aggregator, TABLES, QUERY)

    assert (
        "Found 1 common event yielding 1 separate instance using variable #005 ('Gold')"
        in report
    )
    assert "0 maps" not in report


def test_switch_summary_names_the_switch() -> None:
    aggregator = ResultAggregator()
    aggregator.add(_finding(TOWN, GUARD, AccessKind.WRITE, line=1, description="{Lever} = ON"))

    report = render_text_report(aggregator, TABLES, Query(ScanMode.SWITCHES, 9))

    assert "using switch #009 ('Lever')" in report


def test_empty_report_says_nothing_was_found() -> None:
    report = render_text_report(ResultAggregator(), TABLES, QUERY)

    assert report == "Couldn't locate any usages of variable #005\n"


def test_json_report_splits_maps_and_common_events() -> None:
    document = render_json_report(_aggregator(), TABLES, QUERY)

    assert document["mode"] == "variables"
    assert document["query_id"] == 5
    assert document["query_name"] == "Gold"
    assert document["instance_count"] == 4
    maps = document["maps"]
    common_events = document["common_events"]
    assert isinstance(maps, dict)
    assert isinstance(common_events, dict)
    assert list(maps) == ["1"]
    assert list(common_events) == ["2"]

    town = maps["1"]
    assert isinstance(town, dict)
    assert town["file"] == "Map001.json"
    assert town["name"] == "Town"
    findings = town["findings"]
    assert isinstance(findings, list)
    assert findings[2] == {
        "access": "READWRITE",
        "active": False,
        "owner": {"kind": "event", "id": 4, "name": "Clerk", "x": 1, "y": 2},
        "page": 2,
        "line": 12,
        "description": "{Gold} .. {#6 ?} = {Gold}",
    }
    json.dumps(document)


def test_console_writer_without_color_prints_plain_lines() -> None:
    stream = io.StringIO()
    writer = ConsoleReportWriter(color=False, stream=stream)

    writer.write(_aggregator(), TABLES, QUERY)

    assert stream.getvalue() == EXPECTED_REPORT


def test_console_writer_with_color_emits_styles(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    stream = io.StringIO()
    writer = ConsoleReportWriter(color=True, stream=stream)

    writer.write(_aggregator(), TABLES, QUERY)

    assert "\x1b[" in stream.getvalue()


def test_color_allowed_respects_flag_and_no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    class _Tty(io.StringIO):
        def isatty(self) -> bool:
            return True

    monkeypatch.delenv("NO_COLOR", raising=False)
    assert color_allowed(False, stream=_Tty())
    assert not color_allowed(True, stream=_Tty())
    assert not color_allowed(False, stream=io.StringIO())

    monkeypatch.setenv("NO_COLOR", "1")
    assert not color_allowed(False, stream=_Tty())
