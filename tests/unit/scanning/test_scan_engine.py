"""
rpgmaker-scraper — unit tests for the classification pass

File: tests/unit/scanning/test_scan_engine.py
Last updated: 2026-10-19

Purpose
- Validate ordering, ownership, and determinism of findings across a whole
  loaded project.

What this test file should cover
- Page gate findings precede the page's command findings.
- Line numbers follow raw command positions.
- Common events contribute findings with no page number.
- Identical inputs produce identical ordered findings.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from project_fixtures import command, common_event, conditions, event, page, write_project

from rpgmaker_scraper.domain.models import Event
from rpgmaker_scraper.domain.query import Query, ScanMode
from rpgmaker_scraper.observability import get_correlation_context
from rpgmaker_scraper.project import load_project
from rpgmaker_scraper.project.loader import MapData, ProjectData
from rpgmaker_scraper.project.name_tables import NameTables
from rpgmaker_scraper.scanning import AccessClassifier, ScanEngine, scan_project
from rpgmaker_scraper.scanning.findings import AccessKind, ContainerKey, ContainerKind, OwnerKind


def _project(root: Path) -> Path:
    guard = event(
        3,
        "Guard",
        [
            page(
                [
                    command(101, "", 0, 0, 2),
                    command(111, 1, 5, 0, 10, 1),
                    command(122, 5, 5, 1, 0, 1),
                    command(412),
                ],
                gate=conditions(variable=(5, True), variable_value=10),
            ),
            page([command(355, "$gameVariables.setValue(5, 0);")]),
        ],
        x=7,
        y=8,
    )
    bystander = event(4, "Bystander", [page([command(122, 6, 6, 0, 0, 1)])], x=1, y=1)
    return write_project(
        root,
        variables={5: "Gold", 6: "Bonus"},
        switches={2: "Night"},
        maps={1: ("Town", [guard, bystander]), 2: ("Empty", [])},
        common_events=[
            common_event(1, "Payday", [command(122, 5, 5, 1, 0, 100)], trigger=2, switch_id=2),
            common_event(2, "Nothing", [command(122, 6, 6, 0, 0, 1)]),
        ],
    )


def test_scan_orders_gate_before_commands_and_maps_before_common_events(tmp_path: Path) -> None:
    query = Query(ScanMode.VARIABLES, 5)
    project = load_project(_project(tmp_path), query)

    aggregator = scan_project(project, query)

    summary = [
        (item.container.kind, item.owner.id, item.page, item.line, item.access)
        for item in aggregator
    ]
    assert summary == [
        (ContainerKind.MAP, 3, 1, None, AccessKind.READ),
        (ContainerKind.MAP, 3, 1, 2, AccessKind.READ),
        (ContainerKind.MAP, 3, 1, 3, AccessKind.WRITE),
        (ContainerKind.MAP, 3, 2, 1, AccessKind.WRITE),
        (ContainerKind.COMMON_EVENT, 1, None, 1, AccessKind.WRITE),
    ]
    assert aggregator.containers() == (
        ContainerKey(ContainerKind.MAP, 1),
        ContainerKey(ContainerKind.COMMON_EVENT, 1),
    )


def test_event_findings_carry_owner_position(tmp_path: Path) -> None:
    query = Query(ScanMode.VARIABLES, 5)
    project = load_project(_project(tmp_path), query)

    first = scan_project(project, query).findings[0]

    assert first.owner.kind is OwnerKind.EVENT
    assert (first.owner.x, first.owner.y, first.owner.name) == (7, 8, "Guard")
    assert first.description == "IF {Gold} >= 10:"


def test_switch_scan_reports_common_event_trigger(tmp_path: Path) -> None:
    query = Query(ScanMode.SWITCHES, 2)
    project = load_project(_project(tmp_path), query)

    findings = scan_project(project, query).findings

    assert len(findings) == 1
    assert findings[0].owner.kind is OwnerKind.COMMON_EVENT
    assert findings[0].page is None
    assert findings[0].line is None
    assert findings[0].description == "HAS TRIGGER: PARALLEL"


def test_scan_is_deterministic(tmp_path: Path) -> None:
    query = Query(ScanMode.VARIABLES, 5)
    project = load_project(_project(tmp_path), query)

    first = scan_project(project, query).findings
    second = ScanEngine(project.tables, query).scan(project).findings

    assert first == second


def _synthetic_project(raw_commands: list[dict[str, object]]) -> ProjectData:
    raw_event = event(1, "Sentry", [page(raw_commands)])
    decoded = Event.from_json(raw_event)
    assert decoded is not None
    return ProjectData(
        data_dir=Path("data"),
        tables=NameTables(variables={index: f"V{index}" for index in range(1, 12)}),
        maps=(MapData(map_id=1, name="Sentry", events=(decoded,)),),
        common_events=(),
    )


_COMMANDS = st.builds(
    lambda code, params: command(code, *params),
    st.sampled_from([111, 121, 122, 355, 655]),
    st.lists(
        st.one_of(
            st.integers(min_value=0, max_value=10),
            st.just("$gameVariables.value(3)"),
        ),
        max_size=7,
    ),
)


@settings(max_examples=50)
@given(st.lists(_COMMANDS, max_size=12), st.integers(min_value=1, max_value=10))
def test_repeated_scans_yield_identical_findings(
    raw_commands: list[dict[str, object]],
    target_id: int,
) -> None:
    project = _synthetic_project(raw_commands)
    query = Query(ScanMode.VARIABLES, target_id)

    assert scan_project(project, query).findings == scan_project(project, query).findings


def test_commands_are_classified_inside_their_event_scope(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    project = load_project(_project(tmp_path), Query(ScanMode.VARIABLES, 5))
    seen: list[dict[str, str]] = []
    original = AccessClassifier.match_command

    def recording_match(self: AccessClassifier, command: object) -> object:
        seen.append(get_correlation_context())
        return original(self, command)  # type: ignore[arg-type]

    monkeypatch.setattr(AccessClassifier, "match_command", recording_match)
    scan_project(project, Query(ScanMode.VARIABLES, 5))

    town = [context for context in seen if context.get("map_id") == "1"]
    assert list(dict.fromkeys(context["event_id"] for context in town)) == ["3", "4"]
    common = [context for context in seen if "common_event_id" in context]
    assert list(dict.fromkeys(context["common_event_id"] for context in common)) == ["1", "2"]
    assert all("event_id" not in context and "map_id" not in context for context in common)
    assert len(town) + len(common) == len(seen)
    assert get_correlation_context() == {}
