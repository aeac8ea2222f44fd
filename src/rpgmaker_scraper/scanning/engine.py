"""
rpgmaker-scraper — classification pass.

File: src/rpgmaker_scraper/scanning/engine.py
Last updated: 2026-10-19

Purpose
- Walk every map event page and every common event in file order and collect
  one finding per accepting gate or command.

Functional requirements
- Per page, the condition finding precedes the page's command findings;
  command findings follow ascending line order.
- Each command is classified exactly once; the first accepting matcher wins.
- Deterministic: the same project and query always yield the same findings.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from rpgmaker_scraper.domain.models import Command, CommonEvent, Event
from rpgmaker_scraper.domain.query import Query
from rpgmaker_scraper.observability.logging import correlation_scope, get_logger
from rpgmaker_scraper.project.loader import MapData, ProjectData
from rpgmaker_scraper.project.name_tables import NameTables
from rpgmaker_scraper.scanning.aggregator import ResultAggregator
from rpgmaker_scraper.scanning.findings import (
    ContainerKey,
    ContainerKind,
    Finding,
    OwnerKind,
    OwnerRef,
)
from rpgmaker_scraper.scanning.matchers import AccessClassifier


class ScanEngine:
    """Runs one classification pass for a single (mode, id) query."""

    def __init__(self, tables: NameTables, query: Query, *, logger: Any | None = None) -> None:
        self._tables = tables
        self._query = query
        self._logger = logger if logger is not None else get_logger(__name__)
        self._classifier = AccessClassifier(tables, query, logger=self._logger)

    @property
    def query(self) -> Query:
        return self._query

    def scan(self, project: ProjectData) -> ResultAggregator:
        aggregator = ResultAggregator()
        for map_data in project.maps:
            self.scan_map(map_data, aggregator)
        for common_event in project.common_events:
            self.scan_common_event(common_event, aggregator)
        self._logger.info(
            "scan_complete",
            mode=self._query.mode.value,
            target_id=self._query.target_id,
            container_count=aggregator.container_count,
            instance_count=aggregator.instance_count,
        )
        return aggregator

    def scan_map(self, map_data: MapData, aggregator: ResultAggregator) -> None:
        container = ContainerKey(ContainerKind.MAP, map_data.map_id)
        with correlation_scope(map_id=str(map_data.map_id)):
            for event in map_data.events:
                self.scan_event(event, container, aggregator)

    def scan_event(
        self,
        event: Event,
        container: ContainerKey,
        aggregator: ResultAggregator,
    ) -> None:
        owner = OwnerRef(OwnerKind.EVENT, event.id, event.name, x=event.x, y=event.y)
        with correlation_scope(event_id=str(event.id)):
            for page in event.pages:
                gate = self._classifier.match_condition(page.conditions)
                if gate is not None:
                    aggregator.add(
                        Finding.from_match(
                            gate, container=container, owner=owner, page=page.number
                        )
                    )
                self._scan_commands(page.commands, container, owner, page.number, aggregator)

    def scan_common_event(self, common_event: CommonEvent, aggregator: ResultAggregator) -> None:
        container = ContainerKey(ContainerKind.COMMON_EVENT, common_event.id)
        owner = OwnerRef(OwnerKind.COMMON_EVENT, common_event.id, common_event.name)
        with correlation_scope(common_event_id=str(common_event.id)):
            gate = self._classifier.match_trigger(common_event)
            if gate is not None:
                aggregator.add(
                    Finding.from_match(gate, container=container, owner=owner, page=None)
                )
            self._scan_commands(common_event.commands, container, owner, None, aggregator)

    def _scan_commands(
        self,
        commands: Iterable[Command],
        container: ContainerKey,
        owner: OwnerRef,
        page: int | None,
        aggregator: ResultAggregator,
    ) -> None:
        for command in commands:
            match = self._classifier.match_command(command)
            if match is None:
                continue
            aggregator.add(
                Finding.from_match(
                    match,
                    container=container,
                    owner=owner,
                    page=page,
                    line=command.line,
                )
            )


def scan_project(project: ProjectData, query: Query) -> ResultAggregator:
    """Run a fresh engine over ``project`` for ``query``."""

    return ScanEngine(project.tables, query).scan(project)


__all__ = ["ScanEngine", "scan_project"]
