"""Ordered, grouped ownership of every finding produced by one scan."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass

from rpgmaker_scraper.scanning.findings import ContainerKey, ContainerKind, Finding, OwnerRef


@dataclass(frozen=True, slots=True)
class FindingGroup:
    """Consecutive findings that share one owning event or common event."""

    owner: OwnerRef
    findings: tuple[Finding, ...]


class ResultAggregator:
    """Single owner of the finding list; containers hold indices into it.

    Findings are append-only and kept in discovery order. Nothing is
    deduplicated: the same command matched twice would appear twice.
    """

    __slots__ = ("_by_container", "_findings")

    def __init__(self) -> None:
        self._findings: list[Finding] = []
        self._by_container: dict[ContainerKey, list[int]] = {}

    def add(self, finding: Finding) -> None:
        self._by_container.setdefault(finding.container, []).append(len(self._findings))
        self._findings.append(finding)

    def __len__(self) -> int:
        return len(self._findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self._findings)

    @property
    def findings(self) -> tuple[Finding, ...]:
        return tuple(self._findings)

    @property
    def is_empty(self) -> bool:
        return not self._findings

    @property
    def instance_count(self) -> int:
        return len(self._findings)

    @property
    def container_count(self) -> int:
        return len(self._by_container)

    def containers(self, kind: ContainerKind | None = None) -> tuple[ContainerKey, ...]:
        """Containers with at least one finding, in first-discovery order."""

        return tuple(key for key in self._by_container if kind is None or key.kind is kind)

    def findings_for(self, container: ContainerKey) -> tuple[Finding, ...]:
        return tuple(self._findings[index] for index in self._by_container.get(container, ()))

    def groups(self, container: ContainerKey) -> tuple[FindingGroup, ...]:
        """Fold a container's findings into runs that share the same owner."""

        grouped: list[FindingGroup] = []
        for _, run in itertools.groupby(
            self.findings_for(container), key=lambda finding: finding.owner.key
        ):
            members = tuple(run)
            grouped.append(FindingGroup(owner=members[0].owner, findings=members))
        return tuple(grouped)


__all__ = ["FindingGroup", "ResultAggregator"]
