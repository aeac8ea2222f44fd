"""Immutable records produced by one classification pass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


class AccessKind(StrEnum):
    READ = "READ"
    WRITE = "WRITE"
    READWRITE = "READWRITE"


class OwnerKind(StrEnum):
    EVENT = "event"
    COMMON_EVENT = "common_event"


class ContainerKind(StrEnum):
    MAP = "map"
    COMMON_EVENT = "common_event"


@dataclass(frozen=True, slots=True, order=True)
class ContainerKey:
    """A map or common event that owns findings."""

    kind: ContainerKind
    id: int


@dataclass(frozen=True, slots=True)
class OwnerRef:
    """The event (with its tile position) or common event a finding belongs to."""

    kind: OwnerKind
    id: int
    name: str
    x: int | None = None
    y: int | None = None

    @property
    def key(self) -> tuple[OwnerKind, int]:
        return (self.kind, self.id)

    def to_dict(self) -> dict[str, JSONValue]:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "name": self.name,
            "x": self.x,
            "y": self.y,
        }


@dataclass(frozen=True, slots=True)
class Match:
    """A matcher's verdict for one gate or command."""

    access: AccessKind
    active: bool
    description: str


@dataclass(frozen=True, slots=True)
class Finding:
    container: ContainerKey
    owner: OwnerRef
    access: AccessKind
    active: bool
    page: int | None
    line: int | None
    description: str

    @classmethod
    def from_match(
        cls,
        match: Match,
        *,
        container: ContainerKey,
        owner: OwnerRef,
        page: int | None,
        line: int | None = None,
    ) -> Finding:
        return cls(
            container=container,
            owner=owner,
            access=match.access,
            active=match.active,
            page=page,
            line=line,
            description=match.description,
        )

    def to_dict(self) -> dict[str, JSONValue]:
        return {
            "access": self.access.value,
            "active": self.active,
            "owner": self.owner.to_dict(),
            "page": self.page,
            "line": self.line,
            "description": self.description,
        }


__all__ = [
    "AccessKind",
    "ContainerKey",
    "ContainerKind",
    "Finding",
    "JSONValue",
    "Match",
    "OwnerKind",
    "OwnerRef",
]
