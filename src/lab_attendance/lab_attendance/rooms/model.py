from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..core.enums import RoomKind


@dataclass(frozen=True)
class Room:
    """Domain entity: a room students attend (lab or classroom)."""

    kind: ClassVar[RoomKind]

    id: str
    name: str
    capacity: int


@dataclass(frozen=True)
class Lab(Room):
    kind: ClassVar[RoomKind] = RoomKind.LAB


@dataclass(frozen=True)
class ClassRoom(Room):
    kind: ClassVar[RoomKind] = RoomKind.CLASS
