from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import RecordKind, RoomKind
from .policies.base import RoomPolicy
from .policies.class_policy import ClassPolicy
from .policies.lab_policy import LabPolicy


@dataclass
class RoomPolicyFactory:
    """Factory Pattern: choose the policy for a room kind."""

    _lab: RoomPolicy = field(default_factory=LabPolicy)
    _class: RoomPolicy = field(default_factory=ClassPolicy)

    def for_kind(self, kind: RoomKind | RecordKind | str) -> RoomPolicy:
        if isinstance(kind, RecordKind):
            kind = kind.room_kind
        kind = RoomKind(kind)
        return self._lab if kind == RoomKind.LAB else self._class

    def for_type_label(self, label: object) -> Optional[RoomPolicy]:
        """Resolve the `Type` column of an imported row; exact match only."""
        for policy in self.all():
            if label == policy.type_label:
                return policy
        return None

    def all(self) -> tuple[RoomPolicy, ...]:
        return (self._lab, self._class)
