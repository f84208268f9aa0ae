"""Read-only view of a listing as the booking and swap engines see it."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class ItemRef(ValueObject):
    id: UUID
    owner_id: int
    title: str = ''
    status: str = 'active'

    def is_owned_by(self, user_id) -> bool:
        return self.owner_id == user_id
