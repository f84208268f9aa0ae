"""
Domain building blocks shared by the booking and swap engines.

Bookings and swap proposals are aggregates: they carry identity, an
optimistic ``version`` that the store bumps on every save, and the events
raised while a command ran against them.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4


@dataclass(kw_only=True)
class Entity(ABC):
    """Identified by ``id`` alone; every other field may change."""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.id == self.id

    def __hash__(self):
        return hash(self.id)

    def touch(self):
        self.updated_at = datetime.now()


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable; equal when every field is equal."""


@dataclass(kw_only=True, eq=False)
class Aggregate(Entity):
    """
    Consistency boundary for one booking or one swap proposal.

    ``version`` is read together with the row and written back as a
    condition of the update, so two requests working from the same
    snapshot cannot both succeed. Events stay on the aggregate until a
    unit of work collects them.
    """
    version: int = 0
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False, compare=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        return list(self._events)


@dataclass(kw_only=True)
class DomainEvent:
    """Something that happened to an aggregate, delivered after commit."""
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: UUID | None = None

    def to_dict(self) -> dict:
        """Envelope fields; subclasses extend it with their payload."""
        return {
            'event_id': str(self.event_id),
            'event_type': type(self).__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id else None,
        }
