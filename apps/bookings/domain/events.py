"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange


@dataclass(kw_only=True)
class BookingRequested(DomainEvent):
    """
    Event: A renter asked to book an item (new PENDING booking)

    Triggers:
    - Audit log entry
    - Owner inbox refresh
    """
    booking_id: UUID
    item_id: UUID
    owner_id: int
    renter_id: int
    dates: DateRange

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'item_id': str(self.item_id),
            'owner_id': self.owner_id,
            'renter_id': self.renter_id,
            'start_date': self.dates.start_date.isoformat(),
            'end_date': self.dates.end_date.isoformat(),
        })
        return data


@dataclass(kw_only=True)
class BookingStatusChanged(DomainEvent):
    """
    Event: The owner moved a booking to another status

    Triggers:
    - Audit log entry
    - Renter inbox refresh
    """
    booking_id: UUID
    item_id: UUID
    actor_id: int
    old_status: str
    new_status: str

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': str(self.booking_id),
            'item_id': str(self.item_id),
            'actor_id': self.actor_id,
            'old_status': self.old_status,
            'new_status': self.new_status,
        })
        return data
