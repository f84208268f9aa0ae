"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Aggregate representing a renter's reservation of an item
- BookingStatus: States of the booking lifecycle
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from shared.domain.base import Aggregate
from shared.domain.exceptions import ForbiddenError, ValidationError
from shared.domain.value_objects import DateRange


class BookingStatus(Enum):
    """
    Booking Status

    Owner-driven lifecycle:
    - PENDING -> APPROVED (owner accepts the request)
    - APPROVED -> ACTIVE (item handed over)
    - ACTIVE -> COMPLETED (item returned)
    - PENDING / APPROVED -> CANCELLED

    By default the owner may set any status at any time; the directed
    graph above is only enforced when transition order is switched on.
    """
    PENDING = 'pending'
    APPROVED = 'approved'
    ACTIVE = 'active'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @classmethod
    def parse(cls, value) -> 'BookingStatus':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ', '.join(s.value for s in cls)
            raise ValidationError(f"Invalid status '{value}'. Allowed: {allowed}")


# Only these statuses reserve the item's calendar
BLOCKING_STATUSES = frozenset({BookingStatus.APPROVED, BookingStatus.ACTIVE})

TERMINAL_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})

ORDERED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.APPROVED, BookingStatus.CANCELLED},
    BookingStatus.APPROVED: {BookingStatus.ACTIVE, BookingStatus.CANCELLED},
    BookingStatus.ACTIVE: {BookingStatus.COMPLETED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}


@dataclass(kw_only=True, eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Key invariants:
    - start_date < end_date
    - item_id, owner_id and renter_id never change after creation
    - no two APPROVED/ACTIVE bookings of one item overlap (checked by the
      engine against the item's other bookings)
    """

    item_id: UUID
    owner_id: int
    renter_id: int
    start_date: date
    end_date: date
    status: BookingStatus = BookingStatus.PENDING
    deposit: Decimal = field(default_factory=lambda: Decimal('0'))
    notes: str = ''

    def __post_init__(self):
        # Raises ValidationError on an inverted range
        DateRange(self.start_date, self.end_date)

    @classmethod
    def request(cls, *, item_id, owner_id, renter_id, dates: DateRange,
                deposit: Decimal, notes: str = '') -> 'Booking':
        """Create a new PENDING booking and record BookingRequested."""
        from apps.bookings.domain.events import BookingRequested

        booking = cls(
            item_id=item_id,
            owner_id=owner_id,
            renter_id=renter_id,
            start_date=dates.start_date,
            end_date=dates.end_date,
            deposit=deposit,
            notes=notes,
        )
        booking.add_event(BookingRequested(
            aggregate_id=booking.id,
            booking_id=booking.id,
            item_id=item_id,
            owner_id=owner_id,
            renter_id=renter_id,
            dates=dates,
        ))
        return booking

    @property
    def dates(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    def is_owned_by(self, user_id) -> bool:
        return self.owner_id == user_id

    def involves(self, user_id) -> bool:
        return user_id in (self.owner_id, self.renter_id)

    def blocks_dates(self) -> bool:
        return self.status in BLOCKING_STATUSES

    def transition_to(self, new_status: BookingStatus, actor_id, *, enforce_order: bool = False):
        """
        Set a new status on behalf of ``actor_id``

        Only the item owner may transition a booking. With ``enforce_order``
        the move must follow ORDERED_TRANSITIONS; re-setting the current
        status is always accepted.
        Events: BookingStatusChanged (only when the status actually changes)
        """
        if not self.is_owned_by(actor_id):
            raise ForbiddenError("Only owners can update booking status")

        old_status = self.status
        if new_status == old_status:
            return

        if enforce_order and new_status not in ORDERED_TRANSITIONS[old_status]:
            raise ValidationError(
                f"Cannot move booking from {old_status.value} to {new_status.value}"
            )

        from apps.bookings.domain.events import BookingStatusChanged

        self.status = new_status
        self.touch()
        self.add_event(BookingStatusChanged(
            aggregate_id=self.id,
            booking_id=self.id,
            item_id=self.item_id,
            actor_id=actor_id,
            old_status=old_status.value,
            new_status=new_status.value,
        ))

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, item_id={self.item_id}, "
            f"status={self.status.value}, dates={self.dates!r})"
        )
