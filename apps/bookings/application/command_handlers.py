"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- RequestBookingCommand: A renter asks to book an item for a date range
- TransitionBookingCommand: The owner moves a booking to another status
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Tuple
from uuid import UUID
import logging

from django.conf import settings
from django.utils import timezone

from shared.application.store import AbstractReservationStore, DuplicateRecordError
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from shared.domain.value_objects import DateRange, bounded_amount, coerce_uuid, parse_calendar_date
from apps.bookings.domain.availability import find_conflicts
from apps.bookings.domain.entities import BLOCKING_STATUSES, Booking, BookingStatus

logger = logging.getLogger(__name__)

MAX_DEPOSIT = Decimal('1000000')

# Last calendar day a booking may touch
BOOKING_HORIZON = date(2100, 12, 31)


# ===== Commands =====

@dataclass
class RequestBookingCommand:
    """
    Command to request a booking

    ``renter_id`` is the authenticated actor. Dates may be ``date`` objects
    or ISO strings; ``deposit`` anything Decimal can parse.
    """
    item_id: UUID
    renter_id: int
    start_date: date | str
    end_date: date | str
    deposit: Decimal | int | float | str = 0
    notes: str = ''


@dataclass
class TransitionBookingCommand:
    """Command to change the status of a booking"""
    booking_id: UUID
    actor_id: int
    new_status: BookingStatus | str


# ===== Command Handlers =====

class RequestBookingHandler:
    """
    Handler for RequestBooking command

    Steps:
    1. Validate dates and deposit
    2. Lock the item row so requests for one item are serialized
    3. Reject self-booking
    4. Reject overlap with APPROVED/ACTIVE bookings
    5. Return the existing PENDING booking on an identical resubmission
    6. Create a PENDING booking; the store's unique constraint covers the
       race between step 5 and this insert
    """

    def __init__(
        self,
        store: AbstractReservationStore,
        uow_factory: Callable = DjangoUnitOfWork,
        clock: Callable[[], date] | None = None,
    ):
        self.store = store
        self.uow_factory = uow_factory
        self.clock = clock or timezone.localdate

    def handle(self, command: RequestBookingCommand) -> Booking:
        booking, _ = self.submit(command)
        return booking

    def submit(self, command: RequestBookingCommand) -> Tuple[Booking, bool]:
        """
        Handle booking request

        Returns: (booking, created) where ``created`` is False on an
        idempotent resubmission

        Raises:
            ValidationError, NotFoundError, ForbiddenError, ConflictError
        """
        dates, deposit = self._validate(command)
        notes = command.notes or ''

        logger.info(
            f"Booking request for item {command.item_id} by renter {command.renter_id}, "
            f"dates {dates}"
        )

        item_id = coerce_uuid(command.item_id)

        with self.uow_factory() as uow:
            item = self.store.find_item(item_id, lock=True) if item_id else None
            if item is None:
                raise NotFoundError("Item not found")

            if self.store.find_user(command.renter_id) is None:
                raise NotFoundError("Renter not found")

            if item.is_owned_by(command.renter_id):
                raise ForbiddenError("You cannot book your own item")

            blocking = self.store.find_bookings_for_item(item.id, BLOCKING_STATUSES)
            conflicts = find_conflicts(dates, blocking)
            if conflicts:
                raise ConflictError(
                    f"Item is not available for {dates}. "
                    f"Found {len(conflicts)} overlapping booking(s)."
                )

            existing = self.store.find_exact_pending_booking(
                item.id, command.renter_id, dates.start_date, dates.end_date
            )
            if existing is not None:
                logger.info(f"Returning existing pending booking {existing.id} for identical request")
                return existing, False

            booking = Booking.request(
                item_id=item.id,
                owner_id=item.owner_id,
                renter_id=command.renter_id,
                dates=dates,
                deposit=deposit,
                notes=notes,
            )

            try:
                saved = self.store.create_booking(booking)
            except DuplicateRecordError as exc:
                logger.info(f"Concurrent identical request resolved to booking {exc.existing.id}")
                return exc.existing, False

            uow.collect_events(booking)

        logger.info(f"Booking {saved.id} created (pending)")
        return saved, True

    def _validate(self, command: RequestBookingCommand) -> Tuple[DateRange, Decimal]:
        start = parse_calendar_date(command.start_date, 'start_date')
        end = parse_calendar_date(command.end_date, 'end_date')

        if start >= end:
            raise ValidationError("end_date must be after start_date")
        if start < self.clock():
            raise ValidationError("start_date cannot be in the past")
        if end > BOOKING_HORIZON:
            raise ValidationError(f"Bookings cannot extend beyond {BOOKING_HORIZON.isoformat()}")

        deposit = bounded_amount(
            0 if command.deposit is None else command.deposit,
            'deposit',
            limit=MAX_DEPOSIT,
        )
        return DateRange(start, end), deposit


class TransitionBookingHandler:
    """
    Handler for TransitionBooking command

    Only the booking's owner may change its status. Order between statuses
    is free unless BOOKING_ENFORCE_TRANSITION_ORDER is set. Moving a booking
    into APPROVED or ACTIVE re-checks the item's calendar so two blocking
    bookings never overlap.
    """

    def __init__(
        self,
        store: AbstractReservationStore,
        uow_factory: Callable = DjangoUnitOfWork,
        enforce_order: bool | None = None,
    ):
        self.store = store
        self.uow_factory = uow_factory
        if enforce_order is None:
            enforce_order = getattr(settings, 'BOOKING_ENFORCE_TRANSITION_ORDER', False)
        self.enforce_order = enforce_order

    def handle(self, command: TransitionBookingCommand) -> Booking:
        new_status = BookingStatus.parse(command.new_status)
        booking_id = coerce_uuid(command.booking_id)

        logger.info(
            f"Transition booking {command.booking_id} to {new_status.value} "
            f"by actor {command.actor_id}"
        )

        with self.uow_factory() as uow:
            booking = self.store.find_booking(booking_id, lock=True) if booking_id else None
            if booking is None:
                raise NotFoundError("Booking not found")

            entering_block = new_status in BLOCKING_STATUSES and not booking.blocks_dates()

            booking.transition_to(new_status, command.actor_id, enforce_order=self.enforce_order)

            if entering_block:
                # Serialize approvals for the same item
                self.store.find_item(booking.item_id, lock=True)
                siblings = self.store.find_bookings_for_item(booking.item_id, BLOCKING_STATUSES)
                conflicts = find_conflicts(booking.dates, siblings, exclude_id=booking.id)
                if conflicts:
                    raise ConflictError(
                        f"Cannot mark booking {new_status.value}: dates {booking.dates} overlap "
                        f"{len(conflicts)} existing booking(s)"
                    )

            uow.collect_events(booking)
            saved = self.store.save_booking(booking)

        logger.info(f"Booking {saved.id} is now {saved.status.value}")
        return saved
