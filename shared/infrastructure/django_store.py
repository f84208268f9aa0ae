"""
Django Reservation Store

ORM-backed implementation of AbstractReservationStore. Rows are mapped to
domain entities on the way out and written back field by field; nothing
returned here is bound to a model instance.

Per-record atomicity:
- finders with ``lock=True`` issue SELECT ... FOR UPDATE inside a transaction
- saves are conditional on the ``version`` the entity was loaded with
- partial unique constraints back the idempotent create paths
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from django.contrib.auth import get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import F  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.models import Booking as BookingModel
from apps.items.domain import ItemRef
from apps.items.models import Item as ItemModel
from apps.swaps.domain.entities import SwapProposal, SwapStatus
from apps.swaps.models import Swap as SwapModel
from shared.application.store import AbstractReservationStore, DuplicateRecordError
from shared.domain.exceptions import ConflictError

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def booking_from_row(row: BookingModel) -> Booking:
    return Booking(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        version=row.version,
        item_id=row.item_id,
        owner_id=row.owner_id,
        renter_id=row.renter_id,
        start_date=row.start_date,
        end_date=row.end_date,
        status=BookingStatus(row.status),
        deposit=row.deposit,
        notes=row.notes,
    )


def swap_from_row(row: SwapModel) -> SwapProposal:
    return SwapProposal(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        version=row.version,
        proposer_id=row.proposer_id,
        proposer_item_id=row.proposer_item_id,
        receiver_id=row.receiver_id,
        receiver_item_id=row.receiver_item_id,
        cash_adjustment=row.cash_adjustment,
        status=SwapStatus(row.status),
        notes=row.notes,
    )


class DjangoReservationStore(AbstractReservationStore):

    # --- Identity / items --------------------------------------------------
    def find_user(self, user_id) -> Optional[int]:
        return get_user_model().objects.filter(pk=user_id).values_list("pk", flat=True).first()

    def find_item(self, item_id, lock: bool = False) -> Optional[ItemRef]:
        queryset = ItemModel.objects.filter(pk=item_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        row = queryset.first()
        return row.to_ref() if row else None

    # --- Bookings ----------------------------------------------------------
    def find_bookings_for_item(self, item_id, status_in: Iterable[BookingStatus]) -> List[Booking]:
        statuses = [status.value for status in status_in]
        queryset = BookingModel.objects.filter(item_id=item_id, status__in=statuses).order_by("start_date")
        return [booking_from_row(row) for row in queryset]

    def find_booking(self, booking_id, lock: bool = False) -> Optional[Booking]:
        queryset = BookingModel.objects.filter(pk=booking_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        row = queryset.first()
        return booking_from_row(row) if row else None

    def find_exact_pending_booking(self, item_id, renter_id, start, end) -> Optional[Booking]:
        row = BookingModel.objects.filter(
            item_id=item_id,
            renter_id=renter_id,
            start_date=start,
            end_date=end,
            status=BookingModel.Status.PENDING,
        ).first()
        return booking_from_row(row) if row else None

    def create_booking(self, booking: Booking) -> Booking:
        try:
            with transaction.atomic():
                row = BookingModel.objects.create(
                    id=booking.id,
                    item_id=booking.item_id,
                    owner_id=booking.owner_id,
                    renter_id=booking.renter_id,
                    start_date=booking.start_date,
                    end_date=booking.end_date,
                    status=booking.status.value,
                    deposit=booking.deposit,
                    notes=booking.notes,
                )
        except IntegrityError:
            existing = self.find_exact_pending_booking(
                booking.item_id, booking.renter_id, booking.start_date, booking.end_date
            )
            if existing is None:
                raise
            raise DuplicateRecordError(existing)
        return self.find_booking(row.pk)

    def save_booking(self, booking: Booking) -> Booking:
        try:
            with transaction.atomic():
                updated = BookingModel.objects.filter(pk=booking.id, version=booking.version).update(
                    status=booking.status.value,
                    deposit=booking.deposit,
                    notes=booking.notes,
                    version=F("version") + 1,
                    updated_at=timezone.now(),
                )
        except IntegrityError:
            raise ConflictError("An identical pending booking already exists for these dates")
        if not updated:
            logger.warning(f"Stale write rejected for booking {booking.id} (version {booking.version})")
            raise ConflictError("Booking was modified by another request; reload and retry")
        return self.find_booking(booking.id)

    # --- Swaps -------------------------------------------------------------
    def find_swap(self, swap_id, lock: bool = False) -> Optional[SwapProposal]:
        queryset = SwapModel.objects.filter(pk=swap_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        row = queryset.first()
        return swap_from_row(row) if row else None

    def find_existing_swap(self, proposer_id, proposer_item_id, receiver_item_id, status_in) -> Optional[SwapProposal]:
        row = SwapModel.objects.filter(
            proposer_id=proposer_id,
            proposer_item_id=proposer_item_id,
            receiver_item_id=receiver_item_id,
            status__in=[status.value for status in status_in],
        ).first()
        return swap_from_row(row) if row else None

    def create_swap(self, swap: SwapProposal) -> SwapProposal:
        try:
            with transaction.atomic():
                row = SwapModel.objects.create(
                    id=swap.id,
                    proposer_id=swap.proposer_id,
                    proposer_item_id=swap.proposer_item_id,
                    receiver_id=swap.receiver_id,
                    receiver_item_id=swap.receiver_item_id,
                    cash_adjustment=swap.cash_adjustment,
                    status=swap.status.value,
                    notes=swap.notes,
                )
        except IntegrityError:
            existing = self.find_existing_swap(
                swap.proposer_id,
                swap.proposer_item_id,
                swap.receiver_item_id,
                [SwapStatus.PENDING, SwapStatus.COUNTER],
            )
            if existing is None:
                raise
            raise DuplicateRecordError(existing)
        return self.find_swap(row.pk)

    def save_swap(self, swap: SwapProposal) -> SwapProposal:
        try:
            with transaction.atomic():
                updated = SwapModel.objects.filter(pk=swap.id, version=swap.version).update(
                    status=swap.status.value,
                    cash_adjustment=swap.cash_adjustment,
                    notes=swap.notes,
                    version=F("version") + 1,
                    updated_at=timezone.now(),
                )
        except IntegrityError:
            raise ConflictError("Another open proposal already exists for these items")
        if not updated:
            logger.warning(f"Stale write rejected for swap {swap.id} (version {swap.version})")
            raise ConflictError("Swap was modified by another request; reload and retry")
        return self.find_swap(swap.id)
