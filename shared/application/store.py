"""
Reservation Store

Persistence contract the booking and swap engines depend on. The engines
receive entities by value from the store and hand back mutated copies;
they never hold on to a record between calls.

Implementations must make ``save_booking``/``save_swap`` atomic per record
and must back the idempotent-create paths with a uniqueness guarantee, so
that concurrent identical submissions cannot produce duplicates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING, Iterable, List, Optional
from uuid import UUID

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.bookings.domain.entities import Booking, BookingStatus
    from apps.items.domain import ItemRef
    from apps.swaps.domain.entities import SwapProposal, SwapStatus


class DuplicateRecordError(Exception):
    """
    Raised by ``create_*`` when a uniqueness constraint already holds an
    equivalent open record. ``existing`` carries that record.
    """

    def __init__(self, existing):
        super().__init__(f"Equivalent record already exists: {existing.id}")
        self.existing = existing


class AbstractReservationStore(ABC):
    """Storage for items (read-only), bookings and swap proposals."""

    # --- Identity / items --------------------------------------------------
    @abstractmethod
    def find_user(self, user_id) -> Optional[int]:
        """Return the user id if such a user exists, else None"""

    @abstractmethod
    def find_item(self, item_id: UUID, lock: bool = False) -> Optional['ItemRef']:
        """Return the item, locking its row when ``lock`` is set"""

    # --- Bookings ----------------------------------------------------------
    @abstractmethod
    def find_bookings_for_item(self, item_id: UUID, status_in: Iterable['BookingStatus']) -> List['Booking']:
        pass

    @abstractmethod
    def find_booking(self, booking_id: UUID, lock: bool = False) -> Optional['Booking']:
        pass

    @abstractmethod
    def find_exact_pending_booking(self, item_id: UUID, renter_id, start: date, end: date) -> Optional['Booking']:
        pass

    @abstractmethod
    def create_booking(self, booking: 'Booking') -> 'Booking':
        """Persist a new booking; raise DuplicateRecordError on an equivalent pending one"""

    @abstractmethod
    def save_booking(self, booking: 'Booking') -> 'Booking':
        """Write back a loaded booking; raise ConflictError if it changed since loading"""

    # --- Swaps -------------------------------------------------------------
    @abstractmethod
    def find_swap(self, swap_id: UUID, lock: bool = False) -> Optional['SwapProposal']:
        pass

    @abstractmethod
    def find_existing_swap(
        self,
        proposer_id,
        proposer_item_id: UUID,
        receiver_item_id: UUID,
        status_in: Iterable['SwapStatus'],
    ) -> Optional['SwapProposal']:
        pass

    @abstractmethod
    def create_swap(self, swap: 'SwapProposal') -> 'SwapProposal':
        """Persist a new proposal; raise DuplicateRecordError on an equivalent open one"""

    @abstractmethod
    def save_swap(self, swap: 'SwapProposal') -> 'SwapProposal':
        """Write back a loaded proposal; raise ConflictError if it changed since loading"""
