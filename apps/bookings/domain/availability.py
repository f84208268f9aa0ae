"""
Availability Checks

Pure functions that decide whether a candidate date range collides with
the bookings an item already has. All date allocations requested through
the booking engine go through ``find_conflicts``.

Only APPROVED and ACTIVE bookings reserve dates; PENDING, CANCELLED and
COMPLETED bookings never block a new request.

Usage:
    existing = store.find_bookings_for_item(item_id, BLOCKING_STATUSES)
    if not is_available(dates, existing):
        raise ConflictError(...)
"""

from typing import Iterable, List

from apps.bookings.domain.entities import BLOCKING_STATUSES, Booking
from shared.domain.value_objects import DateRange, overlaps

__all__ = ['overlaps', 'find_conflicts', 'is_available', 'BLOCKING_STATUSES']


def find_conflicts(dates: DateRange, bookings: Iterable[Booking], exclude_id=None) -> List[Booking]:
    """
    Return the blocking bookings whose range overlaps ``dates``

    ``exclude_id`` skips one booking, used when re-checking a booking
    against its siblings before approving it.
    """
    return [
        booking for booking in bookings
        if booking.id != exclude_id
        and booking.blocks_dates()
        and overlaps(booking.start_date, booking.end_date, dates.start_date, dates.end_date)
    ]


def is_available(dates: DateRange, bookings: Iterable[Booking], exclude_id=None) -> bool:
    return not find_conflicts(dates, bookings, exclude_id=exclude_id)
