from datetime import date
from uuid import uuid4

from apps.bookings import handlers
from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.events import BookingRequested, BookingStatusChanged
from apps.swaps import handlers as swap_handlers
from apps.swaps.domain.events import SwapStatusChanged
from shared.application.message_bus import message_bus
from shared.domain.value_objects import DateRange


def test_app_ready_registers_audit_handlers():
    handlers.register()
    swap_handlers.register()

    assert handlers.log_booking_requested in message_bus.handlers_for(BookingRequested)
    assert handlers.log_booking_status_changed in message_bus.handlers_for(BookingStatusChanged)
    assert swap_handlers.log_swap_status_changed in message_bus.handlers_for(SwapStatusChanged)


def test_request_and_transition_record_events():
    item_id = uuid4()
    booking = Booking.request(
        item_id=item_id,
        owner_id=1,
        renter_id=2,
        dates=DateRange(date(2025, 6, 1), date(2025, 6, 5)),
        deposit=0,
    )
    booking.transition_to(BookingStatus.APPROVED, actor_id=1)

    requested, changed = booking.events
    assert requested.to_dict()["start_date"] == "2025-06-01"
    assert requested.to_dict()["item_id"] == str(item_id)
    assert changed.to_dict()["old_status"] == "pending"
    assert changed.to_dict()["new_status"] == "approved"
    assert changed.aggregate_id == booking.id

    handlers.log_booking_requested(requested)
    handlers.log_booking_status_changed(changed)
