"""Event handlers for booking domain events."""

from __future__ import annotations

import logging

from shared.application.message_bus import message_bus

from .domain.events import BookingRequested, BookingStatusChanged

logger = logging.getLogger(__name__)


def log_booking_requested(event: BookingRequested) -> None:
    logger.info(
        f"Booking {event.booking_id} requested by {event.renter_id} "
        f"for item {event.item_id} ({event.dates})",
        extra={"domain_event": event.to_dict()},
    )


def log_booking_status_changed(event: BookingStatusChanged) -> None:
    logger.info(
        f"Booking {event.booking_id}: {event.old_status} -> {event.new_status} "
        f"by {event.actor_id}",
        extra={"domain_event": event.to_dict()},
    )


def register() -> None:
    message_bus.register_event_handler(BookingRequested, log_booking_requested)
    message_bus.register_event_handler(BookingStatusChanged, log_booking_status_changed)
