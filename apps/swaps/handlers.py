"""Event handlers for swap domain events."""

from __future__ import annotations

import logging

from shared.application.message_bus import message_bus

from .domain.events import SwapProposed, SwapStatusChanged

logger = logging.getLogger(__name__)


def log_swap_proposed(event: SwapProposed) -> None:
    logger.info(
        f"Swap {event.swap_id} proposed by {event.proposer_id} to {event.receiver_id}",
        extra={"domain_event": event.to_dict()},
    )


def log_swap_status_changed(event: SwapStatusChanged) -> None:
    logger.info(
        f"Swap {event.swap_id}: {event.old_status} -> {event.new_status} "
        f"by {event.actor_role} {event.actor_id}",
        extra={"domain_event": event.to_dict()},
    )


def register() -> None:
    message_bus.register_event_handler(SwapProposed, log_swap_proposed)
    message_bus.register_event_handler(SwapStatusChanged, log_swap_status_changed)
