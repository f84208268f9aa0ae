"""
Unit of Work

One booking or swap write per unit: the store reads and saves inside a
single ``transaction.atomic`` block, and the events raised by the
aggregates are handed to the message bus only once that block commits.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging

from django.db import transaction

from shared.application.message_bus import MessageBus, message_bus
from shared.domain.base import Aggregate, DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Transaction boundary used by the booking and swap command handlers."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        raise NotImplementedError

    @abstractmethod
    def rollback(self):
        raise NotImplementedError

    @abstractmethod
    def collect_events(self, aggregate: Aggregate):
        """Take ownership of the events raised by ``aggregate``."""
        raise NotImplementedError


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Runs a command inside ``transaction.atomic`` and defers event delivery
    to ``transaction.on_commit``.

        with DjangoUnitOfWork() as uow:
            booking = store.find_booking(booking_id, lock=True)
            booking.transition_to(BookingStatus.APPROVED, actor_id)
            uow.collect_events(booking)
            store.save_booking(booking)

    Row locks taken by the store (``lock=True``) are held until the block
    exits. When the block raises, the collected events are dropped.
    """

    def __init__(self, bus: Optional[MessageBus] = None):
        self._bus = bus
        self._pending: List[DomainEvent] = []
        self._atomic = None

    @property
    def pending_events(self) -> List[DomainEvent]:
        return list(self._pending)

    def __enter__(self):
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            atomic, self._atomic = self._atomic, None
            if atomic is not None:
                atomic.__exit__(exc_type, exc_val, exc_tb)

    def collect_events(self, aggregate: Aggregate):
        raised = aggregate.events
        if not raised:
            return
        aggregate.clear_events()
        self._pending.extend(raised)
        logger.debug(
            f"{type(aggregate).__name__} {aggregate.id} raised "
            f"{', '.join(type(e).__name__ for e in raised)}"
        )

    def commit(self):
        batch, self._pending = self._pending, []
        if batch:
            # Deferred until the outermost atomic block commits
            transaction.on_commit(lambda: self._deliver(batch))

    def rollback(self):
        if self._pending:
            logger.warning(f"Write rolled back, dropping {len(self._pending)} unpublished events")
        self._pending = []

    def _deliver(self, batch: List[DomainEvent]):
        bus = message_bus if self._bus is None else self._bus
        logger.info(f"Delivering {len(batch)} domain events after commit")
        try:
            bus.publish_events(batch)
        except Exception as exc:
            # The booking or swap row is already committed
            logger.error(f"Event delivery failed after commit: {exc}", exc_info=True)
