"""
Message Bus

Fans committed booking and swap events out to the handlers the apps
register in ``AppConfig.ready``.
"""

from collections import defaultdict
from typing import Callable, DefaultDict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    In-process event dispatcher.

    Any number of handlers may listen to one event type; they run in the
    order they were registered. A handler that raises is logged and skipped
    so the remaining handlers still see the event.
    """

    def __init__(self):
        self._subscribers: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        # ready() can run more than once in tests and management commands
        subscribers = self._subscribers[event_type]
        if handler not in subscribers:
            subscribers.append(handler)
            logger.debug(f"{handler.__name__} subscribed to {event_type.__name__}")

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._subscribers.get(event_type, ()))

    def publish_events(self, events: Iterable[DomainEvent]):
        for event in events:
            name = type(event).__name__
            subscribers = self.handlers_for(type(event))
            if not subscribers:
                logger.warning(f"{name} {event.event_id} has no subscribers")
                continue

            logger.info(f"Dispatching {name} {event.event_id} to {len(subscribers)} handler(s)")
            for handler in subscribers:
                self._dispatch(handler, event)

    @staticmethod
    def _dispatch(handler: EventHandler, event: DomainEvent):
        try:
            handler(event)
        except Exception as exc:
            logger.error(
                f"{handler.__name__} failed on {type(event).__name__} {event.event_id}: {exc}",
                exc_info=True,
            )


message_bus = MessageBus()
