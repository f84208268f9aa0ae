from dataclasses import dataclass

from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class SomethingHappened(DomainEvent):
    what: str = ""


def test_handlers_run_in_registration_order():
    bus = MessageBus()
    seen = []

    def first(event):
        seen.append(("first", event.what))

    def second(event):
        seen.append(("second", event.what))

    bus.register_event_handler(SomethingHappened, first)
    bus.register_event_handler(SomethingHappened, second)
    bus.publish_events([SomethingHappened(what="x")])

    assert seen == [("first", "x"), ("second", "x")]


def test_registering_same_handler_twice_is_noop():
    bus = MessageBus()

    def handler(event):
        pass

    bus.register_event_handler(SomethingHappened, handler)
    bus.register_event_handler(SomethingHappened, handler)

    assert bus.handlers_for(SomethingHappened) == [handler]


def test_failing_handler_does_not_stop_others():
    bus = MessageBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    def working(event):
        seen.append(event.what)

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, working)
    bus.publish_events([SomethingHappened(what="still delivered")])

    assert seen == ["still delivered"]


def test_event_to_dict_has_envelope():
    event = SomethingHappened(what="x")
    data = event.to_dict()

    assert data["event_type"] == "SomethingHappened"
    assert data["event_id"] == str(event.event_id)
    assert data["aggregate_id"] is None
