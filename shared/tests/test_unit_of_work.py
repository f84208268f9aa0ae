from decimal import Decimal
from uuid import uuid4

import pytest

from apps.swaps.domain.entities import SwapProposal
from apps.swaps.domain.events import SwapProposed
from shared.application.message_bus import message_bus
from shared.application.uow import DjangoUnitOfWork


def _proposal():
    return SwapProposal.propose(
        proposer_id=1,
        proposer_item_id=uuid4(),
        receiver_id=2,
        receiver_item_id=uuid4(),
        cash_adjustment=Decimal("0"),
    )


@pytest.fixture
def published(monkeypatch):
    seen = []
    monkeypatch.setattr(message_bus, "publish_events", seen.extend)
    return seen


@pytest.mark.django_db
def test_events_are_published_after_commit(django_capture_on_commit_callbacks, published):
    swap = _proposal()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with DjangoUnitOfWork() as uow:
            uow.collect_events(swap)
            assert published == []

    assert len(callbacks) == 1
    assert [type(e) for e in published] == [SwapProposed]
    assert swap.events == []


@pytest.mark.django_db
def test_events_are_discarded_on_rollback(django_capture_on_commit_callbacks, published):
    swap = _proposal()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork() as uow:
                uow.collect_events(swap)
                raise RuntimeError("write failed")

    assert callbacks == []
    assert published == []
