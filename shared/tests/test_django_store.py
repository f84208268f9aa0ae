from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.models import Booking as BookingModel
from apps.items.models import Item
from apps.swaps.domain.entities import SwapProposal, SwapStatus
from apps.swaps.models import Swap as SwapModel
from apps.users.models import User
from shared.application.store import DuplicateRecordError
from shared.domain.exceptions import ConflictError
from shared.domain.value_objects import DateRange
from shared.infrastructure.django_store import DjangoReservationStore

pytestmark = pytest.mark.django_db

JUNE = DateRange(date(2031, 6, 1), date(2031, 6, 5))


@pytest.fixture
def store():
    return DjangoReservationStore()


@pytest.fixture
def owner():
    return User.objects.create_user(email="owner@example.com", password="OwnerPass123")


@pytest.fixture
def renter():
    return User.objects.create_user(email="renter@example.com", password="RenterPass123")


@pytest.fixture
def tent(owner):
    return Item.objects.create(owner=owner, title="Tent", category="outdoors")


@pytest.fixture
def canoe(renter):
    return Item.objects.create(owner=renter, title="Canoe", category="outdoors")


def _booking(tent, renter, deposit=Decimal("0")):
    return Booking.request(
        item_id=tent.id, owner_id=tent.owner_id, renter_id=renter.pk, dates=JUNE, deposit=deposit,
    )


def _swap(tent, canoe):
    return SwapProposal.propose(
        proposer_id=tent.owner_id,
        proposer_item_id=tent.id,
        receiver_id=canoe.owner_id,
        receiver_item_id=canoe.id,
        cash_adjustment=Decimal("15.00"),
    )


def test_second_identical_pending_booking_resolves_to_first(store, tent, renter):
    first = store.create_booking(_booking(tent, renter))

    with pytest.raises(DuplicateRecordError) as excinfo:
        store.create_booking(_booking(tent, renter))

    assert excinfo.value.existing.id == first.id
    assert BookingModel.objects.count() == 1


def test_second_identical_open_swap_resolves_to_first(store, tent, canoe):
    first = store.create_swap(_swap(tent, canoe))

    with pytest.raises(DuplicateRecordError) as excinfo:
        store.create_swap(_swap(tent, canoe))

    assert excinfo.value.existing.id == first.id
    assert SwapModel.objects.count() == 1


def test_stale_booking_write_is_rejected(store, tent, renter, owner):
    created = store.create_booking(_booking(tent, renter))
    first = store.find_booking(created.id)
    second = store.find_booking(created.id)

    first.transition_to(BookingStatus.APPROVED, owner.pk)
    saved = store.save_booking(first)
    second.transition_to(BookingStatus.CANCELLED, owner.pk)

    with pytest.raises(ConflictError, match="modified by another request"):
        store.save_booking(second)

    row = BookingModel.objects.get(pk=created.id)
    assert (row.status, row.version) == ("approved", 1)
    assert saved.version == 1


def test_stale_swap_acceptance_is_rejected(store, tent, canoe, renter):
    created = store.create_swap(_swap(tent, canoe))
    first = store.find_swap(created.id)
    second = store.find_swap(created.id)

    first.transition(renter.pk, SwapStatus.ACCEPTED)
    store.save_swap(first)
    second.transition(renter.pk, SwapStatus.REJECTED)

    with pytest.raises(ConflictError, match="modified by another request"):
        store.save_swap(second)
    assert SwapModel.objects.get(pk=created.id).status == "accepted"


def test_reopening_booking_into_duplicate_pending_conflicts(store, tent, renter, owner):
    cancelled = store.create_booking(_booking(tent, renter))
    cancelled.transition_to(BookingStatus.CANCELLED, owner.pk)
    cancelled = store.save_booking(cancelled)
    store.create_booking(_booking(tent, renter))

    cancelled.transition_to(BookingStatus.PENDING, owner.pk)
    with pytest.raises(ConflictError, match="identical pending booking"):
        store.save_booking(cancelled)

    assert BookingModel.objects.get(pk=cancelled.id).status == "cancelled"


def test_reopening_swap_into_duplicate_open_state_conflicts(store, tent, canoe, renter):
    rejected = store.create_swap(_swap(tent, canoe))
    rejected.transition(renter.pk, SwapStatus.REJECTED)
    rejected = store.save_swap(rejected)
    store.create_swap(_swap(tent, canoe))

    rejected.transition(renter.pk, SwapStatus.PENDING)
    with pytest.raises(ConflictError, match="open proposal already exists"):
        store.save_swap(rejected)

    assert SwapModel.objects.get(pk=rejected.id).status == "rejected"


def test_created_booking_matches_stored_row(store, tent, renter):
    # Sub-cent input is rounded by the column; the returned entity must agree
    created = store.create_booking(_booking(tent, renter, deposit=Decimal("0.005")))

    assert created.deposit == BookingModel.objects.get(pk=created.id).deposit
    assert created.version == 0


def test_created_swap_matches_stored_row(store, tent, canoe):
    created = store.create_swap(_swap(tent, canoe))

    row = SwapModel.objects.get(pk=created.id)
    assert created.cash_adjustment == row.cash_adjustment == Decimal("15.00")
    assert created.created_at == row.created_at
