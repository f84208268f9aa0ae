"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.items.models import Item
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers requests, idempotent resubmission, conflicts and owner transitions."""

    def setUp(self) -> None:
        self.renter = User.objects.create_user(
            email="renter@example.com",
            password="RenterPass123",
        )
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
        )
        self.stranger = User.objects.create_user(
            email="stranger@example.com",
            password="StrangerPass123",
        )
        self.item = Item.objects.create(
            owner=self.owner,
            title="Cordless drill",
            category="tools",
            price_per_day=Decimal("5.00"),
        )
        self.client.force_authenticate(self.renter)
        self.list_url = reverse("booking-list")
        self.start = timezone.localdate() + timedelta(days=10)

    def _payload(self, start: date, end: date, **extra) -> dict:
        return {
            "item": str(self.item.id),
            "start_date": str(start),
            "end_date": str(end),
            **extra,
        }

    def _detail_url(self, booking_id) -> str:
        return reverse("booking-detail", args=[booking_id])

    def _approved(self, start: date, end: date) -> Booking:
        return Booking.objects.create(
            item=self.item,
            owner=self.owner,
            renter=self.stranger,
            start_date=start,
            end_date=end,
            status=Booking.Status.APPROVED,
        )

    def test_renter_can_request_booking(self) -> None:
        end = self.start + timedelta(days=4)
        response = self.client.post(self.list_url, self._payload(self.start, end, deposit="50"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["owner"], self.owner.pk)
        self.assertEqual(response.data["renter"], self.renter.pk)
        self.assertEqual(Decimal(response.data["deposit"]), Decimal("50"))
        self.assertEqual(Booking.objects.count(), 1)

    def test_identical_request_returns_existing_booking(self) -> None:
        end = self.start + timedelta(days=4)
        first = self.client.post(self.list_url, self._payload(self.start, end), format="json")
        second = self.client.post(self.list_url, self._payload(self.start, end), format="json")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(second.status_code, status.HTTP_200_OK, second.data)
        self.assertEqual(first.data["id"], second.data["id"])
        self.assertEqual(Booking.objects.count(), 1)

    def test_overlapping_request_conflicts(self) -> None:
        self._approved(self.start, self.start + timedelta(days=9))

        response = self.client.post(
            self.list_url,
            self._payload(self.start + timedelta(days=4), self.start + timedelta(days=7)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertIn("detail", response.data)

    def test_touching_request_is_accepted(self) -> None:
        self._approved(self.start, self.start + timedelta(days=4))

        response = self.client.post(
            self.list_url,
            self._payload(self.start + timedelta(days=4), self.start + timedelta(days=9)),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_owner_cannot_book_own_item(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.post(
            self.list_url, self._payload(self.start, self.start + timedelta(days=2)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.assertEqual(response.data["detail"], "You cannot book your own item")

    def test_past_start_is_rejected(self) -> None:
        yesterday = timezone.localdate() - timedelta(days=1)
        response = self.client.post(
            self.list_url, self._payload(yesterday, yesterday + timedelta(days=3)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["detail"], "start_date cannot be in the past")

    def test_unknown_item_is_not_found(self) -> None:
        payload = self._payload(self.start, self.start + timedelta(days=2))
        payload["item"] = "00000000-0000-0000-0000-000000000000"
        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    def test_owner_approves_and_renter_cannot(self) -> None:
        end = self.start + timedelta(days=4)
        created = self.client.post(self.list_url, self._payload(self.start, end, deposit="50"), format="json")
        url = self._detail_url(created.data["id"])

        forbidden = self.client.patch(url, {"status": "approved"}, format="json")
        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN, forbidden.data)

        self.client.force_authenticate(self.owner)
        approved = self.client.patch(url, {"status": "approved"}, format="json")
        self.assertEqual(approved.status_code, status.HTTP_200_OK, approved.data)
        self.assertEqual(approved.data["status"], "approved")

        booking = Booking.objects.get(pk=created.data["id"])
        self.assertEqual(booking.status, Booking.Status.APPROVED)
        self.assertEqual(booking.version, 1)

    def test_invalid_status_is_rejected(self) -> None:
        created = self.client.post(
            self.list_url, self._payload(self.start, self.start + timedelta(days=2)), format="json"
        )
        self.client.force_authenticate(self.owner)
        response = self.client.patch(self._detail_url(created.data["id"]), {"status": "archived"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_unknown_booking_transition_is_not_found(self) -> None:
        self.client.force_authenticate(self.owner)
        response = self.client.patch(
            self._detail_url("00000000-0000-0000-0000-000000000000"), {"status": "approved"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    @override_settings(BOOKING_ENFORCE_TRANSITION_ORDER=True)
    def test_enforced_order_rejects_jump_to_completed(self) -> None:
        created = self.client.post(
            self.list_url, self._payload(self.start, self.start + timedelta(days=2)), format="json"
        )
        self.client.force_authenticate(self.owner)
        response = self.client.patch(self._detail_url(created.data["id"]), {"status": "completed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_list_is_scoped_by_role(self) -> None:
        self.client.post(self.list_url, self._payload(self.start, self.start + timedelta(days=2)), format="json")

        as_renter = self.client.get(self.list_url, {"role": "renter"})
        as_owner = self.client.get(self.list_url)
        self.assertEqual(len(as_renter.data), 1)
        self.assertEqual(len(as_owner.data), 0)

        self.client.force_authenticate(self.owner)
        self.assertEqual(len(self.client.get(self.list_url).data), 1)
        self.assertEqual(len(self.client.get(self.list_url, {"role": "all"}).data), 1)

        invalid = self.client.get(self.list_url, {"role": "landlord"})
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail_hidden_from_strangers(self) -> None:
        created = self.client.post(
            self.list_url, self._payload(self.start, self.start + timedelta(days=2)), format="json"
        )
        self.client.force_authenticate(self.stranger)
        response = self.client.get(self._detail_url(created.data["id"]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_anonymous_requests_are_rejected(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
