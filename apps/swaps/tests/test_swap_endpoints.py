"""Integration tests for swap API endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.items.models import Item
from apps.swaps.models import Swap
from apps.users.models import User


class SwapAPITests(APITestCase):
    def setUp(self) -> None:
        self.proposer = User.objects.create_user(email="proposer@example.com", password="ProposerPass123")
        self.receiver = User.objects.create_user(email="receiver@example.com", password="ReceiverPass123")
        self.stranger = User.objects.create_user(email="stranger@example.com", password="StrangerPass123")
        self.bike = Item.objects.create(owner=self.proposer, title="Road bike", category="sports", swap_eligible=True)
        self.kayak = Item.objects.create(owner=self.receiver, title="Kayak", category="sports", swap_eligible=True)
        self.list_url = reverse("swap-list")
        self.client.force_authenticate(self.proposer)

    def _propose(self, **extra):
        payload = {
            "proposer_item": str(self.bike.id),
            "receiver_item": str(self.kayak.id),
            **extra,
        }
        return self.client.post(self.list_url, payload, format="json")

    def _detail_url(self, swap_id) -> str:
        return reverse("swap-detail", args=[swap_id])

    def test_propose_and_resubmit(self) -> None:
        first = self._propose(cash_adjustment="20.00", notes="Plus a helmet")
        second = self._propose()

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(first.data["status"], "pending")
        self.assertEqual(first.data["receiver"], self.receiver.pk)
        self.assertEqual(Decimal(first.data["cash_adjustment"]), Decimal("20.00"))
        self.assertEqual(second.status_code, status.HTTP_200_OK, second.data)
        self.assertEqual(second.data["id"], first.data["id"])
        self.assertEqual(Swap.objects.count(), 1)

    def test_cannot_swap_with_yourself(self) -> None:
        helmet = Item.objects.create(owner=self.proposer, title="Helmet", category="sports")
        response = self.client.post(
            self.list_url,
            {"proposer_item": str(self.bike.id), "receiver_item": str(helmet.id)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["detail"], "You cannot swap with yourself")

    def test_cannot_offer_someone_elses_item(self) -> None:
        self.client.force_authenticate(self.stranger)
        response = self._propose()

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_counter_then_accept(self) -> None:
        swap_id = self._propose().data["id"]
        url = self._detail_url(swap_id)

        early = self.client.patch(url, {"status": "accepted"}, format="json")
        self.assertEqual(early.status_code, status.HTTP_403_FORBIDDEN, early.data)

        self.client.force_authenticate(self.receiver)
        countered = self.client.patch(url, {"status": "counter", "cash_adjustment": "-10.00"}, format="json")
        self.assertEqual(countered.status_code, status.HTTP_200_OK, countered.data)
        self.assertEqual(countered.data["status"], "counter")
        self.assertEqual(Decimal(countered.data["cash_adjustment"]), Decimal("-10.00"))

        self.client.force_authenticate(self.stranger)
        outsider = self.client.patch(url, {"status": "rejected"}, format="json")
        self.assertEqual(outsider.status_code, status.HTTP_403_FORBIDDEN, outsider.data)

        self.client.force_authenticate(self.proposer)
        accepted = self.client.patch(url, {"status": "accepted"}, format="json")
        self.assertEqual(accepted.status_code, status.HTTP_200_OK, accepted.data)
        self.assertEqual(accepted.data["status"], "accepted")

        swap = Swap.objects.get(pk=swap_id)
        self.assertEqual(swap.version, 2)

    def test_invalid_status_is_rejected(self) -> None:
        swap_id = self._propose().data["id"]
        response = self.client.patch(self._detail_url(swap_id), {"status": "approved"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_list_shows_made_and_received(self) -> None:
        self._propose()

        self.assertEqual(len(self.client.get(self.list_url).data), 1)
        self.client.force_authenticate(self.receiver)
        self.assertEqual(len(self.client.get(self.list_url).data), 1)
        self.client.force_authenticate(self.stranger)
        self.assertEqual(len(self.client.get(self.list_url).data), 0)
