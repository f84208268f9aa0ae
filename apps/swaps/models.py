"""Swap proposal persistence model."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Swap(models.Model):
    """Offer to exchange the proposer's item for the receiver's item."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        COUNTER = "counter", _("Countered")
        ACCEPTED = "accepted", _("Accepted")
        REJECTED = "rejected", _("Rejected")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    proposer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="proposed_swaps",
    )
    proposer_item = models.ForeignKey(
        "items.Item",
        on_delete=models.CASCADE,
        related_name="offered_in_swaps",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_swaps",
    )
    receiver_item = models.ForeignKey(
        "items.Item",
        on_delete=models.CASCADE,
        related_name="requested_in_swaps",
    )
    cash_adjustment = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Signed amount balancing the trade; its direction is defined by the client."),
    )
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    notes = models.TextField(blank=True)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Swap")
        verbose_name_plural = _("Swaps")
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["proposer", "proposer_item", "receiver_item"],
                condition=models.Q(status__in=["pending", "counter"]),
                name="swap_unique_open_proposal",
            ),
        ]
        indexes = [
            models.Index(fields=["proposer", "status"], name="swap_proposer_status_idx"),
            models.Index(fields=["receiver", "status"], name="swap_receiver_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Swap {self.id} ({self.status})"
