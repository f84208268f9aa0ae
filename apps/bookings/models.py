"""Booking persistence model."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """Reservation of one item by one renter for a date range."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        ACTIVE = "active", _("Active")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    item = models.ForeignKey(
        "items.Item",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="owned_bookings",
        help_text=_("Item owner at the time the booking was requested."),
    )
    renter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="rentals",
    )
    start_date = models.DateField()
    end_date = models.DateField(help_text=_("Exclusive: the item is free again on this day."))
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    deposit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    notes = models.TextField(blank=True)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(deposit__gte=0),
                name="booking_non_negative_deposit",
            ),
            models.UniqueConstraint(
                fields=["item", "renter", "start_date", "end_date"],
                condition=models.Q(status="pending"),
                name="booking_unique_pending_request",
            ),
        ]
        indexes = [
            models.Index(fields=["item", "status", "start_date", "end_date"], name="booking_item_window_idx"),
            models.Index(fields=["owner", "status"], name="booking_owner_status_idx"),
            models.Index(fields=["renter", "status"], name="booking_renter_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.id} for item {self.item_id} ({self.status})"
