"""Listing model for the marketplace."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain import ItemRef


class Item(models.Model):
    """A physical item a member offers for rent and, optionally, for swap."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="items",
    )
    title = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price_per_day = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    deposit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    location = models.CharField(max_length=255, blank=True)
    swap_eligible = models.BooleanField(default=False)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Item")
        verbose_name_plural = _("Items")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner", "status"], name="item_owner_status_idx"),
            models.Index(fields=["category"], name="item_category_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def to_ref(self) -> ItemRef:
        return ItemRef(id=self.id, owner_id=self.owner_id, title=self.title, status=self.status)
