"""Admin registration for swap proposals."""

from __future__ import annotations

from django.contrib import admin

from .models import Swap


@admin.register(Swap)
class SwapAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "proposer",
        "proposer_item",
        "receiver",
        "receiver_item",
        "cash_adjustment",
        "status",
        "updated_at",
    )
    list_filter = ("status",)
    search_fields = ("proposer__email", "receiver__email", "proposer_item__title", "receiver_item__title")
    readonly_fields = (
        "proposer",
        "proposer_item",
        "receiver",
        "receiver_item",
        "version",
        "created_at",
        "updated_at",
    )
