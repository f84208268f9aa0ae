"""Admin registration for items."""

from __future__ import annotations

from django.contrib import admin

from .models import Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("title", "owner", "category", "price_per_day", "swap_eligible", "status", "created_at")
    list_filter = ("status", "category", "swap_eligible")
    search_fields = ("title", "owner__email", "location")
    readonly_fields = ("created_at", "updated_at")
