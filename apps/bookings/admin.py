"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "item",
        "renter",
        "owner",
        "status",
        "start_date",
        "end_date",
        "deposit",
        "created_at",
    )
    list_filter = ("status", "start_date", "end_date")
    search_fields = ("item__title", "renter__email", "owner__email")
    readonly_fields = (
        "item",
        "owner",
        "renter",
        "version",
        "created_at",
        "updated_at",
    )
