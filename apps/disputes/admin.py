"""Admin registration for disputes."""

from __future__ import annotations

from django.contrib import admin

from .models import Dispute


@admin.register(Dispute)
class DisputeAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "raised_by", "status", "created_at", "updated_at")
    list_filter = ("status",)
    search_fields = ("description", "raised_by__email")
    readonly_fields = ("booking", "raised_by", "created_at", "updated_at")
