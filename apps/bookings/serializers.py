"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class BookingRequestSerializer(serializers.Serializer):
    """Booking request made by a renter. Business rules are checked by the engine."""

    item = serializers.UUIDField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    deposit = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=0)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField()


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    item_title = serializers.ReadOnlyField(source="item.title")
    owner_email = serializers.ReadOnlyField(source="owner.email")
    renter_email = serializers.ReadOnlyField(source="renter.email")

    class Meta:
        model = Booking
        fields = [
            "id",
            "item",
            "item_title",
            "owner",
            "owner_email",
            "renter",
            "renter_email",
            "start_date",
            "end_date",
            "status",
            "deposit",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
