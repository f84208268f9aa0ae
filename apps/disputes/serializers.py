"""Serializers for booking disputes."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Dispute


class DisputeCreateSerializer(serializers.Serializer):
    booking = serializers.UUIDField()
    description = serializers.CharField()


class DisputeUpdateSerializer(serializers.ModelSerializer):
    """Administrator decision on a dispute."""

    class Meta:
        model = Dispute
        fields = ["status", "resolution", "admin_decision"]
        extra_kwargs = {
            "status": {"required": False},
            "resolution": {"required": False, "allow_blank": True},
            "admin_decision": {"required": False, "allow_blank": True},
        }


class DisputeSerializer(serializers.ModelSerializer):
    raised_by_email = serializers.ReadOnlyField(source="raised_by.email")
    booking_status = serializers.ReadOnlyField(source="booking.status")
    item = serializers.ReadOnlyField(source="booking.item_id")

    class Meta:
        model = Dispute
        fields = [
            "id",
            "booking",
            "booking_status",
            "item",
            "raised_by",
            "raised_by_email",
            "description",
            "status",
            "resolution",
            "admin_decision",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
