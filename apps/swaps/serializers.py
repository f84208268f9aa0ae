"""Serializers for swap proposals."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Swap


class SwapProposalSerializer(serializers.Serializer):
    proposer_item = serializers.UUIDField()
    receiver_item = serializers.UUIDField()
    receiver = serializers.IntegerField(required=False, allow_null=True, default=None)
    cash_adjustment = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, default=0)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class SwapTransitionSerializer(serializers.Serializer):
    status = serializers.CharField()
    cash_adjustment = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class SwapSerializer(serializers.ModelSerializer):
    proposer_email = serializers.ReadOnlyField(source="proposer.email")
    receiver_email = serializers.ReadOnlyField(source="receiver.email")
    proposer_item_title = serializers.ReadOnlyField(source="proposer_item.title")
    receiver_item_title = serializers.ReadOnlyField(source="receiver_item.title")

    class Meta:
        model = Swap
        fields = [
            "id",
            "proposer",
            "proposer_email",
            "proposer_item",
            "proposer_item_title",
            "receiver",
            "receiver_email",
            "receiver_item",
            "receiver_item_title",
            "cash_adjustment",
            "status",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
