"""API views for booking disputes."""

from __future__ import annotations

import logging

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.exceptions import NotFound, PermissionDenied  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.models import Booking
from apps.users.permissions import IsPlatformAdmin, is_platform_admin

from .models import Dispute
from .serializers import DisputeCreateSerializer, DisputeSerializer, DisputeUpdateSerializer

logger = logging.getLogger(__name__)


class DisputeViewSet(viewsets.ModelViewSet):
    """Participants raise disputes on their bookings; administrators resolve them."""

    queryset = Dispute.objects.select_related("booking", "raised_by").all()
    serializer_class = DisputeSerializer
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_permissions(self):  # type: ignore
        if self.action == "partial_update":
            return [permissions.IsAuthenticated(), IsPlatformAdmin()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset().order_by("-updated_at")
        user = self.request.user
        if is_platform_admin(user):
            return qs
        return qs.filter(raised_by=user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = DisputeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = Booking.objects.filter(pk=data["booking"]).first()
        if booking is None:
            raise NotFound("Booking not found")
        if request.user.pk not in (booking.owner_id, booking.renter_id):
            raise PermissionDenied("You can only dispute your own bookings")

        dispute = Dispute.objects.create(
            booking=booking,
            raised_by=request.user,
            description=data["description"],
        )
        logger.info(f"Dispute {dispute.id} raised on booking {booking.id} by {request.user.pk}")
        return Response(DisputeSerializer(dispute).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        dispute = self.get_object()
        serializer = DisputeUpdateSerializer(dispute, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        dispute = serializer.save()
        logger.info(f"Dispute {dispute.id} updated by admin {request.user.pk}: status={dispute.status}")
        return Response(DisputeSerializer(dispute).data)
