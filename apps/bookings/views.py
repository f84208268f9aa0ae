"""API views for the booking domain."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.infrastructure.django_store import DjangoReservationStore

from .application.command_handlers import (
    RequestBookingCommand,
    RequestBookingHandler,
    TransitionBookingCommand,
    TransitionBookingHandler,
)
from .models import Booking
from .serializers import BookingRequestSerializer, BookingSerializer, BookingStatusSerializer

ROLE_CHOICES = ("owner", "renter", "all")


class IsBookingParticipant(permissions.BasePermission):
    """Owners and renters can see their bookings."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        return request.user.pk in (obj.owner_id, obj.renter_id)


class BookingViewSet(viewsets.ModelViewSet):
    """Viewset for requesting bookings and moving them through their lifecycle.

    Status changes go through the booking engine, which decides who may
    change what; this view only translates HTTP to commands.
    """

    queryset = Booking.objects.select_related("item", "owner", "renter").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated, IsBookingParticipant]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["status", "item"]
    http_method_names = ["get", "post", "patch", "head", "options"]
    store_class = DjangoReservationStore

    def get_store(self):
        return self.store_class()

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if self.action != "list":
            return qs.filter(Q(owner=user) | Q(renter=user))

        role = self.request.query_params.get("role", "owner")
        if role not in ROLE_CHOICES:
            raise ValidationError({"role": f"Must be one of: {', '.join(ROLE_CHOICES)}."})
        if role == "renter":
            return qs.filter(renter=user)
        if role == "all":
            return qs.filter(Q(owner=user) | Q(renter=user))
        return qs.filter(owner=user)

    def _render(self, booking_id, status_code=status.HTTP_200_OK) -> Response:
        instance = Booking.objects.select_related("item", "owner", "renter").get(pk=booking_id)
        return Response(BookingSerializer(instance).data, status=status_code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = BookingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = RequestBookingHandler(self.get_store())
        booking, created = handler.submit(RequestBookingCommand(
            item_id=data["item"],
            renter_id=request.user.pk,
            start_date=data["start_date"],
            end_date=data["end_date"],
            deposit=data["deposit"],
            notes=data["notes"],
        ))
        return self._render(booking.id, status.HTTP_201_CREATED if created else status.HTTP_200_OK)

    def partial_update(self, request, pk=None, *args, **kwargs):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = TransitionBookingHandler(self.get_store())
        booking = handler.handle(TransitionBookingCommand(
            booking_id=pk,
            actor_id=request.user.pk,
            new_status=serializer.validated_data["status"],
        ))
        return self._render(booking.id)
