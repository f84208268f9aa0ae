"""API views for swap negotiation."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.infrastructure.django_store import DjangoReservationStore

from .application.command_handlers import (
    ProposeSwapCommand,
    ProposeSwapHandler,
    TransitionSwapCommand,
    TransitionSwapHandler,
)
from .models import Swap
from .serializers import SwapProposalSerializer, SwapSerializer, SwapTransitionSerializer


class SwapViewSet(viewsets.ModelViewSet):
    """Proposals the current user made or received, newest activity first."""

    queryset = Swap.objects.select_related("proposer", "receiver", "proposer_item", "receiver_item").all()
    serializer_class = SwapSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["status"]
    http_method_names = ["get", "post", "patch", "head", "options"]
    store_class = DjangoReservationStore

    def get_store(self):
        return self.store_class()

    def get_queryset(self):  # type: ignore
        user = self.request.user
        return super().get_queryset().filter(Q(proposer=user) | Q(receiver=user)).order_by("-updated_at")

    def _render(self, swap_id, status_code=status.HTTP_200_OK) -> Response:
        instance = Swap.objects.select_related(
            "proposer", "receiver", "proposer_item", "receiver_item"
        ).get(pk=swap_id)
        return Response(SwapSerializer(instance).data, status=status_code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = SwapProposalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = ProposeSwapHandler(self.get_store())
        swap, created = handler.submit(ProposeSwapCommand(
            proposer_id=request.user.pk,
            proposer_item_id=data["proposer_item"],
            receiver_item_id=data["receiver_item"],
            receiver_id=data["receiver"],
            cash_adjustment=data["cash_adjustment"],
            notes=data["notes"],
        ))
        return self._render(swap.id, status.HTTP_201_CREATED if created else status.HTTP_200_OK)

    def partial_update(self, request, pk=None, *args, **kwargs):  # type: ignore
        serializer = SwapTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = TransitionSwapHandler(self.get_store())
        swap = handler.handle(TransitionSwapCommand(
            swap_id=pk,
            actor_id=request.user.pk,
            new_status=data["status"],
            cash_adjustment=data.get("cash_adjustment"),
            notes=data.get("notes"),
        ))
        return self._render(swap.id)
