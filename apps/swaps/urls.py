"""URL routing for the swap domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import SwapViewSet

router = SimpleRouter()
router.register(r"", SwapViewSet, basename="swap")

urlpatterns = [
    path("", include(router.urls)),
]
