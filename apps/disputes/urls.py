"""URL routing for the dispute domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import DisputeViewSet

router = SimpleRouter()
router.register(r"", DisputeViewSet, basename="dispute")

urlpatterns = [
    path("", include(router.urls)),
]
