"""DRF exception handler that renders domain errors as HTTP responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain import exceptions as domain_errors

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    domain_errors.ValidationError: status.HTTP_400_BAD_REQUEST,
    domain_errors.NotFoundError: status.HTTP_404_NOT_FOUND,
    domain_errors.ForbiddenError: status.HTTP_403_FORBIDDEN,
    domain_errors.ConflictError: status.HTTP_409_CONFLICT,
}


def domain_exception_handler(exc, context):
    if isinstance(exc, domain_errors.DomainError):
        status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        view = context.get("view")
        logger.warning(
            f"{type(exc).__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
        )
        return Response({"detail": str(exc)}, status=status_code)
    return exception_handler(exc, context)
