"""Map marketplace errors onto HTTP responses."""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.core.exceptions import (
    CollaboratorUnavailableError,
    DuplicateApplicationError,
    InvalidTransitionError,
    MarketplaceError,
    NotFoundError,
)

STATUS_BY_ERROR = {
    DuplicateApplicationError: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    CollaboratorUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def exception_handler(exc, context):
    if isinstance(exc, MarketplaceError):
        code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return Response({"error": exc.code, "detail": str(exc)}, status=code)
    return drf_exception_handler(exc, context)
