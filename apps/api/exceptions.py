"""
API exception handling.

Authorization failures are reported as 401 with a fixed message, and model
ValidationErrors raised below the serializer layer become 400 responses.
"""
import logging

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "You are not authorized to perform that action."


def api_exception_handler(exc, context):
    request = context.get('request')

    if isinstance(exc, (DjangoPermissionDenied, exceptions.PermissionDenied)):
        logger.warning(
            "Unauthorized %s %s by user=%s",
            getattr(request, 'method', '?'),
            getattr(request, 'path', '?'),
            getattr(getattr(request, 'user', None), 'pk', None),
        )
        return Response(
            {'error': UNAUTHORIZED_MESSAGE},
            status=status.HTTP_401_UNAUTHORIZED,
        )

    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(detail=as_serializer_error(exc))

    return exception_handler(exc, context)
