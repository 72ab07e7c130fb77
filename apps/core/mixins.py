# core/mixins.py
import logging

from django.core.exceptions import PermissionDenied, ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ApiErrorMixin:
    """
    Translate errors raised by service functions into `{"message": ...}`
    responses. Anything unexpected is logged and reported as a 500 carrying
    `error_message`.
    """
    error_message = "Request failed"

    def handle_exception(self, exc):
        if isinstance(exc, ValueError):
            return Response({"message": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, (APIException, Http404, PermissionDenied, DjangoValidationError)):
            return super().handle_exception(exc)
        logger.exception("%s: %s", self.error_message, exc)
        return Response({"message": self.error_message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

