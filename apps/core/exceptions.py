import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Flatten a DRF error detail (str, list or dict) to its first message."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    """
    DRF exception handler producing the `{"message": ...}` envelope used by
    every endpoint. Field-level validation errors are kept under `errors`.
    """
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(exc.messages)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.NotAuthenticated):
        message = 'Access token required'
    else:
        message = _first_message(response.data)
        if isinstance(exc, (Http404, exceptions.NotFound)) and message in ('', 'Not found.', 'No User matches the given query.'):
            message = 'Not found'

    body = {'message': message}
    if isinstance(exc, exceptions.ValidationError) and isinstance(response.data, dict):
        body['errors'] = response.data

    if response.status_code >= 500:
        logger.error("Unhandled API error: %s", exc)

    response.data = body
    return response
