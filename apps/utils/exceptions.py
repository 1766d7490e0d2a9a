from __future__ import annotations

import logging

from mongoengine.errors import ValidationError as MongoValidationError
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

from .api_response import api_error

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"

class DuplicateEntity(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Entity already exists"
    default_code = "duplicate"

def first_error_message(detail) -> str:
    if isinstance(detail, dict):
        for value in detail.values():
            return first_error_message(value)
        return "Invalid input."
    if isinstance(detail, (list, tuple)):
        for value in detail:
            return first_error_message(value)
        return "Invalid input."
    return str(detail)

def api_exception_handler(exc, context):
    if isinstance(exc, MongoValidationError):
        return api_error(exc.message or "Invalid input.", status_code=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "request", exc_info=exc)
        return api_error(SERVER_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        return api_error(first_error_message(exc.detail), errors=exc.detail, status_code=response.status_code)

    error = api_error(first_error_message(exc.detail), status_code=response.status_code)
    for header in ("WWW-Authenticate", "Retry-After", "Allow"):
        if header in response:
            error[header] = response[header]
    return error
