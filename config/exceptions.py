"""
Shared domain exception taxonomy and the DRF exception handler.

Services raise these exceptions; views let them propagate and
``domain_exception_handler`` turns them into ``{"error", "code"}`` JSON
responses with a stable classification.

Exception Hierarchy:
    DomainError (400)
    ├── NotFoundOrForbiddenError (404)
    ├── ConflictError (409)
    ├── StateError (409)
    └── UnavailableError (503)
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = 'domain_error'
    default_message = 'Request could not be processed.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def message(self):
        return str(self)


class NotFoundOrForbiddenError(DomainError):
    """
    Entity is absent or the caller may not access it.

    The two cases are deliberately reported the same way so that the
    existence of other tenants' records is never revealed.
    """

    status_code = status.HTTP_404_NOT_FOUND
    code = 'not_found'
    default_message = 'Not found.'


class ConflictError(DomainError):
    """Uniqueness violation."""

    status_code = status.HTTP_409_CONFLICT
    code = 'conflict'
    default_message = 'Conflicting record already exists.'


class StateError(DomainError):
    """Mutation not allowed in the entity's current state."""

    status_code = status.HTTP_409_CONFLICT
    code = 'invalid_state'
    default_message = 'Invalid state for this action.'


class UnavailableError(DomainError):
    """Underlying storage or transport failure."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = 'unavailable'
    default_message = 'Service temporarily unavailable.'


def domain_exception_handler(exc, context):
    """
    DRF exception handler that understands domain exceptions.

    Falls back to DRF's default handler for everything else (validation
    errors, authentication failures, Http404, ...).
    """
    if isinstance(exc, DomainError):
        return Response(
            {'error': exc.message, 'code': exc.code},
            status=exc.status_code,
        )

    if isinstance(exc, DatabaseError):
        logger.exception("Database error while handling %s", context.get('view'))
        return Response(
            {'error': UnavailableError.default_message, 'code': UnavailableError.code},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return exception_handler(exc, context)
