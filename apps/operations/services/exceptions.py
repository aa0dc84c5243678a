"""
Domain exceptions for operations app.

Exception Hierarchy:
    OperationsServiceError
    ├── OperationNotFoundError (404, not found or not accessible)
    ├── OperationClosedError (409, mutation on a CLOSED operation)
    ├── OperationAlreadyClosedError (409, close called twice)
    ├── OperationNumberConflictError (409, number generation exhausted)
    └── InvalidMovementError (400, non-positive amount/weight)
"""

from config.exceptions import (
    ConflictError,
    DomainError,
    NotFoundOrForbiddenError,
    StateError,
)


class OperationsServiceError(DomainError):
    """Base exception for operation service errors."""
    pass


class OperationNotFoundError(NotFoundOrForbiddenError, OperationsServiceError):
    """Operation does not exist or is not accessible to the caller."""
    default_message = 'Operation not found.'


class OperationClosedError(StateError, OperationsServiceError):
    """Operation is CLOSED and no longer accepts changes."""
    code = 'operation_closed'
    default_message = 'Operation is closed.'


class OperationAlreadyClosedError(StateError, OperationsServiceError):
    """Close requested on an operation that is already CLOSED."""
    code = 'operation_already_closed'
    default_message = 'Operation is already closed.'


class OperationNumberConflictError(ConflictError, OperationsServiceError):
    """Could not generate a unique operation number."""
    code = 'operation_number_conflict'
    default_message = 'Could not generate a unique operation number.'


class InvalidMovementError(OperationsServiceError):
    """Movement amount or weights are invalid."""
    code = 'invalid_movement'
    default_message = 'Invalid movement.'
