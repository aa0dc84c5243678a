"""Domain-specific exceptions for the sales app."""

from config.exceptions import ConflictError, DomainError, NotFoundOrForbiddenError, StateError


class SalesServiceError(DomainError):
    """Base exception for sales services."""
    pass


class SaleNotFoundError(NotFoundOrForbiddenError, SalesServiceError):
    default_message = 'Sale not found.'


class SaleAlreadyPaidError(StateError, SalesServiceError):
    """Raised when recording a payment on a COMPLETED sale."""
    code = 'sale_already_paid'
    default_message = 'Sale is already fully paid.'


class PaymentExceedsBalanceError(SalesServiceError):
    """Raised when a payment is larger than the outstanding amount."""
    code = 'payment_exceeds_balance'
    default_message = 'Payment exceeds the outstanding amount.'


class SaleNumberConflictError(ConflictError, SalesServiceError):
    code = 'sale_number_conflict'
    default_message = 'Could not generate a unique sale number.'
