"""Domain-specific exceptions for the finance app."""

from config.exceptions import DomainError, NotFoundOrForbiddenError


class FinanceServiceError(DomainError):
    """Base exception for finance services."""
    pass


class ExpenseNotFoundError(NotFoundOrForbiddenError, FinanceServiceError):
    default_message = 'Expense not found.'


class IncomeNotFoundError(NotFoundOrForbiddenError, FinanceServiceError):
    default_message = 'Income not found.'
