"""Domain-specific exceptions for accounts services."""

from rest_framework import status

from config.exceptions import ConflictError, DomainError, NotFoundOrForbiddenError


class AccountsServiceError(DomainError):
    """Base exception for accounts services."""
    pass


class EmailAlreadyRegisteredError(ConflictError, AccountsServiceError):
    """Raised when the email already belongs to an account."""
    code = 'email_taken'
    default_message = 'A user with this email already exists.'


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'invalid_credentials'
    default_message = 'Invalid email or password.'


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    status_code = status.HTTP_403_FORBIDDEN
    code = 'inactive_account'
    default_message = 'Account is deactivated.'


class InvalidTokenError(AccountsServiceError):
    """Raised when a password reset token is invalid or expired."""
    code = 'invalid_token'
    default_message = 'Invalid or expired reset token.'


class UserNotFoundError(NotFoundOrForbiddenError, AccountsServiceError):
    """Raised when user does not exist."""
    code = 'user_not_found'
    default_message = 'User not found.'
