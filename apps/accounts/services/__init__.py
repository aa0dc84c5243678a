"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    UserNotFoundError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user, issue_tokens
from .password_reset import request_password_reset, confirm_password_reset, make_reset_token
from .notifications import send_password_reset_email

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyRegisteredError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'UserNotFoundError',
    # Services
    'register_user',
    'authenticate_user',
    'issue_tokens',
    'request_password_reset',
    'confirm_password_reset',
    'make_reset_token',
    'send_password_reset_email',
]
