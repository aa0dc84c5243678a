"""Password reset service."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing
from django.db import transaction
from django.utils.crypto import constant_time_compare

from .exceptions import InvalidTokenError
from .notifications import send_password_reset_email

logger = logging.getLogger(__name__)

User = get_user_model()

RESET_SALT = 'accounts.password-reset'


def _password_fingerprint(user) -> str:
    # Changes whenever the password does, so a used token stops verifying
    return user.password[-12:]


def make_reset_token(user) -> str:
    return signing.dumps(
        {'uid': str(user.pk), 'fp': _password_fingerprint(user)},
        salt=RESET_SALT,
    )


def request_password_reset(*, email: str) -> None:
    """
    Email a password reset link when an active account matches.

    Returns nothing either way so callers cannot probe for accounts.
    """
    user = User.objects.filter(email__iexact=email, is_active=True).first()
    if user is None:
        logger.info("Password reset requested for unknown email")
        return

    token = make_reset_token(user)
    transaction.on_commit(lambda: send_password_reset_email(user, token))


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Reset user password with a signed token.

    Raises:
        InvalidTokenError: If token is invalid, expired or already used
    """
    try:
        payload = signing.loads(
            token,
            salt=RESET_SALT,
            max_age=settings.PASSWORD_RESET_TIMEOUT,
        )
    except signing.BadSignature:
        # SignatureExpired is a subclass
        raise InvalidTokenError()

    try:
        user = (
            User.objects
            .select_for_update()
            .get(pk=payload.get('uid'), is_active=True)
        )
    except (User.DoesNotExist, ValueError):
        raise InvalidTokenError()

    if not constant_time_compare(payload.get('fp', ''), _password_fingerprint(user)):
        raise InvalidTokenError()

    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])

    return user
