"""User registration service."""

import logging

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyRegisteredError

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    name: str = "",
    phone: str = "",
    language: str = "es",
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        name: Optional full name
        phone: Optional phone number
        language: Preferred UI language

    Returns:
        Created User instance

    Raises:
        EmailAlreadyRegisteredError: If the email is taken
    """
    email = User.objects.normalize_email(email)

    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError()

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                phone=phone,
                language=language,
            )
    except IntegrityError:
        # Concurrent registration with the same email
        raise EmailAlreadyRegisteredError()

    logger.info("Registered user %s", user.id)
    return user
