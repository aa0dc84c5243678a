"""Outbound email notifications."""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def send_password_reset_email(user, token: str) -> bool:
    """
    Send the password reset link to ``user``.

    Delivery problems are logged and reported through the return value;
    they never reach the caller's request.
    """
    reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
    minutes = max(1, settings.PASSWORD_RESET_TIMEOUT // 60)

    if user.language == 'en':
        subject = 'Password reset'
        body = (
            f"Hello {user.get_display_name()},\n\n"
            f"Use the following link to choose a new password:\n{reset_url}\n\n"
            f"The link expires in {minutes} minutes. If you did not request it, ignore this email."
        )
    else:
        subject = 'Restablecer contraseña'
        body = (
            f"Hola {user.get_display_name()},\n\n"
            f"Usa el siguiente enlace para elegir una nueva contraseña:\n{reset_url}\n\n"
            f"El enlace expira en {minutes} minutos. Si no lo solicitaste, ignora este correo."
        )

    try:
        send_mail(
            subject,
            body,
            settings.DEFAULT_FROM_EMAIL,
            [user.email],
            fail_silently=False,
        )
    except Exception:
        logger.exception("Failed to send password reset email to user %s", user.id)
        return False

    return True
