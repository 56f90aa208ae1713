"""
Account emails.

Plain-text messages sent through Django's email framework. Delivery
transport (console, SMTP via SendGrid, locmem in tests) is chosen by
settings.EMAIL_BACKEND.
"""
import logging

from django.core.mail import send_mail

from apps.core.app_config import get_config

logger = logging.getLogger(__name__)


WELCOME_SUBJECT = "Thanks for joining in!"
CANCELLATION_SUBJECT = "Sorry to see you go!"


def send_welcome_email(email: str, name: str) -> int:
    """Send the signup email. Returns the number of messages delivered."""
    logger.info(f"Sending welcome email to {email}")
    return send_mail(
        subject=WELCOME_SUBJECT,
        message=f"Welcome to the app, {name}. Let me know how you get along with the app.",
        from_email=get_config().email_from,
        recipient_list=[email],
    )


def send_cancellation_email(email: str, name: str) -> int:
    """Send the goodbye email after an account is deleted."""
    logger.info(f"Sending cancellation email to {email}")
    return send_mail(
        subject=CANCELLATION_SUBJECT,
        message=f"Goodbye, {name}. I hope to see you back sometime soon.",
        from_email=get_config().email_from,
        recipient_list=[email],
    )
