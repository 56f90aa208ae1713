from celery import shared_task
from .emails import send_welcome_email, send_cancellation_email
import logging

logger = logging.getLogger(__name__)


@shared_task
def send_welcome_email_task(email, name):
    """
    Deliver the signup email from a Celery worker.
    """
    sent = send_welcome_email(email, name)
    logger.info(f"Welcome email to {email}: {sent} sent")
    return sent


@shared_task
def send_cancellation_email_task(email, name):
    """
    Deliver the account cancellation email from a Celery worker.
    """
    sent = send_cancellation_email(email, name)
    logger.info(f"Cancellation email to {email}: {sent} sent")
    return sent
