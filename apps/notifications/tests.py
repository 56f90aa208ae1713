from django.core import mail
from django.test import SimpleTestCase

from apps.core.app_config import get_config
from .emails import send_welcome_email, send_cancellation_email, WELCOME_SUBJECT, CANCELLATION_SUBJECT
from .tasks import send_welcome_email_task, send_cancellation_email_task


class AccountEmailTest(SimpleTestCase):

    def test_welcome_email(self):
        sent = send_welcome_email("ana@example.com", "Ana")

        self.assertEqual(sent, 1)
        message = mail.outbox[0]
        self.assertEqual(message.subject, WELCOME_SUBJECT)
        self.assertEqual(message.from_email, get_config().email_from)
        self.assertEqual(message.to, ["ana@example.com"])
        self.assertEqual(
            message.body,
            "Welcome to the app, Ana. Let me know how you get along with the app.",
        )

    def test_cancellation_email(self):
        send_cancellation_email("ana@example.com", "Ana")

        message = mail.outbox[0]
        self.assertEqual(message.subject, CANCELLATION_SUBJECT)
        self.assertEqual(message.body, "Goodbye, Ana. I hope to see you back sometime soon.")


class EmailTaskTest(SimpleTestCase):
    """Celery tasks called directly run the same email code."""

    def test_welcome_task(self):
        self.assertEqual(send_welcome_email_task("ana@example.com", "Ana"), 1)
        self.assertEqual(mail.outbox[0].subject, WELCOME_SUBJECT)

    def test_cancellation_task_applied_eagerly(self):
        result = send_cancellation_email_task.apply(kwargs={"email": "ana@example.com", "name": "Ana"})
        self.assertEqual(result.get(), 1)
        self.assertEqual(mail.outbox[0].subject, CANCELLATION_SUBJECT)
