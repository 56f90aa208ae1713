"""
Tests for the SQS consumer and the seed command.
"""
import json
from io import StringIO

from django.core import mail
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase

from apps.identity.models import User
from apps.tasks.models import Task
from lambda_handlers import sqs_task_handler


def sqs_event(*messages):
    return {"Records": [{"body": json.dumps(message)} for message in messages]}


class SqsTaskHandlerTest(SimpleTestCase):

    def test_dispatches_each_record(self):
        response = sqs_task_handler(
            sqs_event(
                {"task_id": "t-1", "task_name": "send_welcome_email",
                 "payload": {"email": "ana@example.com", "name": "Ana"}},
                {"task_id": "t-2", "task_name": "send_cancellation_email",
                 "payload": {"email": "bob@example.com", "name": "Bob"}},
            ),
            None,
        )
        self.assertEqual(response["statusCode"], 200)
        self.assertEqual(json.loads(response["body"]), {"processed": 2, "failed": 0})
        self.assertEqual([m.to for m in mail.outbox], [["ana@example.com"], ["bob@example.com"]])

    def test_unknown_task_is_counted_as_failed(self):
        response = sqs_task_handler(sqs_event({"task_name": "reindex_everything"}), None)
        self.assertEqual(json.loads(response["body"]), {"processed": 0, "failed": 1})

    def test_malformed_message_is_raised_for_retry(self):
        with self.assertRaises(json.JSONDecodeError):
            sqs_task_handler({"Records": [{"body": "{not json"}]}, None)


class SeedCommandTest(TestCase):

    def test_seed_creates_demo_data(self):
        out = StringIO()
        call_command('seed', stdout=out)

        self.assertIn('Seeding complete.', out.getvalue())
        self.assertEqual(User.objects.count(), 2)
        self.assertEqual(Task.objects.count(), 3)

        mohamed = User.objects.get(email='mohamed@example.com')
        self.assertTrue(mohamed.check_password('bousni123!'))
        self.assertEqual(
            list(
                Task.objects.filter(owner_id=mohamed.id)
                .order_by('description')
                .values_list('description', 'completed')
            ),
            [('First task', False), ('Second task', True)],
        )

    def test_seed_is_idempotent(self):
        call_command('seed', stdout=StringIO())
        call_command('seed', stdout=StringIO())
        self.assertEqual(User.objects.count(), 2)
        self.assertEqual(Task.objects.count(), 3)

    def test_clean_removes_other_tasks(self):
        extra = User.objects.create_user(email='extra@example.com', password='secret123', name='Extra')
        Task.objects.create(owner_id=extra.id, description='Leftover')

        call_command('seed', '--clean', stdout=StringIO())

        self.assertFalse(User.objects.filter(email='extra@example.com').exists())
        self.assertFalse(Task.objects.filter(description='Leftover').exists())
        self.assertEqual(Task.objects.count(), 3)
