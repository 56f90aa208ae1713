"""Shared fixtures for task tests: two users, three tasks."""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.identity.services import issue_token
from apps.tasks.models import Task

User = get_user_model()


def make_user(email, name="Test User", password="testpass123"):
    return User.objects.create_user(email=email, password=password, name=name)


def make_task(owner, description, completed=False, minutes_ago=0):
    """
    Create a task with deterministic timestamps: larger minutes_ago means
    older, so creation order never depends on clock resolution.
    """
    task = Task.objects.create(owner_id=owner.id, description=description, completed=completed)
    stamp = timezone.now() - timedelta(minutes=minutes_ago)
    Task.objects.filter(id=task.id).update(created_at=stamp, updated_at=stamp)
    task.refresh_from_db()
    return task


class TaskFixtureMixin:
    """
    user_one owns task_one (open) and task_two (completed);
    user_two owns task_three (completed).
    """

    def setUp(self):
        super().setUp()
        self.user_one = make_user("mohamed@example.com", name="Mohamed")
        self.user_two = make_user("othman@example.com", name="Othman")
        self.task_one = make_task(self.user_one, "First task", completed=False, minutes_ago=30)
        self.task_two = make_task(self.user_one, "Second task", completed=True, minutes_ago=20)
        self.task_three = make_task(self.user_two, "Third task", completed=True, minutes_ago=10)
        self.token_one = issue_token(self.user_one)
        self.token_two = issue_token(self.user_two)

    def auth(self, token):
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}
