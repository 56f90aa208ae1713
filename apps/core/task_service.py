"""
Background work for the Task Manager API.

Request handlers never talk to Celery or SQS directly. They call the
TaskService facade, which hands a named job and a JSON-serializable
payload to whichever backend AppConfig.task_backend selects:

    local   run the registered handler inline (development, tests)
    celery  publish to the Celery broker
    lambda  post a message to the SQS queue consumed by
            lambda_handlers.sqs_task_handler

    from apps.core.task_service import TaskService
    TaskService.send_welcome_email(email="ana@example.com", name="Ana")
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from django.utils.module_loading import import_string

from apps.core.app_config import get_config

logger = logging.getLogger(__name__)


BACKENDS = {
    'local': 'apps.core.backends.local_backend.LocalTaskService',
    'celery': 'apps.core.backends.celery_backend.CeleryTaskService',
    'lambda': 'apps.core.backends.lambda_backend.LambdaTaskService',
}


class TaskServiceInterface(ABC):
    """A place to send named jobs."""

    @abstractmethod
    def send_task(
        self,
        task_name: str,
        payload: Dict[str, Any],
        delay_seconds: int = 0,
    ) -> str:
        """
        Hand off `task_name` with `payload` as keyword arguments.

        Returns an id for the job. `delay_seconds` is a hint; backends
        that cannot delay log and ignore it.
        """


def _get_backend(backend: Optional[str] = None) -> TaskServiceInterface:
    name = backend or get_config().task_backend
    path = BACKENDS.get(name)
    if path is None:
        raise ValueError(f"Unknown TASK_BACKEND: {name}")
    return import_string(path)()


class TaskService:
    """
    One static method per job the application queues.
    """

    @staticmethod
    def enqueue(task_name: str, delay_seconds: int = 0, **payload) -> str:
        logger.info(f"Queueing {task_name}")
        return _get_backend().send_task(task_name, payload, delay_seconds=delay_seconds)

    @staticmethod
    def send_welcome_email(email: str, name: str) -> str:
        """Called by identity after signup."""
        return TaskService.enqueue("send_welcome_email", email=email, name=name)

    @staticmethod
    def send_cancellation_email(email: str, name: str) -> str:
        """Called by identity once the account row is gone."""
        return TaskService.enqueue("send_cancellation_email", email=email, name=name)
