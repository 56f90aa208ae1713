"""
Celery task backend (TASK_BACKEND=celery).

Publishes jobs to the broker configured by CELERY_BROKER_URL; a worker
started with `celery -A config worker` executes the shared tasks in
apps.notifications.tasks.
"""

import uuid
import logging
from typing import Any, Dict

from apps.core.task_service import TaskServiceInterface

logger = logging.getLogger(__name__)


# Job name -> registered Celery task name
CELERY_TASKS = {
    "send_welcome_email": "apps.notifications.tasks.send_welcome_email_task",
    "send_cancellation_email": "apps.notifications.tasks.send_cancellation_email_task",
}


def _get_celery_task(task_name: str):
    registered_name = CELERY_TASKS.get(task_name)
    if registered_name is None:
        raise ValueError(f"No Celery task mapped for: {task_name}")

    from celery import current_app
    task = current_app.tasks.get(registered_name)
    if task is None:
        raise ValueError(f"Celery task not registered: {registered_name}")
    return task


class CeleryTaskService(TaskServiceInterface):

    def send_task(self, task_name: str, payload: Dict[str, Any], delay_seconds: int = 0) -> str:
        task = _get_celery_task(task_name)
        task_id = str(uuid.uuid4())

        options = {'countdown': delay_seconds} if delay_seconds > 0 else {}
        task.apply_async(kwargs=payload, task_id=task_id, **options)

        logger.info(f"[CELERY] Published {task_name} (id={task_id})")
        return task_id
