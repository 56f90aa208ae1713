"""
In-process task backend.

Jobs run synchronously inside the calling request, so a failing handler
fails the request. Selected with TASK_BACKEND=local, the default.

The handler registry below is shared with lambda_handlers.sqs_task_handler,
which dispatches SQS messages to the same functions.
"""

import uuid
import logging
from typing import Any, Callable, Dict

from apps.core.task_service import TaskServiceInterface

logger = logging.getLogger(__name__)


TASK_HANDLERS: Dict[str, Callable[..., Any]] = {}


def register_handler(task_name: str):
    """Register the decorated function as the handler for `task_name`."""
    def decorator(func):
        TASK_HANDLERS[task_name] = func
        return func
    return decorator


class LocalTaskService(TaskServiceInterface):

    def send_task(self, task_name: str, payload: Dict[str, Any], delay_seconds: int = 0) -> str:
        task_id = str(uuid.uuid4())

        if delay_seconds:
            logger.warning(f"[LOCAL] {task_name}: delay of {delay_seconds}s not supported, running now")

        handler = TASK_HANDLERS.get(task_name)
        if handler is None:
            logger.warning(f"[LOCAL] No handler registered for task: {task_name}")
            return task_id

        logger.info(f"[LOCAL] Running {task_name} (id={task_id})")
        try:
            result = handler(**payload)
        except Exception:
            logger.exception(f"[LOCAL] {task_name} (id={task_id}) failed")
            raise
        logger.info(f"[LOCAL] {task_name} done: {result}")
        return task_id


# =============================================================================
# Handlers
# =============================================================================

@register_handler("send_welcome_email")
def handle_send_welcome_email(email: str, name: str):
    from apps.notifications.emails import send_welcome_email
    return f"{send_welcome_email(email, name)} welcome email(s) to {email}"


@register_handler("send_cancellation_email")
def handle_send_cancellation_email(email: str, name: str):
    from apps.notifications.emails import send_cancellation_email
    return f"{send_cancellation_email(email, name)} cancellation email(s) to {email}"
