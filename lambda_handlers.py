"""
AWS Lambda entry points.

    sqs_task_handler  consumes jobs queued by LambdaTaskService
    api_handler       serves the HTTP API behind API Gateway via Mangum

Django is set up at import time so cold starts pay for it once.
"""

import os
import json
import logging

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

import django
django.setup()

logger = logging.getLogger(__name__)


def _run_record(record) -> bool:
    """Run one SQS record. Returns False when no handler knows the job."""
    from apps.core.backends.local_backend import TASK_HANDLERS

    message = json.loads(record['body'])
    task_name = message['task_name']
    task_id = message.get('task_id', 'unknown')

    handler = TASK_HANDLERS.get(task_name)
    if handler is None:
        logger.error(f"No handler for task: {task_name} (id={task_id})")
        return False

    result = handler(**message.get('payload', {}))
    logger.info(f"Task {task_name} (id={task_id}) done: {result}")
    return True


def sqs_task_handler(event, context):
    """
    Process a batch of SQS records.

    Unknown job names are dropped and counted. Any other failure is
    re-raised so SQS redelivers the batch and eventually dead-letters it.
    """
    processed = failed = 0

    for record in event.get('Records', []):
        try:
            ok = _run_record(record)
        except Exception:
            logger.exception(f"Failed to process SQS message {record.get('messageId', '?')}")
            raise
        if ok:
            processed += 1
        else:
            failed += 1

    return {
        'statusCode': 200,
        'body': json.dumps({'processed': processed, 'failed': failed}),
    }


_asgi_handler = None


def api_handler(event, context):
    """API Gateway proxy events to the Django ASGI app."""
    global _asgi_handler

    if _asgi_handler is None:
        from config.asgi import get_lambda_handler
        _asgi_handler = get_lambda_handler()

    return _asgi_handler(event, context)
