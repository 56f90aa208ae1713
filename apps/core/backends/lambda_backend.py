"""
SQS task backend (TASK_BACKEND=lambda).

Each job becomes one SQS message whose body is

    {"task_id": "...", "task_name": "...", "payload": {...}}

The queue triggers the Lambda function lambda_handlers.sqs_task_handler.
Needs TASK_QUEUE_URL, AWS_REGION and AWS credentials available to boto3.
"""

import json
import uuid
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from apps.core.app_config import get_config
from apps.core.task_service import TaskServiceInterface

logger = logging.getLogger(__name__)

# SQS rejects DelaySeconds above 15 minutes
MAX_DELAY_SECONDS = 900


def build_message(task_id: str, task_name: str, payload: Dict[str, Any]) -> str:
    return json.dumps({"task_id": task_id, "task_name": task_name, "payload": payload})


class LambdaTaskService(TaskServiceInterface):

    def __init__(self, queue_url: Optional[str] = None, region: Optional[str] = None):
        config = get_config()
        self._queue_url = queue_url or config.task_queue_url
        self._region = region or config.aws_region
        self._sqs_client = None

    @property
    def sqs_client(self):
        # Created on first send so importing this module needs no AWS setup
        if self._sqs_client is None:
            self._sqs_client = boto3.client('sqs', region_name=self._region)
        return self._sqs_client

    def send_task(self, task_name: str, payload: Dict[str, Any], delay_seconds: int = 0) -> str:
        if not self._queue_url:
            raise RuntimeError("TASK_QUEUE_URL is not configured; cannot use the lambda backend")

        task_id = str(uuid.uuid4())
        try:
            response = self.sqs_client.send_message(
                QueueUrl=self._queue_url,
                MessageBody=build_message(task_id, task_name, payload),
                DelaySeconds=min(max(delay_seconds, 0), MAX_DELAY_SECONDS),
                MessageAttributes={
                    'TaskName': {'DataType': 'String', 'StringValue': task_name},
                    'TaskId': {'DataType': 'String', 'StringValue': task_id},
                },
            )
        except (BotoCoreError, ClientError):
            logger.exception(f"[LAMBDA] Could not queue {task_name} (id={task_id})")
            raise

        logger.info(f"[LAMBDA] Queued {task_name} (id={task_id}, message={response['MessageId']})")
        return task_id
