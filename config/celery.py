"""
Celery configuration for the Task Manager API.

Only used when TASK_BACKEND=celery; workers pick up the email tasks
from apps.notifications.tasks.
"""
import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('config')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
