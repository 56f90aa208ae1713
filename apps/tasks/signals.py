from django.dispatch import receiver
from apps.identity.signals import user_cancelled
from .models import Task
import logging

logger = logging.getLogger(__name__)


@receiver(user_cancelled)
def delete_tasks_of_cancelled_user(sender, user_id, **kwargs):
    """
    Remove every task owned by an account that is being deleted.
    """
    deleted, _ = Task.objects.filter(owner_id=user_id).delete()
    logger.info(f"Signal: Deleted {deleted} tasks of cancelled user {user_id}")
