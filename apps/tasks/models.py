import uuid
from django.db import models


class Task(models.Model):
    """
    A personal to-do item. Visible and mutable only through its owner.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_id = models.UUIDField(db_index=True, editable=False)  # No FK - modular boundary

    description = models.TextField()
    completed = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['owner_id', 'completed'], name='tasks_owner_completed_idx'),
        ]

    def __str__(self):
        return self.description
