"""
Task store - persistence boundary for the task engine.

Every lookup that targets a single task filters on id AND owner in the
same query. There is no separate existence check, so a task owned by
someone else is indistinguishable from a missing one.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from django.db import DatabaseError, transaction

from .dtos import TaskDTO
from .exceptions import StoreError
from .models import Task

logger = logging.getLogger(__name__)


def to_task_dto(task: Task) -> TaskDTO:
    return TaskDTO(
        id=task.id,
        owner_id=task.owner_id,
        description=task.description,
        completed=task.completed,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


class TaskStore:
    """
    Owner-scoped CRUD over the Task table.

    Database failures are logged and re-raised as StoreError.
    """

    def find_many(
        self,
        owner_id: UUID,
        extra_filter: Optional[Dict[str, Any]] = None,
        sort_spec: Sequence[str] = (),
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[TaskDTO]:
        try:
            queryset = Task.objects.filter(owner_id=owner_id, **(extra_filter or {}))
            if sort_spec:
                queryset = queryset.order_by(*sort_spec)
            if limit is None:
                queryset = queryset[skip:]
            else:
                queryset = queryset[skip:skip + limit]
            return [to_task_dto(task) for task in queryset]
        except DatabaseError as e:
            logger.exception(f"find_many failed for owner {owner_id}")
            raise StoreError("Failed to list tasks") from e

    def find_one(self, owner_id: UUID, task_id: UUID) -> Optional[TaskDTO]:
        try:
            task = Task.objects.filter(id=task_id, owner_id=owner_id).first()
        except DatabaseError as e:
            logger.exception(f"find_one failed for task {task_id}")
            raise StoreError("Failed to fetch task") from e
        return to_task_dto(task) if task else None

    def insert(self, record: Dict[str, Any]) -> TaskDTO:
        try:
            task = Task.objects.create(**record)
        except DatabaseError as e:
            logger.exception("insert failed")
            raise StoreError("Failed to create task") from e
        return to_task_dto(task)

    def update_one(self, owner_id: UUID, task_id: UUID, patch: Dict[str, Any]) -> Optional[TaskDTO]:
        """Apply patch to the owner's task. Returns None if no such task."""
        try:
            with transaction.atomic():
                task = (
                    Task.objects.select_for_update()
                    .filter(id=task_id, owner_id=owner_id)
                    .first()
                )
                if task is None:
                    return None
                for attr, value in patch.items():
                    setattr(task, attr, value)
                task.save()
                return to_task_dto(task)
        except DatabaseError as e:
            logger.exception(f"update_one failed for task {task_id}")
            raise StoreError("Failed to update task") from e

    def delete_one(self, owner_id: UUID, task_id: UUID) -> Optional[TaskDTO]:
        """Delete the owner's task. Returns its last state, or None."""
        try:
            with transaction.atomic():
                task = (
                    Task.objects.select_for_update()
                    .filter(id=task_id, owner_id=owner_id)
                    .first()
                )
                if task is None:
                    return None
                deleted = to_task_dto(task)
                task.delete()
                return deleted
        except DatabaseError as e:
            logger.exception(f"delete_one failed for task {task_id}")
            raise StoreError("Failed to delete task") from e
