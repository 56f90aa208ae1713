"""
Task engine services.

All operations are scoped to `owner_id`, which always comes from the
authenticated session and never from request data.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from uuid import UUID

from .dtos import TaskDTO
from .exceptions import TaskNotFoundError, TaskValidationError
from .query import TaskQuery
from .store import TaskStore
from .validators import validate_task_create, validate_task_patch

logger = logging.getLogger(__name__)

_store = TaskStore()


def _parse_task_id(task_id: Union[UUID, str]) -> Optional[UUID]:
    if isinstance(task_id, UUID):
        return task_id
    try:
        return UUID(str(task_id))
    except ValueError:
        return None


def list_tasks(owner_id: UUID, query: Optional[TaskQuery] = None) -> List[TaskDTO]:
    """
    List the owner's tasks.

    The completed filter is ANDed with the owner scope, ordering is total
    (requested keys, then creation time and id), and skip/limit are
    applied last.
    """
    query = query or TaskQuery()
    return _store.find_many(
        owner_id,
        extra_filter=query.filters(),
        sort_spec=query.order_by(),
        skip=query.skip,
        limit=query.limit,
    )


def get_task(owner_id: UUID, task_id: Union[UUID, str]) -> TaskDTO:
    """
    Raises:
        TaskNotFoundError: the id is malformed, absent, or someone else's.
    """
    parsed_id = _parse_task_id(task_id)
    task = _store.find_one(owner_id, parsed_id) if parsed_id else None
    if task is None:
        raise TaskNotFoundError()
    return task


def create_task(owner_id: UUID, payload: Mapping[str, Any]) -> TaskDTO:
    """
    Raises:
        TaskValidationError: description missing/empty, bad completed
            value, or a field outside the allow-list (including owner).
    """
    result = validate_task_create(payload)
    if not result.valid:
        raise TaskValidationError(result)

    record: Dict[str, Any] = dict(result.cleaned_data)
    record['owner_id'] = owner_id
    task = _store.insert(record)
    logger.info(f"Created task {task.id} for owner {owner_id}")
    return task


def update_task(owner_id: UUID, task_id: Union[UUID, str], patch: Mapping[str, Any]) -> TaskDTO:
    """
    The patch is validated before the store is touched.

    Raises:
        TaskValidationError: disallowed field or invalid value.
        TaskNotFoundError: no such task for this owner.
    """
    result = validate_task_patch(patch)
    if not result.valid:
        raise TaskValidationError(result)

    parsed_id = _parse_task_id(task_id)
    task = _store.update_one(owner_id, parsed_id, result.cleaned_data) if parsed_id else None
    if task is None:
        raise TaskNotFoundError()
    logger.info(f"Updated task {task.id} ({', '.join(result.cleaned_data) or 'no changes'})")
    return task


def delete_task(owner_id: UUID, task_id: Union[UUID, str]) -> TaskDTO:
    """
    Returns the task as it was before deletion.

    Raises:
        TaskNotFoundError: no such task for this owner.
    """
    parsed_id = _parse_task_id(task_id)
    task = _store.delete_one(owner_id, parsed_id) if parsed_id else None
    if task is None:
        raise TaskNotFoundError()
    logger.info(f"Deleted task {task.id} for owner {owner_id}")
    return task
