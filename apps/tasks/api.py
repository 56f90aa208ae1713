"""
Tasks API endpoints.

CRUD for the authenticated user's tasks plus filtered, sorted and
paginated listing. Task engine errors are turned into responses by the
exception handlers registered on the NinjaAPI in config/urls.py.
"""
import json
from typing import Any, Dict, List, Optional
from django.http import HttpRequest
from ninja import Router, Query
from ninja.errors import HttpError

from apps.identity.api import require_auth
from .dtos import TaskOut
from .query import parse_task_query
from . import services

router = Router(tags=["Tasks"])


def _read_payload(request: HttpRequest) -> Dict[str, Any]:
    """Decode a JSON object body. An empty body is an empty object."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise HttpError(400, "Request body must be valid JSON")
    if not isinstance(data, dict):
        raise HttpError(400, "Request body must be a JSON object")
    return data


@router.post("", response={201: TaskOut}, auth=None)
def create_task_api(request: HttpRequest):
    """
    Create a task owned by the current user.

    Body: {"description": str, "completed": bool (optional)}
    """
    user = require_auth(request)
    task = services.create_task(user.id, _read_payload(request))
    return 201, task


@router.get("", response=List[TaskOut], auth=None)
def list_tasks_api(
    request: HttpRequest,
    completed: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    limit: Optional[str] = None,
    skip: Optional[str] = None,
):
    """
    List the current user's tasks.

    Query Parameters:
    - completed: true | false
    - sortBy: field:asc|desc, field one of description, completed, createdAt, updatedAt
    - limit: max number of tasks (0 or absent = all)
    - skip: number of tasks to skip
    """
    user = require_auth(request)
    query = parse_task_query(completed=completed, sort_by=sort_by, limit=limit, skip=skip)
    return services.list_tasks(user.id, query)


@router.get("/{task_id}", response=TaskOut, auth=None)
def get_task_api(request: HttpRequest, task_id: str):
    """
    Get one of the current user's tasks.
    """
    user = require_auth(request)
    return services.get_task(user.id, task_id)


@router.patch("/{task_id}", response=TaskOut, auth=None)
def update_task_api(request: HttpRequest, task_id: str):
    """
    Update description and/or completed. Any other field is rejected.
    """
    user = require_auth(request)
    return services.update_task(user.id, task_id, _read_payload(request))


@router.delete("/{task_id}", response=TaskOut, auth=None)
def delete_task_api(request: HttpRequest, task_id: str):
    """
    Delete a task and return it as it was.
    """
    user = require_auth(request)
    return services.delete_task(user.id, task_id)
