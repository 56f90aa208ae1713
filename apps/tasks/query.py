"""
Task list query parsing.

Turns raw query-string values (`completed`, `sortBy`, `limit`, `skip`)
into a validated TaskQuery for services.list_tasks.

    GET /tasks?completed=true&sortBy=createdAt:desc&limit=10&skip=20
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from apps.core.dtos import ValidationResultDTO
from .exceptions import TaskValidationError

logger = logging.getLogger(__name__)


# Public sort names -> model fields
SORTABLE_FIELDS = {
    'description': 'description',
    'completed': 'completed',
    'createdAt': 'created_at',
    'updatedAt': 'updated_at',
    'created_at': 'created_at',
    'updated_at': 'updated_at',
}

# Appended to every ordering so equal keys still come back in creation order
TIEBREAK_FIELDS = ('created_at', 'id')


@dataclass(frozen=True)
class SortField:
    field: str
    descending: bool = False

    @property
    def order_by(self) -> str:
        return f"-{self.field}" if self.descending else self.field


@dataclass(frozen=True)
class TaskQuery:
    """
    Filter, sort and pagination for listing one owner's tasks.

    completed: None lists both states.
    sort: applied in order; empty keeps creation order.
    limit: None means unbounded.
    """
    completed: Optional[bool] = None
    sort: Tuple[SortField, ...] = ()
    skip: int = 0
    limit: Optional[int] = None

    def order_by(self) -> Tuple[str, ...]:
        """Total ordering for the store: requested keys, then tiebreakers."""
        fields = [s.order_by for s in self.sort]
        used = {s.field for s in self.sort}
        fields.extend(f for f in TIEBREAK_FIELDS if f not in used)
        return tuple(fields)

    def filters(self) -> dict:
        if self.completed is None:
            return {}
        return {'completed': self.completed}


def parse_completed(value: Optional[str]) -> Optional[bool]:
    if value is None or value == '':
        return None
    normalized = value.strip().lower()
    if normalized == 'true':
        return True
    if normalized == 'false':
        return False
    raise TaskValidationError(
        ValidationResultDTO.fail('completed', "completed must be 'true' or 'false'")
    )


def parse_sort(value: Optional[str]) -> Tuple[SortField, ...]:
    """
    Parse `field:direction[,field:direction...]`.

    `desc` (any case) sorts descending, any other direction ascending.
    Unknown fields are skipped.
    """
    if not value:
        return ()

    fields = []
    seen = set()
    for part in value.split(','):
        name, _, direction = part.strip().partition(':')
        field = SORTABLE_FIELDS.get(name.strip())
        if field is None:
            logger.debug(f"Ignoring unknown sort field {name!r}")
            continue
        if field in seen:
            continue
        seen.add(field)
        fields.append(SortField(field=field, descending=direction.strip().lower() == 'desc'))
    return tuple(fields)


# Upper bound for limit and skip
MAX_PAGE_VALUE = 2**31 - 1


def _parse_non_negative(name: str, value) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = -1
    if number < 0:
        raise TaskValidationError(
            ValidationResultDTO.fail(name, f"{name} must be a non-negative integer")
        )
    if number > MAX_PAGE_VALUE:
        raise TaskValidationError(
            ValidationResultDTO.fail(name, f"{name} must not exceed {MAX_PAGE_VALUE}")
        )
    return number


def parse_task_query(
    completed: Optional[str] = None,
    sort_by: Optional[str] = None,
    limit=None,
    skip=None,
) -> TaskQuery:
    """
    Build a TaskQuery from request parameters.

    Raises:
        TaskValidationError: if completed, limit or skip cannot be parsed.
    """
    parsed_limit = _parse_non_negative('limit', limit)
    return TaskQuery(
        completed=parse_completed(completed),
        sort=parse_sort(sort_by),
        skip=_parse_non_negative('skip', skip) or 0,
        # limit=0 means no limit
        limit=parsed_limit or None,
    )
