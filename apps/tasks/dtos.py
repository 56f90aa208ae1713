"""DTOs for Tasks app."""
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TaskDTO:
    """Task data as returned by the task store."""
    id: UUID
    owner_id: UUID
    description: str
    completed: bool
    created_at: datetime
    updated_at: datetime


from ninja import Schema


class TaskOut(Schema):
    id: UUID
    owner_id: UUID
    description: str
    completed: bool
    created_at: datetime
    updated_at: datetime
