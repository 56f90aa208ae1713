"""
Task engine errors.

The NinjaAPI exception handlers in config/urls.py map these to responses:
TaskValidationError -> 400, TaskNotFoundError -> 404, StoreError -> 500.
"""
from apps.core.dtos import ValidationResultDTO


class TaskError(Exception):
    """Base class for task engine failures."""


class TaskValidationError(TaskError, ValueError):
    """Input rejected before anything was written."""

    def __init__(self, result: ValidationResultDTO):
        self.result = result
        super().__init__(result.error or "Invalid task data")

    @property
    def errors(self):
        return self.result.errors


class TaskNotFoundError(TaskError):
    """No task with that id belongs to the caller."""

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)


class StoreError(TaskError):
    """The task store failed to complete an operation."""
