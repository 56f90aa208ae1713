"""
URL configuration for the Task Manager API.
"""
import logging
from django.contrib import admin
from django.urls import path
from ninja import NinjaAPI
from ninja.errors import ValidationError as NinjaValidationError

from apps.tasks.exceptions import TaskValidationError, TaskNotFoundError, StoreError

logger = logging.getLogger(__name__)

api = NinjaAPI(
    title="Task Manager API",
    version="1.0.0",
    description="Personal task management with owner-scoped queries",
    docs_url="/docs",
)

from apps.identity.api import router as identity_router
from apps.tasks.api import router as tasks_router

api.add_router("/users", identity_router)
api.add_router("/tasks", tasks_router)


# =============================================================================
# Error mapping
# =============================================================================

@api.exception_handler(NinjaValidationError)
def request_validation_error(request, exc):
    return api.create_response(
        request, {"detail": "Invalid request", "errors": exc.errors}, status=400
    )


@api.exception_handler(TaskValidationError)
def task_validation_error(request, exc):
    return api.create_response(
        request, {"detail": str(exc), "errors": exc.errors}, status=400
    )


@api.exception_handler(TaskNotFoundError)
def task_not_found(request, exc):
    return api.create_response(request, {"detail": str(exc)}, status=404)


@api.exception_handler(StoreError)
def task_store_error(request, exc):
    logger.error(f"Task store error on {request.method} {request.path}: {exc}")
    return api.create_response(request, {"detail": "Internal server error"}, status=500)


urlpatterns = [
    path('admin/', admin.site.urls),
    path('', api.urls),
]
