"""
ASGI entry point for the Task Manager API.

Served by any ASGI server (uvicorn config.asgi:application) or, on AWS
Lambda, through Mangum via lambda_handlers.api_handler.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Built at import so a Lambda container initializes Django once
application = get_asgi_application()


def get_lambda_handler():
    """Wrap the ASGI application for API Gateway events."""
    from mangum import Mangum
    return Mangum(application, lifespan="off")
