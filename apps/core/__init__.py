"""
Core app - Shared abstractions and utilities.

This app provides platform-agnostic interfaces for:
- Process configuration (AppConfig)
- Background task execution (TaskService)

These abstractions allow switching between:
- Local development (sync execution)
- AWS Lambda + SQS (production)
- Celery + Redis (fallback)
"""
