"""
AppConfig - Process-wide configuration for the Task Manager API.

Configuration is read from the environment exactly once, validated, and
then frozen. Everything that needs a secret or a deployment switch
(JWT signing, email delivery, task backend) reads it from here instead of
calling os.getenv at import time.

Usage:
    from apps.core.app_config import get_config

    secret = get_config().jwt_secret

Tests (or an embedding process) can install an explicit instance:

    from apps.core.app_config import AppConfig, configure
    configure(AppConfig(secret_key="x", jwt_secret="y"))
"""

import os
import logging
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


DEV_SECRET_KEY = 'django-insecure-dev-only-task-manager-key'
TASK_BACKENDS = ('local', 'celery', 'lambda')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _as_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ImproperlyConfigured(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class AppConfig:
    """Immutable runtime configuration."""
    debug: bool = True
    secret_key: str = DEV_SECRET_KEY
    allowed_hosts: Tuple[str, ...] = ('*',)

    # Authentication
    jwt_secret: str = DEV_SECRET_KEY
    jwt_algorithm: str = 'HS256'
    jwt_expire_days: int = 7

    # Email
    email_from: str = 'noreply@taskmanager.local'
    sendgrid_api_key: Optional[str] = field(default=None, repr=False)

    # Background tasks
    task_backend: str = 'local'
    task_queue_url: Optional[str] = None
    aws_region: str = 'ap-southeast-1'
    celery_broker_url: str = 'redis://localhost:6379/0'

    log_level: str = 'INFO'

    def validate(self) -> 'AppConfig':
        """
        Check the configuration is usable. Returns self so it can be chained.

        Raises:
            ImproperlyConfigured: on the first invalid value found.
        """
        if not self.secret_key:
            raise ImproperlyConfigured("DJANGO_SECRET_KEY must not be empty")
        if not self.debug and self.secret_key == DEV_SECRET_KEY:
            raise ImproperlyConfigured("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is off")
        if not self.jwt_secret:
            raise ImproperlyConfigured("JWT_SECRET must not be empty")
        if self.jwt_expire_days <= 0:
            raise ImproperlyConfigured("JWT_EXPIRE_DAYS must be positive")
        if self.task_backend not in TASK_BACKENDS:
            raise ImproperlyConfigured(
                f"Unknown TASK_BACKEND: {self.task_backend} "
                f"(expected one of {', '.join(TASK_BACKENDS)})"
            )
        if self.task_backend == 'lambda' and not self.task_queue_url:
            raise ImproperlyConfigured("TASK_QUEUE_URL is required when TASK_BACKEND=lambda")
        if self.log_level not in LOG_LEVELS:
            raise ImproperlyConfigured(f"Unknown LOG_LEVEL: {self.log_level}")
        if '@' not in self.email_from:
            raise ImproperlyConfigured(f"EMAIL_FROM is not an email address: {self.email_from}")
        return self

    @property
    def email_backend(self) -> str:
        """Django email backend implied by the configuration."""
        if self.sendgrid_api_key:
            return 'django.core.mail.backends.smtp.EmailBackend'
        return 'django.core.mail.backends.console.EmailBackend'

    def with_overrides(self, **changes) -> 'AppConfig':
        """Return a validated copy with the given fields replaced."""
        return replace(self, **changes).validate()


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build an AppConfig from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ).

    Returns:
        A validated, frozen AppConfig.
    """
    env = os.environ if environ is None else environ

    debug = _as_bool(env.get('DJANGO_DEBUG'), True)
    secret_key = env.get('DJANGO_SECRET_KEY') or DEV_SECRET_KEY

    hosts = env.get('DJANGO_ALLOWED_HOSTS', '')
    if hosts:
        allowed_hosts = tuple(h.strip() for h in hosts.split(',') if h.strip())
    else:
        allowed_hosts = ('*',) if debug else ()

    config = AppConfig(
        debug=debug,
        secret_key=secret_key,
        allowed_hosts=allowed_hosts,
        jwt_secret=env.get('JWT_SECRET') or secret_key,
        jwt_expire_days=_as_int('JWT_EXPIRE_DAYS', env.get('JWT_EXPIRE_DAYS'), 7),
        email_from=env.get('EMAIL_FROM') or AppConfig.email_from,
        sendgrid_api_key=env.get('SENDGRID_API_KEY') or None,
        task_backend=(env.get('TASK_BACKEND') or 'local').strip().lower(),
        task_queue_url=env.get('TASK_QUEUE_URL') or None,
        aws_region=env.get('AWS_REGION') or AppConfig.aws_region,
        celery_broker_url=env.get('CELERY_BROKER_URL') or AppConfig.celery_broker_url,
        log_level=(env.get('LOG_LEVEL') or 'INFO').strip().upper(),
    )
    return config.validate()


_config: Optional[AppConfig] = None


def configure(config: AppConfig) -> AppConfig:
    """Install an explicit configuration for the process."""
    global _config
    _config = config.validate()
    logger.debug(f"Configuration installed (task_backend={_config.task_backend})")
    return _config


def get_config() -> AppConfig:
    """Return the process configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
