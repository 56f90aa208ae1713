"""
JWT Authentication utilities for the Task Manager API.

Provides token generation and validation for bearer authentication.
Signing secret and lifetime come from AppConfig; tokens are also
recorded as SessionToken rows so they can be revoked on logout.
"""
import uuid
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from apps.core.app_config import get_config


def create_access_token(user_id: UUID) -> str:
    """
    Create a signed session token for a user.

    Contains the user id as `sub` and a unique `jti` so two tokens
    issued in the same second never collide.
    Expires after JWT_EXPIRE_DAYS.
    """
    config = get_config()
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'jti': uuid.uuid4().hex,
        'iat': now,
        'exp': now + timedelta(days=config.jwt_expire_days),
        'type': 'access'
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    config = get_config()
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[UUID]:
    """
    Extract user_id from a valid access token.

    Returns:
        UUID of user if token valid, None otherwise.
    """
    payload = decode_token(token)
    if payload and payload.get('type') == 'access' and 'sub' in payload:
        try:
            return UUID(payload['sub'])
        except ValueError:
            return None
    return None


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an `Authorization: Bearer <token>` header value.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()
