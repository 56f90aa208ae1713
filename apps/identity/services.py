"""Services for Identity app."""
import logging
from typing import Optional, Tuple
from uuid import UUID

from django.contrib.auth import authenticate
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from apps.core.task_service import TaskService
from .models import User, SessionToken
from .dtos import UserDTO
from .jwt_auth import create_access_token, get_user_id_from_token
from .signals import user_cancelled
from .validators import validate_registration

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email is already registered"


def to_user_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        name=user.name,
        email=user.email,
        is_active=user.is_active,
    )


def issue_token(user: User) -> str:
    """Create a JWT for the user and record it as an active session."""
    token = create_access_token(user.id)
    SessionToken.objects.create(user=user, token=token)
    return token


def get_user_for_token(token: str) -> Optional[User]:
    """
    Resolve a bearer token to its user.

    The signature, the user and the session row are checked in one query:
    a revoked token or a deactivated user both resolve to None.
    """
    user_id = get_user_id_from_token(token)
    if not user_id:
        return None
    return User.objects.filter(
        id=user_id,
        is_active=True,
        session_tokens__token=token,
    ).first()


def register_user(name: str, email: str, password: str) -> Tuple[UserDTO, str]:
    """
    Create an account, open its first session and queue the welcome email.

    Raises:
        ValidationError: if a field is invalid or the email is taken.
    """
    result = validate_registration(name, email, password)
    if not result.valid:
        raise ValidationError(result.errors)

    data = result.cleaned_data
    if User.objects.filter(email=data["email"]).exists():
        raise ValidationError({"email": EMAIL_TAKEN})

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=data["email"],
                password=data["password"],
                name=data["name"],
            )
            token = issue_token(user)
    except IntegrityError:
        # a concurrent signup claimed the email after the check above
        logger.warning(f"Signup for {data['email']} lost a race on the unique email")
        raise ValidationError({"email": EMAIL_TAKEN})

    logger.info(f"Registered user {user.id}")
    TaskService.send_welcome_email(email=user.email, name=user.name)
    return to_user_dto(user), token


def login_user(email: str, password: str) -> Tuple[UserDTO, str] | None:
    """Check credentials and open a new session. Returns None on failure."""
    user = authenticate(username=(email or "").strip().lower(), password=password)
    if user is None or not user.is_active:
        return None
    token = issue_token(user)
    logger.info(f"User {user.id} logged in")
    return to_user_dto(user), token


def revoke_token(user_id: UUID, token: str) -> bool:
    deleted, _ = SessionToken.objects.filter(user_id=user_id, token=token).delete()
    return deleted > 0


def revoke_all_tokens(user_id: UUID) -> int:
    deleted, _ = SessionToken.objects.filter(user_id=user_id).delete()
    logger.info(f"Revoked {deleted} sessions for user {user_id}")
    return deleted


def delete_account(user: User) -> UserDTO:
    """
    Cancel an account: receivers of `user_cancelled` clean up owned data
    in the same transaction, then the user and its sessions are removed
    and the goodbye email is queued.
    """
    user_dto = to_user_dto(user)

    with transaction.atomic():
        user_cancelled.send(
            sender=User,
            user_id=user.id,
            email=user.email,
            name=user.name,
        )
        user.delete()

    logger.info(f"Deleted user {user_dto.id}")
    TaskService.send_cancellation_email(email=user_dto.email, name=user_dto.name)
    return user_dto
