"""
Identity API endpoints with JWT bearer authentication.

Provides signup, login, logout and account endpoints.
Clients send `Authorization: Bearer <token>`; a token stays valid until
it expires or its session is revoked by logout.
"""
from typing import Optional
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from .models import User
from .dtos import RegisterIn, LoginIn, UserOut, AuthOut, MessageOut
from .jwt_auth import get_bearer_token
from .services import (
    get_user_for_token,
    register_user,
    login_user,
    revoke_token,
    revoke_all_tokens,
    delete_account,
)

router = Router(tags=["Identity"])

AUTH_ERROR = "Please authenticate."


# =============================================================================
# Helper Functions
# =============================================================================

def get_current_user(request: HttpRequest) -> Optional[User]:
    """
    Extract and validate user from the bearer token.

    Returns User object if the token is valid and its session is active,
    None otherwise. The token is kept on request.auth_token for logout.
    """
    token = get_bearer_token(request.headers.get('Authorization'))
    if not token:
        return None

    user = get_user_for_token(token)
    if user is not None:
        request.auth_token = token
    return user


def require_auth(request: HttpRequest) -> User:
    """
    Require authentication. Raises 401 if not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HttpError(401, AUTH_ERROR)
    return user


# =============================================================================
# Auth Endpoints
# =============================================================================

@router.post("", response={201: AuthOut}, auth=None)
def register(request: HttpRequest, payload: RegisterIn):
    """
    Create an account and return its first session token.

    Sends the welcome email through the task backend.
    """
    try:
        user, token = register_user(payload.name, payload.email, payload.password)
    except ValidationError as e:
        raise HttpError(400, "; ".join(f"{k}: {' '.join(v)}" for k, v in e.message_dict.items()))
    return 201, {"user": user, "token": token}


@router.post("/login", response=AuthOut, auth=None)
def login(request: HttpRequest, payload: LoginIn):
    """
    Authenticate with email and password and open a new session.
    """
    result = login_user(payload.email, payload.password)
    if result is None:
        raise HttpError(400, "Unable to login")
    user, token = result
    return {"user": user, "token": token}


@router.post("/logout", response=MessageOut, auth=None)
def logout(request: HttpRequest):
    """
    Revoke the token used for this request.
    """
    user = require_auth(request)
    revoke_token(user.id, request.auth_token)
    return {"success": True, "message": "Logged out"}


@router.post("/logoutAll", response=MessageOut, auth=None)
def logout_all(request: HttpRequest):
    """
    Revoke every session of the current user.
    """
    user = require_auth(request)
    count = revoke_all_tokens(user.id)
    return {"success": True, "message": f"Logged out of {count} sessions"}


@router.get("/me", response=UserOut, auth=None)
def get_me(request: HttpRequest):
    """
    Get current authenticated user's profile.
    """
    return require_auth(request)


@router.delete("/me", response=UserOut, auth=None)
def delete_me(request: HttpRequest):
    """
    Delete the current account together with its tasks.

    Sends the cancellation email through the task backend.
    """
    user = require_auth(request)
    return delete_account(user)
