"""DTOs for Identity app."""
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserDTO:
    id: UUID
    name: str
    email: str
    is_active: bool


from ninja import Schema


class RegisterIn(Schema):
    name: str
    email: str
    password: str


class LoginIn(Schema):
    email: str
    password: str


class UserOut(Schema):
    id: UUID
    name: str
    email: str


class AuthOut(Schema):
    user: UserOut
    token: str


class MessageOut(Schema):
    success: bool
    message: str
