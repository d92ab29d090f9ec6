"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user, record_login
from .register_user import UserAlreadyExistsError, register_user

__all__ = [
    "AuthenticationStatus",
    "UserAlreadyExistsError",
    "authenticate_user",
    "record_login",
    "register_user",
]
