"""Use case for authenticating a user."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from rounds.domain.entities import User
from rounds.infrastructure.repositories import UserRepository
from rounds.infrastructure.security import verify_password
from rounds.utils import now_in_app_timezone


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


def authenticate_user(
    session: Session, login: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Return the authentication result along with the user when possible."""

    repository = UserRepository(session)
    user = repository.get_by_login(login)

    if not user:
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not user.is_active:
        return user, AuthenticationStatus.INACTIVE

    return user, AuthenticationStatus.SUCCESS


def record_login(session: Session, user_id: str) -> None:
    """Stamp the last login time of ``user_id``."""

    UserRepository(session).record_login(user_id, now_in_app_timezone())
