"""Use case for registering users."""

from sqlalchemy.orm import Session

from rounds.domain.entities import User
from rounds.infrastructure.repositories import UserRepository
from rounds.infrastructure.security import get_password_hash
from rounds.utils import now_in_app_timezone


class UserAlreadyExistsError(ValueError):
    """Raised when the username or email is taken."""


def register_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Create a new user ensuring unique usernames and email addresses."""

    repository = UserRepository(session)

    if repository.get_by_username(username):
        raise UserAlreadyExistsError("Username is already taken")
    if repository.get_by_email(email):
        raise UserAlreadyExistsError("Email is already registered")

    user = User(
        id=None,
        username=username,
        email=email,
        password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
