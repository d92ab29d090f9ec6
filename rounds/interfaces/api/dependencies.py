"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from rounds.application.services import MentionService, NotificationService
from rounds.domain.entities import User
from rounds.infrastructure.database import get_db
from rounds.infrastructure.notifications import ConnectionGroupRegistry
from rounds.infrastructure.repositories import (
    CommentMentionRepository,
    NotificationRepository,
    UserRepository,
)
from rounds.infrastructure.security import extract_user_id

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        user_id = extract_user_id(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_exception("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def get_connection_registry(request: Request) -> ConnectionGroupRegistry:
    """Return the registry created by the application factory."""

    return request.app.state.connection_registry


def get_notification_service(
    db: Session = Depends(get_db),
    registry: ConnectionGroupRegistry = Depends(get_connection_registry),
) -> NotificationService:
    return NotificationService(NotificationRepository(db), registry)


def get_mention_service(db: Session = Depends(get_db)) -> MentionService:
    return MentionService(CommentMentionRepository(db), UserRepository(db))
