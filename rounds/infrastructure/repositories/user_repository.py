"""Persistence layer for user data."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from rounds.domain.entities import User
from rounds.infrastructure.models import UserModel
from rounds.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        """Return the user whose username matches ``username`` exactly."""

        model = self.session.query(UserModel).filter_by(username=username).first()
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def get_by_login(self, login: str) -> User | None:
        """Return the user identified by ``login`` as either username or email."""

        model = (
            self.session.query(UserModel)
            .filter(or_(UserModel.username == login, UserModel.email == login))
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email,
            password=user.password,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=ensure_app_naive_datetime(user.created_at or now_in_app_timezone()),
            is_active=user.is_active,
        )
        if user.id is not None:
            model.id = user.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def record_login(self, user_id: str, when: datetime) -> None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.last_login_at = ensure_app_naive_datetime(when)
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            first_name=model.first_name,
            last_name=model.last_name,
            created_at=ensure_app_timezone(model.created_at),
            last_login_at=ensure_app_timezone(model.last_login_at),
            is_active=model.is_active,
        )


__all__ = ["UserRepository"]
