"""Endpoints for drinking sessions."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rounds.domain.entities import DrinkingSession, User
from rounds.infrastructure.database import get_db
from rounds.infrastructure.repositories import DrinkingSessionRepository
from rounds.interfaces.api.dependencies import get_current_active_user
from rounds.interfaces.api.schemas import DrinkingSessionCreate, DrinkingSessionRead
from rounds.utils import now_in_app_timezone

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _session_to_schema(drinking_session: DrinkingSession) -> DrinkingSessionRead:
    return DrinkingSessionRead(
        id=drinking_session.id,
        name=drinking_session.name,
        description=drinking_session.description,
        starts_at=drinking_session.starts_at,
        ends_at=drinking_session.ends_at,
        created_by_id=drinking_session.created_by_id,
        created_at=drinking_session.created_at,
    )


@router.post("/", response_model=DrinkingSessionRead, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: DrinkingSessionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DrinkingSessionRead:
    created = DrinkingSessionRepository(db).create(
        DrinkingSession(
            id=None,
            name=payload.name,
            description=payload.description,
            starts_at=payload.starts_at,
            ends_at=payload.ends_at,
            created_by_id=current_user.id,
            created_at=now_in_app_timezone(),
        )
    )
    return _session_to_schema(created)


@router.get("/", response_model=list[DrinkingSessionRead])
def list_sessions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[DrinkingSessionRead]:
    return [_session_to_schema(s) for s in DrinkingSessionRepository(db).list_recent()]


@router.get("/{session_id}", response_model=DrinkingSessionRead)
def get_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DrinkingSessionRead:
    drinking_session = DrinkingSessionRepository(db).get(session_id)
    if drinking_session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return _session_to_schema(drinking_session)
