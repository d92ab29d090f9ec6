"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging

from anyio import to_thread
from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from rounds.application.services import NotificationService
from rounds.domain.entities import Notification, User
from rounds.infrastructure.database import SessionLocal, get_db
from rounds.infrastructure.notifications import NotificationHub, serialize_notification
from rounds.infrastructure.repositories import NotificationRepository, UserRepository
from rounds.interfaces.api.dependencies import (
    get_current_active_user,
    get_notification_service,
    resolve_current_user,
)
from rounds.interfaces.api.schemas import (
    MessageResponse,
    NotificationCreate,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
hub_router = APIRouter(prefix="/hubs", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        metadata=notification.metadata,
        read=notification.read,
        created_at=notification.created_at,
    )


def _get_owned_notification(
    repository: NotificationRepository, notification_id: str, user: User
) -> Notification:
    notification = repository.get(notification_id)
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
        )
    if notification.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
    return notification


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = NotificationRepository(db).list_for_user(current_user.id)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread", response_model=list[NotificationRead])
def list_unread_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    notifications = NotificationRepository(db).list_unread_for_user(current_user.id)
    return [_notification_to_schema(notification) for notification in notifications]


@router.put("/read-all", response_model=MessageResponse)
def mark_all_notifications_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    NotificationRepository(db).mark_all_as_read(current_user.id)
    return MessageResponse(message="All notifications marked as read")


@router.get("/{notification_id}", response_model=NotificationRead)
def get_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    repository = NotificationRepository(db)
    return _notification_to_schema(
        _get_owned_notification(repository, notification_id, current_user)
    )


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationRead:
    """Store a notification for ``payload.user_id`` and push it if they are online."""

    recipient = await to_thread.run_sync(UserRepository(db).get, payload.user_id)
    if recipient is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Recipient not found"
        )

    notification = await notification_service.create_and_send(
        payload.user_id,
        payload.type,
        payload.title,
        payload.message,
        payload.metadata,
    )
    return _notification_to_schema(notification)


@router.put("/{notification_id}/read", response_model=MessageResponse)
def mark_notification_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    repository = NotificationRepository(db)
    _get_owned_notification(repository, notification_id, current_user)
    repository.mark_as_read(notification_id)
    return MessageResponse(message="Notification marked as read")


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    repository = NotificationRepository(db)
    _get_owned_notification(repository, notification_id, current_user)
    repository.delete(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _load_subscriber(token: str) -> tuple[User, list[Notification]]:
    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        pending = NotificationRepository(session).list_unread_for_user(user.id)
        return user, list(pending)
    finally:
        session.close()


def _acknowledge(notification_ids: list[str], user_id: str) -> None:
    session = SessionLocal()
    try:
        NotificationRepository(session).mark_many_as_read(notification_ids, user_id=user_id)
    finally:
        session.close()


@hub_router.websocket("/notifications")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user.

    The first frame is always ``init`` with the unread notifications; pushes
    only start after it. A notification stored between that snapshot and the
    socket joining its group is not pushed and is picked up from
    ``GET /notifications/unread``.
    """

    token = websocket.query_params.get("access_token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        user, pending_notifications = await to_thread.run_sync(_load_subscriber, token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    hub = NotificationHub(websocket.app.state.connection_registry)
    connection_id = await hub.on_connected(
        websocket,
        user.id,
        greeting={
            "type": "init",
            "data": [serialize_notification(n) for n in pending_notifications],
        },
    )
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except (KeyError, ValueError):
                # Binary or malformed frames are ignored.
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    await to_thread.run_sync(_acknowledge, [str(i) for i in ids], user.id)
                continue
    except WebSocketDisconnect:
        pass
    finally:
        await hub.on_disconnected(connection_id, user.id)
