"""Endpoints for session comments and the mentions they carry."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from rounds.application.services import MentionService, NotificationService
from rounds.application.use_cases.comments import (
    CommentNotFoundError,
    CommentPermissionError,
    SessionNotFoundError,
    create_comment,
    delete_comment,
    update_comment,
)
from rounds.domain.entities import CommentMention, SessionComment, User
from rounds.infrastructure.database import get_db
from rounds.infrastructure.repositories import (
    CommentMentionRepository,
    SessionCommentRepository,
)
from rounds.interfaces.api.dependencies import (
    get_current_active_user,
    get_mention_service,
    get_notification_service,
)
from rounds.interfaces.api.schemas import (
    CommentCreate,
    CommentMentionRead,
    CommentRead,
    CommentUpdate,
)

router = APIRouter(prefix="/session-comments", tags=["session-comments"])
mentions_router = APIRouter(prefix="/mentions", tags=["mentions"])


def _mention_to_schema(mention: CommentMention) -> CommentMentionRead:
    return CommentMentionRead(
        id=mention.id,
        comment_id=mention.comment_id,
        mentioned_user_id=mention.mentioned_user_id,
        mentioned_username=mention.mentioned_username,
        start_position=mention.start_position,
        length=mention.length,
        created_at=mention.created_at,
    )


def _comment_to_schema(comment: SessionComment) -> CommentRead:
    return CommentRead(
        id=comment.id,
        session_id=comment.session_id,
        user_id=comment.user_id,
        content=comment.content,
        created_by_id=comment.created_by_id,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        mentions=[_mention_to_schema(mention) for mention in comment.mentions],
    )


def _not_found(exc: LookupError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _forbidden(exc: PermissionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))


@router.get("/session/{session_id}", response_model=list[CommentRead])
def list_comments_for_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[CommentRead]:
    comments = SessionCommentRepository(db).list_for_session(session_id)
    return [_comment_to_schema(comment) for comment in comments]


@router.get("/{comment_id}", response_model=CommentRead)
def get_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CommentRead:
    comment = SessionCommentRepository(db).get(comment_id)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return _comment_to_schema(comment)


@router.post("/", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def post_comment(
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    mention_service: MentionService = Depends(get_mention_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> CommentRead:
    """Post a comment; ``@username`` tokens become mentions and notifications."""

    try:
        comment = await create_comment(
            db,
            mention_service=mention_service,
            notification_service=notification_service,
            session_id=payload.session_id,
            author=current_user,
            content=payload.content,
        )
    except SessionNotFoundError as exc:
        raise _not_found(exc) from exc
    return _comment_to_schema(comment)


@router.put("/{comment_id}", response_model=CommentRead)
async def edit_comment(
    comment_id: str,
    payload: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    mention_service: MentionService = Depends(get_mention_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> CommentRead:
    try:
        comment = await update_comment(
            db,
            mention_service=mention_service,
            notification_service=notification_service,
            comment_id=comment_id,
            editor=current_user,
            content=payload.content,
        )
    except CommentNotFoundError as exc:
        raise _not_found(exc) from exc
    except CommentPermissionError as exc:
        raise _forbidden(exc) from exc
    return _comment_to_schema(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    try:
        delete_comment(db, comment_id=comment_id, user=current_user)
    except CommentNotFoundError as exc:
        raise _not_found(exc) from exc
    except CommentPermissionError as exc:
        raise _forbidden(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@mentions_router.get("/me", response_model=list[CommentMentionRead])
def list_my_mentions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[CommentMentionRead]:
    """Return the mentions of the authenticated user, newest first."""

    mentions = CommentMentionRepository(db).list_for_user(current_user.id)
    return [_mention_to_schema(mention) for mention in mentions]
