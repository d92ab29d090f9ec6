from fastapi import FastAPI

from .auth import router as auth_router
from .comments import mentions_router
from .comments import router as comments_router
from .notifications import hub_router
from .notifications import router as notifications_router
from .sessions import router as sessions_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(sessions_router)
    app.include_router(comments_router)
    app.include_router(mentions_router)
    app.include_router(notifications_router)
    app.include_router(hub_router)
