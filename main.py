import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rounds.config import get_settings
from rounds.infrastructure.database import engine, initialize_database
from rounds.infrastructure.notifications import ConnectionGroupRegistry
from rounds.interfaces.api.routes import register_routes


def configure_logging(level: str) -> None:
    """Send application logs to stderr at ``level``."""

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the Rounds FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Rounds API", lifespan=lifespan)
    app.state.connection_registry = ConnectionGroupRegistry()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
