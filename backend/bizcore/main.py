"""FastAPI application.

Run with ``uvicorn bizcore.main:create_app --factory``.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .database import build_engine, build_session_factory
from .domain_errors import DomainError
from .problem_details import domain_error_handler
from .relations import build_relation_graph
from .routers import jobfms, tasks, telegram, users

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, session_factory=None) -> FastAPI:
    """Build the app with its own engine, session factory and relation graph."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Production safety checks.
    if settings.ENV.lower() == "production" and any(origin == "*" for origin in settings.cors_origins):
        raise RuntimeError("ALLOWED_ORIGINS must be explicit in production (no wildcard).")

    app = FastAPI(
        title="Back-office data service",
        version="1.0.0",
        description="Attendance bot users, sales pipeline users, task bot and jobFms masters",
    )
    app.state.settings = settings
    if session_factory is None:
        session_factory = build_session_factory(build_engine(settings))
    app.state.session_factory = session_factory
    app.state.relations = build_relation_graph()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"] if settings.ENV.lower() != "production" else ["Content-Type", "X-Telegram-Bot-Api-Secret-Token"],
    )
    app.add_exception_handler(DomainError, domain_error_handler)

    app.include_router(telegram.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(tasks.router, prefix="/api/v1")
    app.include_router(jobfms.router, prefix="/api/v1")

    @app.get("/api/v1/system/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": "1.0.0", "app": settings.APP_NAME}

    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
    return app
