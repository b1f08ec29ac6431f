"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flow.config import PLACEHOLDER_SECRET, Settings
from flow.interface.api.errors import register_error_handlers
from flow.interface.api.routes import (
    auth,
    comments,
    health,
    services,
    targets,
    users,
    votes,
)
from flow.util.di.container import create_container, setup_di
from flow.util.error import ConfigurationError
from flow.util.observability import instrument_fastapi


def check_production_secrets(settings: Settings) -> None:
    """Refuse to run production with placeholder or shared token secrets.

    Raises:
        ConfigurationError: If a secret is unset or both secrets are equal
    """
    if not settings.is_production:
        return

    auth_settings = settings.auth
    if PLACEHOLDER_SECRET in (
        auth_settings.access_token_secret + auth_settings.refresh_token_secret
    ):
        raise ConfigurationError(
            "AUTH__ACCESS_TOKEN_SECRET and AUTH__REFRESH_TOKEN_SECRET must be set in production"
        )
    if auth_settings.access_token_secret == auth_settings.refresh_token_secret:
        raise ConfigurationError("Access and refresh token secrets must differ")


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this (scripts/start_app.py
    does so in production).

    Args:
        container: DI container; tests pass one with in-memory persistence.
            Defaults to the production container.
    """
    settings = Settings()
    check_production_secrets(settings)

    app_instance = FastAPI(
        title="Service Flow API",
        description="Backend API for Service Flow - feedback, issue and bug tracking between users and services",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(users.router)
    app_instance.include_router(services.router)
    app_instance.include_router(votes.router)
    for router in (
        targets.feedback_router,
        targets.issue_router,
        targets.bug_router,
        votes.feedback_vote_router,
        votes.issue_vote_router,
        comments.feedback_comment_router,
        comments.issue_comment_router,
        comments.bug_comment_router,
    ):
        app_instance.include_router(router)
    app_instance.include_router(comments.router)

    return app_instance


# Instance for uvicorn; logfire must be configured before import
app = create_app()
