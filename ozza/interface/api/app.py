"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ozza.config import Settings
from ozza.interface.api.routes import (
    accounts,
    health,
    invitations,
    invite_tokens,
    issuance,
    users,
)
from ozza.interface.error import register_error_handlers
from ozza.util.di.container import create_container, setup_di
from ozza.util.error import ConfigurationError
from ozza.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container is built when
            omitted

    Raises:
        ConfigurationError: If a non-development environment still uses the
            default JWT secret
    """
    settings = Settings()
    if (
        settings.environment in ("staging", "production")
        and settings.auth.jwt_secret == "CHANGE_ME_IN_PRODUCTION"
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set outside development")

    app_instance = FastAPI(
        title="Ozza API",
        description="Account membership and invitation API for Ozza",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(issuance.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(invite_tokens.router)
    app_instance.include_router(accounts.router)
    app_instance.include_router(users.router)

    return app_instance
