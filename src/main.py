from __future__ import annotations

import logging

from fastapi import FastAPI, Query

from src.application.dtos.common_dto import HealthResponse, RootResponse
from src.application.navigation import NavigationChannel
from src.infrastructure.api.middlewares import add_default_middlewares
from src.infrastructure.api.routes.auth_routes import router as auth_router
from src.infrastructure.api.routes.dashboard_routes import router as dashboard_router
from src.infrastructure.api.routes.event_routes import router as event_router
from src.infrastructure.api.routes.navigation_routes import router as navigation_router
from src.infrastructure.api.routes.onboarding_routes import router as onboarding_router
from src.infrastructure.api.routes.profile_routes import router as profile_router
from src.infrastructure.config import settings
from src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="""
        ## Jamboree Backend API

        Data and page-state layer for Jamboree, a scheduling app for musicians.
        Supabase provides auth, tables and storage.

        ### Features
        - **Profiles**: public profiles with instrument and genre glyphs
        - **Profile pages**: loading / error / not found / profile state plus
          the navigation chrome for the viewer's viewport
        - **Onboarding**: avatar upload and one-shot profile completion
        - **Events**: creation, participant cards, going / maybe participation
        - **Dashboard**: protected area; signed-out visitors are sent to `/`

        All times are displayed in Pacific Time.

        ### Authentication
        Protected endpoints take a Supabase access token:
        ```
        Authorization: Bearer your-jwt-token
        ```
        The dashboard also accepts the `sb-access-token` cookie.
        """,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )
    app.state.navigation_channel = NavigationChannel()
    add_default_middlewares(app)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Basic service information. `?event=<id>` echoes the event the main page should open.",
    )
    def root(event: str | None = Query(None, description="Event to open")):
        """Get API root information."""
        return {"status": "ok", "service": "jamboree-backend", "version": app.version, "event": event}

    @app.get("/health", response_model=HealthResponse, summary="Health Check")
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(onboarding_router)
    app.include_router(event_router)
    app.include_router(navigation_router)
    app.include_router(dashboard_router)
    logger.info("%s %s ready (env=%s)", settings.app_name, settings.version, settings.env)
    return app


app = create_app()
