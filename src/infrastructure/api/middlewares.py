from __future__ import annotations

import logging
import os
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from src.infrastructure.config import settings
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter, UserInfo

logger = logging.getLogger(__name__)

PUBLIC_ROOT = "/"


def is_protected(path: str, prefix: str) -> bool:
    """``prefix`` itself and anything below it."""
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def session_token(request: Request) -> str | None:
    token = request.cookies.get(settings.session_cookie)
    if token:
        return token
    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Send signed-out visitors of the protected area back to the public root.

    Signed-in requests pass through untouched apart from
    ``request.state.session_user``. Nothing is cached between requests.
    """

    def __init__(
        self,
        app,
        prefix: str = "/dashboard",
        redirect_to: str = PUBLIC_ROOT,
        auth_factory: Callable[[], SupabaseAuthAdapter] = SupabaseAuthAdapter,
    ) -> None:
        super().__init__(app)
        self.prefix = prefix
        self.redirect_to = redirect_to
        self.auth_factory = auth_factory

    async def dispatch(self, request: Request, call_next):
        if not is_protected(request.url.path, self.prefix):
            return await call_next(request)
        session: UserInfo | None = self.auth_factory().get_session(session_token(request))
        if session is None:
            logger.info("No session for %s, redirecting to %s", request.url.path, self.redirect_to)
            return RedirectResponse(self.redirect_to, status_code=307)
        request.state.session_user = session
        return await call_next(request)


def add_default_middlewares(app: FastAPI) -> None:
    app.add_middleware(SessionGateMiddleware, prefix=settings.protected_prefix)

    # CORS configuration
    env = os.getenv("ENV", settings.env)
    if env in ("development", "staging"):
        allowed_origins = [
            "http://localhost:3000",
            "http://localhost:3001",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:3001",
        ]
    else:
        allowed_origins = [o for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o] or ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
