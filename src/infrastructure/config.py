"""Application-wide settings.

Adapters read their own connection variables (``SUPABASE_*``,
``POSTGRES_*``) where they are used; this module only holds what the app
itself needs at startup. Set the environment before importing it.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class Settings:
    app_name: str = os.getenv("APP_NAME", "Jamboree Backend")
    version: str = os.getenv("APP_VERSION", "0.1.0")
    env: str = os.getenv("ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str | None = os.getenv("LOG_FILE") or None
    # protected area of the site, see SessionGateMiddleware
    protected_prefix: str = os.getenv("PROTECTED_PREFIX", "/dashboard")
    session_cookie: str = os.getenv("SESSION_COOKIE", "sb-access-token")
    max_avatar_bytes: int = int(os.getenv("MAX_AVATAR_BYTES", str(5 * 1024 * 1024)))


settings = Settings()
