from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_DATABASE_URL = "sqlite:///./data/todos.db"
DEFAULT_API_URL = "http://localhost:8787"
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DATABASE_URL: SQLAlchemy connection string. Default 'sqlite:///./data/todos.db'
    - API_URL: base URL the API client talks to. Default 'http://localhost:8787'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins, or '*'
    - ENABLE_TOKEN_AUTH: 'true' to require a bearer token on the todos API (default: false)
    - API_TOKEN: expected bearer token (required when ENABLE_TOKEN_AUTH=true)
    - LOG_LEVEL: root log level for the worker. Default 'INFO'
    """

    database_url: str = DEFAULT_DATABASE_URL
    api_url: str = DEFAULT_API_URL
    cors_allow_origins: List[str] = field(default_factory=lambda: _parse_origins(DEFAULT_CORS_ORIGINS))
    enable_token_auth: bool = False
    api_token: Optional[str] = None
    log_level: str = "INFO"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    enable_token_auth = _parse_bool(_get_env("ENABLE_TOKEN_AUTH", "false"), False)
    api_token = (os.getenv("API_TOKEN") or None) if enable_token_auth else None

    return Settings(
        database_url=_get_env("DATABASE_URL", DEFAULT_DATABASE_URL).strip(),
        api_url=_get_env("API_URL", DEFAULT_API_URL).strip().rstrip("/"),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)),
        enable_token_auth=enable_token_auth,
        api_token=api_token,
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
