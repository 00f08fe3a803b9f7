from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .settings import Settings

_security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# PUBLIC_INTERFACE
def get_token_auth_dependency(settings: Settings):
    """
    Return a FastAPI dependency callable that enforces bearer-token auth only when
    ENABLE_TOKEN_AUTH is enabled in settings. When disabled, the dependency is a no-op.

    Behavior:
    - If settings.enable_token_auth is False (default): returns a dependency that does nothing.
    - If True: validates the Authorization: Bearer header against API_TOKEN.
      If the token is missing or invalid, raises 401 with WWW-Authenticate: Bearer.

    Usage:
        auth_dep = get_token_auth_dependency(settings)
        app.include_router(router, dependencies=[Depends(auth_dep)])
    """
    if not settings.enable_token_auth:
        async def _noop() -> None:  # noqa: D401 - trivial
            """No-op dependency (auth disabled)."""
            return None

        return _noop

    expected: Optional[str] = settings.api_token

    async def _enforce(creds: Optional[HTTPAuthorizationCredentials] = Depends(_security)) -> None:
        """
        Enforce bearer authentication when enabled.

        Raises:
            HTTPException(401) if the token is missing or invalid.
        """
        if creds is None or not creds.credentials:
            raise _unauthorized("Not authenticated")

        if expected is None:
            # auth enabled but API_TOKEN not provided
            raise _unauthorized("Server authentication not configured")

        if not secrets.compare_digest(creds.credentials, expected):
            raise _unauthorized("Invalid authentication credentials")

    return _enforce
