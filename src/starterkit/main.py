from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .auth import get_token_auth_dependency
from .db import create_engine_for, init_db, make_session_factory
from .errors import register_exception_handlers
from .logging_config import configure_logging
from .routers import todos as todos_router
from .schemas import HealthOut
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the worker application.

    Creates the engine and schema for settings.database_url, installs CORS,
    the JSON error envelope handlers, the health route and the todos router.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Starter Kit Worker",
        description="Todo API backed by a relational store through SQLAlchemy.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings

    engine = create_engine_for(settings.database_url)
    init_db(engine)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    allow_all = settings.cors_allow_origins == ["*"] or len(settings.cors_allow_origins) == 0
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        # credentials cannot be combined with a wildcard origin
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/api/health", response_model=HealthOut, summary="Health Check", tags=["health"])
    def health_check() -> HealthOut:
        """
        Health check endpoint. Does not touch the datastore.
        """
        return HealthOut(status="ok", timestamp=datetime.now(timezone.utc))

    auth_dep = get_token_auth_dependency(settings)
    app.include_router(todos_router.router, dependencies=[Depends(auth_dep)])

    logger.info("Worker ready (auth %s)", "enabled" if settings.enable_token_auth else "disabled")
    return app
