from __future__ import annotations

import logging
import os
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def create_engine_for(database_url: str) -> Engine:
    """
    Build a SQLAlchemy engine for the given connection string.

    For file-backed SQLite databases the parent directory is created first, and
    the connection is allowed to cross threads since FastAPI runs sync handlers
    in a worker thread pool.
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            os.makedirs(os.path.dirname(url.database) or ".", exist_ok=True)
    logger.debug("Creating engine for %s", url.render_as_string(hide_password=True))
    return create_engine(url, connect_args=connect_args)


# PUBLIC_INTERFACE
def init_db(engine: Engine) -> None:
    """Create the todos table if it does not exist yet."""
    Base.metadata.create_all(bind=engine)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


# PUBLIC_INTERFACE
def get_session(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one short-lived session per request.

    The session factory lives on app.state and is installed by create_app.
    """
    session: Session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
