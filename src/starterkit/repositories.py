from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Todo, utcnow
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)

# ids are stored in a signed 64-bit INTEGER column
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _storable_id(todo_id: int) -> bool:
    return _MIN_ID <= todo_id <= _MAX_ID


# PUBLIC_INTERFACE
class TodoRepository:
    """
    Todo storage on top of a SQLAlchemy session.

    Each operation runs one statement and commits; the session is owned by the
    caller (one per request).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list(self, completed: Optional[bool] = None) -> List[Todo]:
        """Return all todos, oldest first, optionally filtered by completion flag."""
        stmt = select(Todo).order_by(Todo.created_at, Todo.id)
        if completed is not None:
            stmt = stmt.where(Todo.completed == completed)
        return list(self._session.scalars(stmt))

    def get(self, todo_id: int) -> Optional[Todo]:
        if not _storable_id(todo_id):
            return None
        return self._session.get(Todo, todo_id)

    def create(self, data: TodoCreate) -> Todo:
        now = utcnow()
        todo = Todo(text=data.text, completed=data.completed, created_at=now, updated_at=now)
        self._session.add(todo)
        self._session.commit()
        self._session.refresh(todo)
        return todo

    def update(self, todo_id: int, data: TodoUpdate) -> Optional[Todo]:
        """
        Apply only the fields present in the request and refresh updated_at.
        Return None (and change nothing) when the id is unknown.
        """
        todo = self.get(todo_id)
        if todo is None:
            return None

        for name, value in data.changes().items():
            setattr(todo, name, value)
        # updated_at must strictly advance even if the clock has not moved
        now = utcnow()
        todo.updated_at = max(now, todo.updated_at + _TICK)

        self._session.commit()
        self._session.refresh(todo)
        return todo

    def delete(self, todo_id: int) -> bool:
        todo = self.get(todo_id)
        if todo is None:
            return False
        self._session.delete(todo)
        self._session.commit()
        return True
