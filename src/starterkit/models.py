from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in the todos table."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# PUBLIC_INTERFACE
class Todo(Base):
    """
    ORM model for the todos table.

    Fields:
    - id: auto-assigned integer identifier, never changed after insert
    - text: free-text content (trimmed and required on input via schemas)
    - completed: completion flag, false by default
    - created_at: set once on insert
    - updated_at: set on insert and refreshed by every update
    """

    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, text={self.text!r}, completed={self.completed})>"
