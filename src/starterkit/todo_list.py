from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .client import ApiClient, ApiError

logger = logging.getLogger(__name__)

TodoRecord = Dict[str, Any]


# PUBLIC_INTERFACE
class TodoList:
    """
    Client-side todo list state.

    Loads the list once, sends create/update/delete calls through an ApiClient
    and reconciles the local list with the record the server returns. On an
    API failure the local list is left untouched, the message is kept in
    `error` and the ApiError is re-raised.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._items: List[TodoRecord] = []
        self.loaded = False
        self.error: Optional[str] = None

    @property
    def items(self) -> List[TodoRecord]:
        return [dict(t) for t in self._items]

    @property
    def remaining(self) -> int:
        return sum(1 for t in self._items if not t["completed"])

    def get(self, todo_id: int) -> Optional[TodoRecord]:
        idx = self._index(todo_id)
        return None if idx is None else dict(self._items[idx])

    def _index(self, todo_id: int) -> Optional[int]:
        for i, t in enumerate(self._items):
            if t["id"] == todo_id:
                return i
        return None

    def _call(self, action: str, fn, *args):
        try:
            result = fn(*args)
        except ApiError as e:
            logger.error("Failed to %s: %s", action, e)
            self.error = str(e)
            raise
        self.error = None
        return result

    def _replace(self, record: TodoRecord) -> None:
        idx = self._index(record["id"])
        if idx is None:
            self._items.append(record)
        else:
            self._items[idx] = record

    def load(self, force: bool = False) -> List[TodoRecord]:
        """Fetch the list from the server; only the first call hits the network unless force is set."""
        if self.loaded and not force:
            return self.items
        self._items = list(self._call("load todos", self._client.list_todos))
        self.loaded = True
        return self.items

    def add(self, text: str) -> TodoRecord:
        if not text or not text.strip():
            raise ValueError("Text is required")
        created = self._call("create todo", self._client.create_todo, text.strip())
        self._items.append(created)
        return dict(created)

    def toggle(self, todo_id: int) -> TodoRecord:
        current = self.get(todo_id)
        if current is None:
            raise KeyError(todo_id)
        updated = self._call(
            "update todo", lambda: self._client.update_todo(todo_id, completed=not current["completed"])
        )
        self._replace(updated)
        return dict(updated)

    def edit(self, todo_id: int, text: str) -> TodoRecord:
        if not text or not text.strip():
            raise ValueError("Text is required")
        if self._index(todo_id) is None:
            raise KeyError(todo_id)
        updated = self._call("update todo", lambda: self._client.update_todo(todo_id, text=text.strip()))
        self._replace(updated)
        return dict(updated)

    def remove(self, todo_id: int) -> None:
        self._call("delete todo", self._client.delete_todo, todo_id)
        self._items = [t for t in self._items if t["id"] != todo_id]
