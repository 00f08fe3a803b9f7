from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_session
from ..repositories import TodoRepository
from ..schemas import MessageOut, TodoCreate, TodoOut, TodoUpdate

logger = logging.getLogger(__name__)

TODO_NOT_FOUND = "Todo not found"

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)


def _get_repo(session: Session = Depends(get_session)) -> TodoRepository:
    """
    Dependency wrapper building a repository over the request's session.
    """
    return TodoRepository(session)


def _failure(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TODO_NOT_FOUND)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo, oldest first. Optionally filter by completion status.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"description": "Datastore failure"},
    },
)
def list_todos(
    completed: Optional[bool] = Query(None, description="Filter by completion status"),
    repo: TodoRepository = Depends(_get_repo),
) -> List[TodoOut]:
    try:
        items = repo.list(completed=completed)
    except SQLAlchemyError:
        logger.exception("Error fetching todos")
        raise _failure("Failed to fetch todos")
    return [TodoOut.model_validate(it) for it in items]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Text is missing or blank"},
        500: {"description": "Datastore failure"},
    },
)
def create_todo(payload: TodoCreate, repo: TodoRepository = Depends(_get_repo)) -> TodoOut:
    """
    Create a new Todo. The id and both timestamps are assigned by the server.
    """
    try:
        created = repo.create(payload)
    except SQLAlchemyError:
        logger.exception("Error creating todo")
        raise _failure("Failed to create todo")
    logger.info("Created todo %s", created.id)
    return TodoOut.model_validate(created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Update the text and/or completion flag of a Todo item. Omitted fields are left unchanged.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Invalid body"},
        404: {"description": "Todo not found"},
        500: {"description": "Datastore failure"},
    },
)
def update_todo(todo_id: int, payload: TodoUpdate, repo: TodoRepository = Depends(_get_repo)) -> TodoOut:
    try:
        updated = repo.update(todo_id, payload)
    except SQLAlchemyError:
        logger.exception("Error updating todo %s", todo_id)
        raise _failure("Failed to update todo")
    if updated is None:
        raise _not_found()
    logger.info("Updated todo %s", todo_id)
    return TodoOut.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=MessageOut,
    summary="Delete Todo",
    description="Delete a Todo item by ID. Deletion is unconditional and irreversible.",
    responses={
        200: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
        500: {"description": "Datastore failure"},
    },
)
def delete_todo(todo_id: int, repo: TodoRepository = Depends(_get_repo)) -> MessageOut:
    try:
        ok = repo.delete(todo_id)
    except SQLAlchemyError:
        logger.exception("Error deleting todo %s", todo_id)
        raise _failure("Failed to delete todo")
    if not ok:
        raise _not_found()
    logger.info("Deleted todo %s", todo_id)
    return MessageOut(message="Todo deleted successfully")
