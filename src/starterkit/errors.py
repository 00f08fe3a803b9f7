from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
_VALUE_ERROR_PREFIX = "Value error, "


# PUBLIC_INTERFACE
def error_envelope(message: str, detail: Optional[Any] = None) -> Dict[str, Any]:
    """
    Build the JSON body shared by every error response.

    Args:
        message: Human readable error message.
        detail: Optional structured detail (validation errors).

    Returns:
        Dict with key 'error', plus 'detail' when given.
    """
    body: Dict[str, Any] = {"error": message}
    if detail is not None:
        body["detail"] = detail
    return body


def _first_validation_message(errors: List[Dict[str, Any]]) -> str:
    if not errors:
        return "Request validation failed"
    msg = str(errors[0].get("msg") or "Request validation failed")
    if msg.startswith(_VALUE_ERROR_PREFIX):
        msg = msg[len(_VALUE_ERROR_PREFIX):]
    return msg


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Map request validation errors to 400.

    Response format:
        {
            "error": "<first validation message>",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(error_envelope(_first_validation_message(errors), errors)),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException (404, 401, handler-raised 500s) in the error envelope."""
    message = exc.detail if isinstance(exc.detail, str) else "Error"
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Not found"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(INTERNAL_ERROR),
    )


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on the application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
