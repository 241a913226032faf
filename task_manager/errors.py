"""Structured error helpers for API responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

INVALID_JSON_MESSAGE = "The request body must be valid JSON."


def build_error_payload(message: str, errors: Optional[Dict[str, List[str]]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        payload["errors"] = errors
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        self.errors = errors

    @property
    def payload(self) -> Dict[str, Any]:
        return build_error_payload(self.message, self.errors)


class ValidationFailed(AppError):
    """One or more task fields failed validation. Nothing was written."""

    status_code = 422
    message = "Validation failed"

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__(errors=errors)


class TaskNotFound(AppError):
    """The task does not exist or belongs to someone else (indistinguishable)."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Task not found"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthenticated."


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content=exc.payload, headers=headers)


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI's own request validation into the same 422 envelope."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            errors.setdefault("body", []).append(INVALID_JSON_MESSAGE)
            continue
        loc = [part for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        # a bare offset into the body is not a field name
        field = str(loc[0]) if loc and isinstance(loc[0], str) else "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=422,
        content=build_error_payload(ValidationFailed.message, errors),
    )
