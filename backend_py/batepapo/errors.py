"""Error types raised by the request handlers.

Each class is an ``HTTPException`` carrying its own status code so the
routes can raise them directly and FastAPI renders the usual
``{"detail": ...}`` body.
"""

from __future__ import annotations

from fastapi import HTTPException


class ChatError(HTTPException):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class ValidationError(ChatError):
    status_code = 422
    default_detail = "Invalid request"


class ConflictError(ChatError):
    status_code = 409
    default_detail = "Name already in use"


class NotFoundError(ChatError):
    status_code = 404
    default_detail = "Not found"


class UnauthorizedError(ChatError):
    status_code = 401
    default_detail = "Not allowed"


class StoreError(ChatError):
    status_code = 500
    default_detail = "Storage failure"
