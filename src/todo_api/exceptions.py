from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import status


class ConfigError(Exception):
    """Raised when startup configuration is missing or invalid."""


# PUBLIC_INTERFACE
class TodoApiError(Exception):
    """
    Base class for errors surfaced at the HTTP boundary.

    Each subclass carries the status code the exception handler responds with.
    """

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class StorageError(TodoApiError):
    """Raised when the connection pool or a statement fails."""

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class DecodeError(TodoApiError):
    """Raised when a request body or path parameter cannot be decoded."""

    def __init__(self, detail: Optional[List[Dict[str, Any]]] = None, message: str = "Request decoding failed"):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.detail = detail or []
