"""FastAPI dependencies shared by the HTML and JSON routers."""

from __future__ import annotations

from fastapi import Request, status

from .errors import (
    CatalogError,
    ConstraintViolationError,
    InvalidSetDataError,
    NotFoundError,
)
from .store import CatalogStore


def get_store(request: Request) -> CatalogStore:
    """Return the store attached to the application at startup."""
    return request.app.state.store


def error_status(exc: CatalogError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, InvalidSetDataError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ConstraintViolationError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR
