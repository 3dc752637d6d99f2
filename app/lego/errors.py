"""
Error types raised by the catalog store.

Route handlers translate these into HTTP responses; the store never
lets a raw SQLAlchemy exception escape.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error surfaced by ``CatalogStore``."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class StoreConnectionError(CatalogError):
    """The database could not be reached or the schema could not be created."""


class InvalidSetDataError(CatalogError):
    """A required field is missing from the submitted set data."""


class ConstraintViolationError(CatalogError):
    """A write was rejected (duplicate key, bad integer value, ...)."""


class NotFoundError(CatalogError):
    """A lookup, theme search or delete matched no rows."""
