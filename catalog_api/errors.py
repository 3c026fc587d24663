"""Error taxonomy for catalog operations.

Routes map these onto HTTP status codes; services never let a raw
``sqlite3.Error`` escape, they wrap it in :class:`StoreError`.
"""
from __future__ import annotations

from typing import Any, List


class CatalogError(Exception):
    """Base class for catalog operation failures."""


class ValidationError(CatalogError):
    """Payload rejected by the validator; carries the message list."""

    def __init__(self, errors: List[str]):
        super().__init__("invalid book data")
        self.errors = list(errors)


class EmptyUpdateError(CatalogError):
    """Update called with an empty payload."""

    def __init__(self):
        super().__init__("no update data provided")


class NotFoundError(CatalogError):
    def __init__(self, book_id: Any):
        super().__init__("book not found")
        self.book_id = book_id


class StoreError(CatalogError):
    """Unexpected store or connectivity failure. The message stays generic."""

    def __init__(self, message: str = "internal error"):
        super().__init__(message)
