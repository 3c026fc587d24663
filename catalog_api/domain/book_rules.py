"""Pure rules for catalog entries: validation, update selection and the
conversion between stored rows and the public entry shape.

Nothing here touches the database, so services and tests can call these
functions directly.
"""
from __future__ import annotations

from typing import Any, Mapping

# Payload key -> column, in the order columns appear in an UPDATE.
ALLOWED_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("author", "author"),
    ("publicationYear", "publication_year"),
    ("isbn", "isbn"),
    ("available", "available"),
)

_COLUMN_TO_KEY = {col: key for key, col in ALLOWED_FIELDS}

# SQLite INTEGER is a signed 64-bit value
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def _is_int(value: Any) -> bool:
    # bool is a subclass of int but a JSON true/false is not a year
    return isinstance(value, int) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_book(payload: Mapping[str, Any], is_update: bool = False) -> list[str]:
    """Return the validation messages for a create or update payload.

    An empty list means the payload is acceptable. Message order is stable:
    required fields (create only: title, author, publicationYear), then the
    type checks for publicationYear and available, then the text checks.
    """
    errors: list[str] = []
    missing: set[str] = set()

    if not is_update:
        for key in ("title", "author"):
            if _is_blank(payload.get(key)):
                errors.append(f"field '{key}' is required")
                missing.add(key)
        if payload.get("publicationYear") is None:
            errors.append("field 'publicationYear' is required")

    if "publicationYear" in payload and not _is_int(payload["publicationYear"]):
        errors.append("field 'publicationYear' must be an integer")

    if "available" in payload and not isinstance(payload["available"], bool):
        errors.append("field 'available' must be a boolean (true/false)")

    for key in ("title", "author"):
        if key in payload and key not in missing:
            value = payload[key]
            if not isinstance(value, str) or not value.strip():
                errors.append(f"field '{key}' must be a non-empty string")

    if "isbn" in payload and payload["isbn"] is not None and not isinstance(payload["isbn"], str):
        errors.append("field 'isbn' must be a string or null")

    year = payload.get("publicationYear")
    if _is_int(year) and not fits_int64(year):
        errors.append("field 'publicationYear' is out of range")

    return errors


def with_create_defaults(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Allow-listed fields of a create payload with isbn/available defaulted."""
    return {
        "title": payload["title"],
        "author": payload["author"],
        "publicationYear": payload["publicationYear"],
        "isbn": payload.get("isbn"),
        "available": payload.get("available", True),
    }


def to_store_bool(value: Any) -> int:
    """Write-path conversion for the 0/1 `available` column."""
    return 1 if value else 0


def select_assignments(payload: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Column/value pairs for the allow-listed keys present in ``payload``.

    Presence is a key check, so ``False``, ``0`` and ``None`` are kept.
    Unknown keys never reach the statement.
    """
    out: list[tuple[str, Any]] = []
    for key, column in ALLOWED_FIELDS:
        if key in payload:
            value = payload[key]
            if column == "available":
                value = to_store_bool(value)
            out.append((column, value))
    return out


def normalize_book(row: Mapping[str, Any]) -> dict[str, Any]:
    """Read-path conversion from a stored row to the public entry shape."""
    raw = dict(row)
    out: dict[str, Any] = {"id": raw.get("id")}
    for column, value in raw.items():
        if column == "id":
            continue
        out[_COLUMN_TO_KEY.get(column, column)] = value
    out["available"] = bool(raw.get("available"))
    return out
