from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from ..db import get_conn
from ..domain.book_rules import (
    fits_int64,
    normalize_book,
    select_assignments,
    to_store_bool,
    validate_book,
    with_create_defaults,
)
from ..errors import EmptyUpdateError, NotFoundError, StoreError, ValidationError
from ..logs import LogContext
from ..repository import book_repo

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(op: str) -> Iterator[None]:
    """Turn sqlite3 failures into a generic StoreError, logging the original.

    OverflowError is raised by the driver when an int does not fit a
    SQLite INTEGER; it is a store failure too.
    """
    try:
        yield
    except (sqlite3.Error, OverflowError) as e:
        logger.exception("book store failure during %s", op)
        raise StoreError() from e


def _coerce_id(book_id: Any) -> int:
    # path ids arrive as text; anything that is not an integer cannot match a row
    if isinstance(book_id, bool):
        raise NotFoundError(book_id)
    if isinstance(book_id, int):
        key = book_id
    else:
        try:
            key = int(str(book_id).strip())
        except ValueError:
            raise NotFoundError(book_id) from None
    if not fits_int64(key):
        raise NotFoundError(book_id)
    return key


def ensure_book_schema():
    with _store_errors("ensure_schema"), get_conn() as conn:
        book_repo.ensure_schema(conn)


def create_book(data: Mapping[str, Any], log: Optional[LogContext] = None) -> dict[str, Any]:
    errors = validate_book(data)
    if errors:
        raise ValidationError(errors)

    book = with_create_defaults(data)
    with _store_errors("create"), get_conn() as conn:
        new_id = book_repo.insert_book(
            conn,
            book["title"],
            book["author"],
            book["publicationYear"],
            book["isbn"],
            to_store_bool(book["available"]),
        )
    result = {"id": new_id, **book, "available": bool(book["available"])}
    if log is not None:
        log.set_entity("BOOK", new_id)
        log.set_after(result)
    return result


def list_books(author_filter: Optional[str] = None) -> tuple[int, list[dict[str, Any]]]:
    with _store_errors("list"), get_conn() as conn:
        rows = book_repo.list_books(conn, author_filter or None)
    items = [normalize_book(r) for r in rows]
    return len(items), items


def get_book(book_id: Any) -> dict[str, Any]:
    key = _coerce_id(book_id)
    with _store_errors("get"), get_conn() as conn:
        row = book_repo.get_book(conn, key)
    if row is None:
        raise NotFoundError(book_id)
    return normalize_book(row)


def update_book(book_id: Any, data: Mapping[str, Any], log: Optional[LogContext] = None) -> tuple[dict[str, Any], bool]:
    """Apply a partial update and return ``(entry, changed)``.

    ``changed`` is False when the payload held no updatable field; the
    stored entry is then returned as-is and nothing is written.
    """
    if not data:
        raise EmptyUpdateError()

    errors = validate_book(data, is_update=True)
    if errors:
        raise ValidationError(errors)

    key = _coerce_id(book_id)
    # lookup, write and re-read are separate statements with no transaction
    with _store_errors("update"), get_conn() as conn:
        row = book_repo.get_book(conn, key)
        if row is None:
            raise NotFoundError(book_id)
        before = normalize_book(row)
        if log is not None:
            log.set_entity("BOOK", key)
            log.set_before(before)

        assignments = select_assignments(data)
        if not assignments:
            return before, False

        book_repo.update_book_fields(conn, key, assignments)
        row = book_repo.get_book(conn, key)

    if row is None:
        # deleted between the write and the re-read
        raise NotFoundError(book_id)
    after = normalize_book(row)
    if log is not None:
        log.set_after(after)
    return after, True


def delete_book(book_id: Any, log: Optional[LogContext] = None) -> None:
    key = _coerce_id(book_id)
    with _store_errors("delete"), get_conn() as conn:
        before = book_repo.get_book(conn, key) if log is not None else None
        deleted = book_repo.delete_book(conn, key)
    if deleted == 0:
        raise NotFoundError(book_id)
    if log is not None:
        log.set_entity("BOOK", key)
        if before is not None:
            log.set_before(normalize_book(before))
