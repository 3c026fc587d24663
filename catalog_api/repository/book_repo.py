from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Iterable, Optional

_COLUMNS = "id, title, author, publication_year, isbn, available"
# Columns an UPDATE may touch; anything else is a programming error.
_UPDATABLE = ("title", "author", "publication_year", "isbn", "available")


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS books (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            author TEXT NOT NULL,
            publication_year INTEGER NOT NULL,
            isbn TEXT,
            available INTEGER NOT NULL DEFAULT 1
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_books_author ON books(author)")


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def insert_book(
    conn: Connection,
    title: str,
    author: str,
    publication_year: int,
    isbn: str | None,
    available: int,
) -> int:
    cur = conn.execute(
        "INSERT INTO books(title, author, publication_year, isbn, available) VALUES(?,?,?,?,?)",
        (title, author, publication_year, isbn, available),
    )
    return int(cur.lastrowid)


def list_books(conn: Connection, author_filter: Optional[str] = None):
    sql = f"SELECT {_COLUMNS} FROM books"
    params: list[Any] = []
    if author_filter:
        sql += " WHERE author LIKE ? ESCAPE '\\'"
        params.append(_like_pattern(author_filter))
    sql += " ORDER BY id DESC"
    return conn.execute(sql, params).fetchall()


def get_book(conn: Connection, book_id: Any):
    return conn.execute(f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,)).fetchone()


def update_book_fields(conn: Connection, book_id: Any, assignments: Iterable[tuple[str, Any]]) -> int:
    """UPDATE only the given columns; ``book_id`` is the last parameter."""
    cols: list[str] = []
    values: list[Any] = []
    for column, value in assignments:
        if column not in _UPDATABLE:
            raise ValueError(f"column not updatable: {column}")
        cols.append(f"{column} = ?")
        values.append(value)
    if not cols:
        return 0
    values.append(book_id)
    cur = conn.execute(f"UPDATE books SET {', '.join(cols)} WHERE id = ?", values)
    return cur.rowcount


def delete_book(conn: Connection, book_id: Any) -> int:
    cur = conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
    return cur.rowcount
