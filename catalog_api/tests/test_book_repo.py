"""
Repository tests: the SQL helpers in book_repo.py against the temp DB.
"""

import pytest
from catalog_api.db import get_conn
from catalog_api.repository import book_repo


class TestBookRepo:

    def _insert(self, conn, title="T", author="A", year=2000, isbn=None, available=1):
        return book_repo.insert_book(conn, title, author, year, isbn, available)

    def test_insert_and_get(self):
        with get_conn() as conn:
            book_id = self._insert(conn, isbn="978-0")
            row = book_repo.get_book(conn, book_id)
            assert row is not None
            assert row["title"] == "T"
            assert row["publication_year"] == 2000
            assert row["isbn"] == "978-0"
            assert row["available"] == 1

    def test_get_accepts_text_id(self):
        with get_conn() as conn:
            book_id = self._insert(conn)
            assert book_repo.get_book(conn, str(book_id)) is not None
            assert book_repo.get_book(conn, book_id + 1000) is None

    def test_list_orders_by_id_desc(self):
        with get_conn() as conn:
            ids = [self._insert(conn, title=f"T{i}") for i in range(3)]
            rows = book_repo.list_books(conn)
            assert [r["id"] for r in rows] == sorted(ids, reverse=True)

    def test_list_author_filter_is_literal_substring(self):
        with get_conn() as conn:
            self._insert(conn, author="Maria Ramos")
            self._insert(conn, author="100% Anon")
            self._insert(conn, author="Jose")
            assert [r["author"] for r in book_repo.list_books(conn, "ramo")] == ["Maria Ramos"]
            assert [r["author"] for r in book_repo.list_books(conn, "%")] == ["100% Anon"]
            assert book_repo.list_books(conn, "_") == []
            assert len(book_repo.list_books(conn, "o")) == 3

    def test_update_touches_only_given_columns(self):
        with get_conn() as conn:
            book_id = self._insert(conn, title="Old", isbn="x")
            n = book_repo.update_book_fields(conn, book_id, [("title", "New"), ("available", 0)])
            assert n == 1
            row = book_repo.get_book(conn, book_id)
            assert row["title"] == "New"
            assert row["available"] == 0
            assert row["isbn"] == "x"
            assert row["author"] == "A"

    def test_update_without_assignments_is_noop(self):
        with get_conn() as conn:
            book_id = self._insert(conn)
            assert book_repo.update_book_fields(conn, book_id, []) == 0

    def test_update_rejects_unknown_column(self):
        with get_conn() as conn:
            book_id = self._insert(conn)
            with pytest.raises(ValueError):
                book_repo.update_book_fields(conn, book_id, [("id", 99)])

    def test_delete_reports_affected_rows(self):
        with get_conn() as conn:
            book_id = self._insert(conn)
            assert book_repo.delete_book(conn, book_id) == 1
            assert book_repo.delete_book(conn, book_id) == 0
            assert book_repo.get_book(conn, book_id) is None
