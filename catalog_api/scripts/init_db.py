"""
Create the catalog schema and optionally load entries from a CSV file.

Rows go through the normal create operation, so the same validation and
defaults apply as for POST /api/books. Rejected rows are reported, not fatal.

Usage:
  python -m catalog_api.scripts.init_db [--db catalog.db] [--seed seeds/books.csv]

CSV columns: title, author, publication_year, isbn (optional), available (optional)
"""
from __future__ import annotations

import argparse
import csv
import os
from typing import Any

from catalog_api.errors import StoreError, ValidationError
from catalog_api.logs import LogContext, ensure_log_schema
from catalog_api.services.book_svc import create_book, ensure_book_schema

_TRUE = {"1", "true", "yes", "y"}
_FALSE = {"0", "false", "no", "n"}


def _row_to_payload(row: dict[str, str]) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": (row.get("title") or "").strip(),
        "author": (row.get("author") or "").strip(),
    }
    year = (row.get("publication_year") or "").strip()
    if year:
        # keep the raw text when it is not a number so validation reports it
        try:
            payload["publicationYear"] = int(year)
        except ValueError:
            payload["publicationYear"] = year
    isbn = (row.get("isbn") or "").strip()
    if isbn:
        payload["isbn"] = isbn
    avail = (row.get("available") or "").strip().lower()
    if avail in _TRUE:
        payload["available"] = True
    elif avail in _FALSE:
        payload["available"] = False
    elif avail:
        payload["available"] = avail
    return payload


def seed_books(csv_path: str) -> dict[str, Any]:
    ok, fail, errs = 0, 0, []
    log = LogContext("SEED_BOOKS", user="script")
    log.set_payload({"csv": csv_path})
    try:
        with open(csv_path, "r", encoding="utf-8", newline="") as f:
            for i, row in enumerate(csv.DictReader(f)):
                try:
                    create_book(_row_to_payload(row))
                    ok += 1
                except ValidationError as e:
                    fail += 1
                    errs.append({"line": i + 2, "errors": e.errors})
    except StoreError as e:
        log.set_after({"ok": ok, "fail": fail})
        log.write("ERROR", str(e))
        raise
    log.set_after({"ok": ok, "fail": fail})
    log.write("OK")
    return {"ok": ok, "fail": fail, "errors": errs}


def main(argv: list[str] | None = None):
    ap = argparse.ArgumentParser(description="Initialize the book catalog database")
    ap.add_argument("--db", help="database path (overrides CATALOG_DB_PATH / config.yaml)")
    ap.add_argument("--seed", help="CSV file with books to load")
    args = ap.parse_args(argv)

    if args.db:
        os.environ["CATALOG_DB_PATH"] = args.db

    ensure_log_schema()
    ensure_book_schema()
    res: dict[str, Any] = {"message": "ok"}
    if args.seed:
        res.update(seed_books(args.seed))
    print(res)
    return res


if __name__ == "__main__":
    main()
