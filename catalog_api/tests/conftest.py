import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "catalog_test.db"
    # Point the app to this temp DB
    os.environ["CATALOG_DB_PATH"] = str(path)
    from catalog_api.logs import ensure_log_schema
    from catalog_api.services.book_svc import ensure_book_schema
    ensure_log_schema()
    ensure_book_schema()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    # Import app after DB ready so startup hooks can use it
    from catalog_api.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("CATALOG_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("books", "operation_log"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def make_book(tmp_db_path):
    from catalog_api.services.book_svc import create_book

    def _make(**overrides):
        payload = {"title": "Dom Casmurro", "author": "Machado de Assis", "publicationYear": 1899}
        payload.update(overrides)
        return create_book(payload)

    return _make
