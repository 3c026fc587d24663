"""Book catalog API: FastAPI routes over a SQLite `books` table."""

APP_NAME = "catalog-api"
__version__ = "0.1.0"
