"""
FastAPI app entry point aggregating per-domain routers under catalog_api/routes.
Run with `uvicorn catalog_api.api:app`.
"""
from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import APP_NAME, __version__
from .logs import ensure_log_schema
from .services.book_svc import ensure_book_schema

logger = logging.getLogger(__name__)

_DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def _cors_origins() -> list[str]:
    raw = os.environ.get("CATALOG_CORS_ORIGINS")
    if not raw:
        return _DEFAULT_ORIGINS
    return [o.strip() for o in raw.split(",") if o.strip()]


app = FastAPI(title=APP_NAME, version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    ensure_log_schema()
    ensure_book_schema()
    logger.info("%s %s ready", APP_NAME, __version__)


# Include routers (split by business domain)
from .routes import base as base_routes
from .routes import books as books_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(books_routes.router)
app.include_router(logs_routes.router)
