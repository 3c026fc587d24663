from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .. import APP_NAME, __version__
from ..db import get_conn

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health():
    try:
        with get_conn() as conn:
            conn.execute("SELECT 1 FROM books LIMIT 1").fetchall()
    except sqlite3.Error:
        logger.exception("health check: book store unavailable")
        return JSONResponse(status_code=503, content={"status": "degraded", "store": "unavailable"})
    return {"status": "ok", "store": "ok"}


@router.get("/version")
def version():
    return {"app": APP_NAME, "version": __version__}
