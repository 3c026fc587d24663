from __future__ import annotations

from fastapi import APIRouter, Query

from ..logs import search_logs

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
    action: str | None = Query(None, description="e.g. CREATE_BOOK, UPDATE_BOOK, DELETE_BOOK"),
    query: str | None = Query(None, description="substring of the payload or snapshots"),
    ts_from: str | None = Query(None, description="ISO timestamp, inclusive"),
    ts_to: str | None = Query(None, description="ISO timestamp, inclusive"),
):
    """Audit records of catalog mutations, newest first."""
    total, items = search_logs(query, action, ts_from, ts_to, page, size)
    return {"page": page, "size": size, "total": total, "items": items}
