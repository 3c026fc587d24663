from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query
from pydantic import BaseModel

from ..errors import EmptyUpdateError, NotFoundError, StoreError, ValidationError
from ..logs import LogContext
from ..services.book_svc import create_book, delete_book, get_book, list_books, update_book

router = APIRouter()


class BookOut(BaseModel):
    id: int
    title: str
    author: str
    publicationYear: int
    isbn: Optional[str] = None
    available: bool


class BookCreated(BookOut):
    message: str


class BookList(BaseModel):
    total: int
    items: List[BookOut]


class Message(BaseModel):
    message: str


# Bodies are taken as raw JSON objects: the validator must see the client's
# own types ("2020" is not a year), so no pydantic model coerces them first.


def _invalid(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=400, detail={"error": "invalid book data", "details": e.errors})


@router.post("/api/books", status_code=201, response_model=BookCreated)
def api_book_create(body: Optional[Dict[str, Any]] = Body(None)):
    data = body or {}
    log = LogContext("CREATE_BOOK")
    log.set_payload(data)
    try:
        book = create_book(data, log)
        log.write("OK")
        return {**book, "message": "book created"}
    except ValidationError as e:
        log.write("ERROR", "; ".join(e.errors))
        raise _invalid(e)
    except StoreError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail="internal error")


@router.get("/api/books", response_model=BookList)
def api_book_list(author: Optional[str] = Query(None, description="substring of the author name")):
    try:
        total, items = list_books(author)
    except StoreError:
        raise HTTPException(status_code=500, detail="internal error")
    return {"total": total, "items": items}


@router.get("/api/books/{book_id}", response_model=BookOut)
def api_book_get(book_id: str):
    try:
        return get_book(book_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail="internal error")


@router.put("/api/books/{book_id}")
def api_book_update(book_id: str, body: Optional[Dict[str, Any]] = Body(None)):
    data = body or {}
    log = LogContext("UPDATE_BOOK")
    log.set_payload(data)
    try:
        book, changed = update_book(book_id, data, log)
        log.write("OK" if changed else "NOOP")
        if not changed:
            return book
        return {**book, "message": "book updated"}
    except EmptyUpdateError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        log.write("ERROR", "; ".join(e.errors))
        raise _invalid(e)
    except NotFoundError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail="internal error")


@router.delete("/api/books/{book_id}", response_model=Message)
def api_book_delete(book_id: str):
    log = LogContext("DELETE_BOOK")
    log.set_payload({"id": book_id})
    try:
        delete_book(book_id, log)
        log.write("OK")
        return {"message": "book deleted"}
    except NotFoundError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail="internal error")
