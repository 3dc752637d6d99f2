"""
JSON routes for the LEGO catalog.

Endpoints under /api/lego:
- GET    /sets            : list sets, optionally filtered by ?theme=
- GET    /sets/{set_num}  : get one set
- GET    /themes          : list themes
- POST   /sets            : create a set
- DELETE /sets/{set_num}  : delete a set
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from .dependencies import error_status, get_store
from .errors import CatalogError
from .schemas import LegoSet, NewSet, Theme
from .store import CatalogStore

router = APIRouter(prefix="/api/lego", tags=["lego-api"])


def _http_error(exc: CatalogError) -> HTTPException:
    return HTTPException(status_code=error_status(exc), detail=exc.message)


@router.get("/sets", response_model=List[LegoSet])
def list_sets(
    theme: Optional[str] = Query(default=None, description="Case-insensitive theme name filter"),
    store: CatalogStore = Depends(get_store),
) -> List[LegoSet]:
    try:
        if theme:
            return store.find_sets_by_theme(theme)
        return store.list_sets()
    except CatalogError as exc:
        raise _http_error(exc) from exc


@router.get("/sets/{set_num}", response_model=LegoSet)
def get_set(set_num: str, store: CatalogStore = Depends(get_store)) -> LegoSet:
    try:
        return store.get_set_by_num(set_num)
    except CatalogError as exc:
        raise _http_error(exc) from exc


@router.get("/themes", response_model=List[Theme])
def list_themes(store: CatalogStore = Depends(get_store)) -> List[Theme]:
    try:
        return store.list_themes()
    except CatalogError as exc:
        raise _http_error(exc) from exc


@router.post("/sets", status_code=status.HTTP_201_CREATED)
def create_set(new_set: NewSet, store: CatalogStore = Depends(get_store)):
    try:
        store.create_set(new_set.model_dump())
    except CatalogError as exc:
        raise _http_error(exc) from exc
    return {"status": "ok", "set_num": new_set.set_num}


@router.delete("/sets/{set_num}")
def delete_set(set_num: str, store: CatalogStore = Depends(get_store)):
    try:
        store.delete_set_by_num(set_num)
    except CatalogError as exc:
        raise _http_error(exc) from exc
    return {"status": "ok"}
