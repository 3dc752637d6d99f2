"""
HTML routes for the LEGO catalog.

Pages under /lego:
- GET  /sets               : all sets, or sets whose theme matches ?theme=
- GET  /sets/{set_num}     : one set
- GET  /addSet             : form for a new set
- POST /addSet             : create the set, then redirect to /sets
- GET  /deleteSet/{set_num}: delete the set, then redirect to /sets
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .dependencies import error_status, get_store
from .errors import CatalogError
from .store import CatalogStore

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

router = APIRouter(prefix="/lego", tags=["lego"])


def render_error(request: Request, exc: CatalogError) -> HTMLResponse:
    """Render the 404 page for missing records and the error page otherwise."""
    code = error_status(exc)
    name = "404.html" if code == status.HTTP_404_NOT_FOUND else "error.html"
    return templates.TemplateResponse(
        request,
        name,
        {"message": exc.message, "status_code": code},
        status_code=code,
    )


@router.get("/sets", response_class=HTMLResponse)
def list_sets(
    request: Request,
    theme: Optional[str] = Query(default=None, description="Filter by theme name"),
    store: CatalogStore = Depends(get_store),
):
    try:
        themes = store.list_themes()
        if theme:
            sets = store.find_sets_by_theme(theme)
        else:
            sets = store.list_sets()
    except CatalogError as exc:
        logger.error("Listing sets failed: %s", exc)
        return render_error(request, exc)
    return templates.TemplateResponse(
        request, "sets.html", {"sets": sets, "themes": themes, "theme": theme or ""}
    )


@router.get("/sets/{set_num}", response_class=HTMLResponse)
def show_set(request: Request, set_num: str, store: CatalogStore = Depends(get_store)):
    try:
        lego_set = store.get_set_by_num(set_num)
    except CatalogError as exc:
        logger.error("Loading set %s failed: %s", set_num, exc)
        return render_error(request, exc)
    return templates.TemplateResponse(request, "set.html", {"set": lego_set})


@router.get("/addSet", response_class=HTMLResponse)
def add_set_form(request: Request, store: CatalogStore = Depends(get_store)):
    try:
        themes = store.list_themes()
    except CatalogError as exc:
        logger.error("Loading themes failed: %s", exc)
        return render_error(request, exc)
    return templates.TemplateResponse(request, "add_set.html", {"themes": themes})


@router.post("/addSet")
def add_set(
    request: Request,
    set_num: Optional[str] = Form(default=None),
    name: Optional[str] = Form(default=None),
    year: Optional[str] = Form(default=None),
    num_parts: Optional[str] = Form(default=None),
    theme_id: Optional[str] = Form(default=None),
    img_url: Optional[str] = Form(default=None),
    store: CatalogStore = Depends(get_store),
):
    data = {
        "set_num": set_num,
        "name": name,
        "year": year,
        "num_parts": num_parts,
        "theme_id": theme_id,
        "img_url": img_url,
    }
    try:
        store.create_set(data)
    except CatalogError as exc:
        logger.error("Add Set Error: %s", exc)
        return render_error(request, exc)
    return RedirectResponse("/lego/sets", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/deleteSet/{set_num}")
def delete_set(request: Request, set_num: str, store: CatalogStore = Depends(get_store)):
    try:
        store.delete_set_by_num(set_num)
    except CatalogError as exc:
        logger.error("Deleting set %s failed: %s", set_num, exc)
        return render_error(request, exc)
    return RedirectResponse("/lego/sets", status_code=status.HTTP_303_SEE_OTHER)
