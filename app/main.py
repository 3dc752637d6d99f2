# app/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .lego import CatalogStore, api_router, pages_router
from .lego.errors import CatalogError
from .lego.router import templates

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"
NOT_FOUND_MESSAGE = "I'm sorry, we're unable to find what you're looking for."


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: CatalogStore = app.state.store
    try:
        await run_in_threadpool(store.initialize)
    except CatalogError as exc:
        logger.critical("Initialization Error: %s", exc)
        store.close()
        raise
    logger.info("Catalog store initialized")
    try:
        yield
    finally:
        store.close()


def create_app(
    store: Optional[CatalogStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application around ``store``.

    When no store is given one is created from ``settings`` (or from the
    environment). The store is initialized at startup and closed at
    shutdown.
    """
    if store is None:
        store = CatalogStore.from_settings(settings or get_settings())

    app = FastAPI(
        title="LEGO Catalog",
        description="Browse, add and delete LEGO sets grouped by theme.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(pages_router)
    app.include_router(api_router)

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request):
        return templates.TemplateResponse(request, "home.html")

    @app.get("/about", response_class=HTMLResponse)
    def about(request: Request):
        return templates.TemplateResponse(request, "about.html")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.exception_handler(StarletteHTTPException)
    async def not_found_page(request: Request, exc: StarletteHTTPException):
        # JSON clients keep FastAPI's default error body.
        if exc.status_code != 404 or request.url.path.startswith("/api/"):
            return await http_exception_handler(request, exc)
        return templates.TemplateResponse(
            request,
            "404.html",
            {"message": NOT_FOUND_MESSAGE, "status_code": 404},
            status_code=404,
        )

    return app


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings=settings)
    logger.info("Server running at http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
