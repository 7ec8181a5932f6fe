from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.orm import Session

from . import __version__
from .config import LOG_LEVEL
from .routes.api import router as api_router
from .routes.health import router as health_router
from .routes.pages import router as pages_router
from .routes.ui import router as ui_router
from .services.reading_session import ReadingSession
from .services.text_store import TextStore
from .settings import get_settings
from .utils.exceptions import FlashcardServiceError, InvalidInput, WortschatzError

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(session_factory: Optional[Callable[[], Session]] = None) -> FastAPI:
    """Build the application. Without ``session_factory`` the on-disk SQLite DB is used."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.getLogger("wortschatz").setLevel(LOG_LEVEL)

        factory = session_factory
        if factory is None:
            from .db import SessionLocal, init_db

            init_db()
            factory = SessionLocal

        store = TextStore(factory)
        store.load()
        app.state.text_store = store
        app.state.reading_session = ReadingSession(
            store, notification_ttl=get_settings().notification_ttl_sec
        )
        logger.info(f"Loaded {len(store)} saved texts")
        yield

    app = FastAPI(lifespan=lifespan, title="Wortschatz Reader", version=__version__)

    @app.exception_handler(WortschatzError)
    async def wortschatz_error_handler(request: Request, exc: WortschatzError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        if request.url.path == "/api/anki":
            return JSONResponse(status_code=500, content={"error": FlashcardServiceError.public_message})
        if request.url.path == "/api/analyze":
            message = InvalidInput.public_message
        else:
            message = "Invalid request body"
        return JSONResponse(status_code=400, content={"error": message})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(api_router)
    app.include_router(ui_router)
    app.include_router(pages_router)

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


app = create_app()
