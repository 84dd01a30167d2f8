from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import Settings, get_settings
from .database import Storage
from .exceptions import ShelfError
from .routers import (
    auth, books, journals, notes, quick_notes, reading_goals, tasks, vision_boards,
    writing_projects,
)
from .schemas import utc_now

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    storage = Storage.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage.initialize()
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="API for books, journals, writing, planning and vision boards",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
        max_age=3600
    )

    @app.exception_handler(ShelfError)
    async def shelf_error_handler(request: Request, exc: ShelfError):
        logger.info(f"{request.method} {request.url.path} rejected ({exc.kind}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    for module in (
        auth, books, journals, writing_projects, tasks, notes, quick_notes, reading_goals,
        vision_boards,
    ):
        app.include_router(module.router, prefix=settings.API_V1_STR)

    @app.get("/")
    async def root():
        return {"message": "Welcome to Shelf API"}

    @app.get("/health")
    async def health():
        return {"status": "OK", "timestamp": utc_now().isoformat()}

    return app


app = create_app()
