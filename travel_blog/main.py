"""
Travel Blog API - FastAPI Application

REST layer behind the travel blog front end: per-user article likes,
denormalized like counters and article comments.

Run with:
    uvicorn travel_blog.main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_blog import __version__
from travel_blog.api import router as api_router
from travel_blog.auth import IdentityVerifier
from travel_blog.config import Settings, get_settings
from travel_blog.database import Database
from travel_blog.exceptions import BlogError
from travel_blog.schemas import HealthResponse
from travel_blog.services import ArticleCatalog

# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    settings: Settings = app.state.settings
    db: Database = app.state.db
    logger.info(f"Starting {settings.app_name}...")

    if settings.create_tables:
        logger.info("Creating tables...")
        await db.create_all()

    if settings.articles_seed_path:
        await ArticleCatalog(db).seed_from_file(settings.articles_seed_path)

    yield

    logger.info("Shutting down...")
    await db.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BlogError)
    async def blog_error_handler(request: Request, exc: BlogError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail, "error": exc.error},
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail), "error": "http_error"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Malformed request body", "error": "invalid_input"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions without leaking store internals."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        debug = app.state.settings.debug
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": str(exc) if debug else "Internal server error",
                "error": "internal_error",
            },
        )


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[Database] = None,
    identity: Optional[IdentityVerifier] = None,
) -> FastAPI:
    """Build the application with explicitly constructed store and identity handles."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Article likes, like counters and comments for the travel blog",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db or Database(settings)
    app.state.identity = identity or IdentityVerifier(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> HealthResponse:
        """Check store reachability."""
        healthy = await request.app.state.db.ping()
        return HealthResponse(
            status="healthy" if healthy else "degraded",
            database="healthy" if healthy else "unhealthy",
            version=__version__,
        )

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
