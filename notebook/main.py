"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from notebook.api import auth, lists, places, restaurants, upload, users, visits, websocket
from notebook.config import get_settings
from notebook.exceptions import InternalFailure, NotebookError, Unauthenticated
from notebook.services.storage import UPLOADS_MOUNT

logger = logging.getLogger(__name__)
settings = get_settings()

INTERNAL_ERROR_MESSAGE = "Internal Error"


def setup_logging() -> None:
    """Configure logging once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    setup_logging()
    Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
    logger.info(f"Restaurant Notebook API starting ({settings.environment})")
    yield
    logger.info("Restaurant Notebook API stopped")


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content = {"error": error, "message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Map the exception hierarchy onto JSON error envelopes.

    Internal failures are logged with their context and answered with a
    generic message; store and service error text never reaches the client.
    """

    @app.exception_handler(NotebookError)
    async def handle_notebook_error(request: Request, exc: NotebookError):
        if isinstance(exc, InternalFailure):
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.message} | {exc.context}",
                exc_info=exc.__cause__,
            )
            return _error_response(exc.status_code, exc.error_code, INTERNAL_ERROR_MESSAGE)

        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        details = exc.context if exc.status_code == 400 else None
        return _error_response(exc.status_code, exc.error_code, exc.message, details, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        fields = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        logger.info(f"{request.method} {request.url.path} rejected: {len(fields)} invalid field(s)")
        return _error_response(400, "validation_error", "Invalid request", {"fields": fields})

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error(f"{request.method} {request.url.path} database error: {exc}", exc_info=exc)
        return _error_response(500, "internal_error", INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(f"{request.method} {request.url.path} unexpected error: {exc}", exc_info=exc)
        return _error_response(500, "internal_error", INTERNAL_ERROR_MESSAGE)


app = FastAPI(
    title="Restaurant Notebook API",
    description="Shared restaurant lists, visits and notes for friends",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:3001",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(lists.router)
app.include_router(restaurants.router)
app.include_router(visits.router)
app.include_router(users.router)
app.include_router(upload.router)
app.include_router(places.router)
app.include_router(websocket.router)

app.mount(
    UPLOADS_MOUNT,
    StaticFiles(directory=settings.storage_root, check_dir=False),
    name="uploads",
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
