# src/mindwell/main.py
"""Main entry point for the MindWell application."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, Response

from mindwell import __version__
from mindwell.api.v1 import (
    ai_chat_router,
    chatbot_router,
    facilities_router,
    letters_router,
    users_router,
    wellness_feed_router,
)
from mindwell.core.settings import settings
from mindwell.db.session import create_tables
from mindwell.services.generative import get_generative_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "
INTERNAL_ERROR_MESSAGE = "An unexpected internal server error occurred."

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Mental wellness API: anonymous letters, chatbot and AI assistant",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(letters_router, prefix="/api/v1")
app.include_router(chatbot_router, prefix="/api/v1")
app.include_router(ai_chat_router, prefix="/api/v1")
app.include_router(facilities_router, prefix="/api/v1")
app.include_router(wellness_feed_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.middleware("http")
async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "REQ: %s %s - %d [%.1fms]",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


def first_error_message(exc: RequestValidationError) -> str:
    """Return a readable message for the first validation failure."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    error = errors[0]
    message = str(error.get("msg", "Invalid request."))
    if message.startswith(VALUE_ERROR_PREFIX):
        return message[len(VALUE_ERROR_PREFIX):]
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = first_error_message(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_MESSAGE},
    )


@app.on_event("startup")
async def on_startup() -> None:
    if settings.auto_create_tables:
        create_tables()
    if not settings.generative_enabled:
        logger.warning("GOOGLE_API_KEY is not set; moderation will reject all submissions")
    logger.info("%s %s started", settings.app_name, __version__)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_generative_client().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "description": "Mental wellness API: anonymous letters, chatbot and AI assistant",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("mindwell.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
