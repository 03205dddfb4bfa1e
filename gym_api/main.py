"""Main FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from gym_api.api.routes import classes, clients, health, trainers
from gym_api.core.config import settings
from gym_api.core.database import create_tables, engine
from gym_api.core.logging_config import setup_logging

setup_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Create missing tables on startup and release the engine on shutdown."""
    if settings.db_auto_create:
        await create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield
    await engine.dispose()
    logger.info("%s stopped", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Trainers, clients and class enrollment for a gym",
    debug=settings.debug,
    docs_url="/api-docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and path parameters as a plain 400."""
    logger.warning("Invalid request to %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request"},
    )


app.include_router(health.router)
app.include_router(trainers.router, prefix=settings.api_prefix)
app.include_router(clients.router, prefix=settings.api_prefix)
app.include_router(classes.router, prefix=settings.api_prefix)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Root endpoint."""
    return "Welcome to the Gym"
