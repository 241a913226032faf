"""
Main FastAPI application.

This is the entry point for the API server:
    uvicorn task_manager.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from task_manager import __version__
from task_manager.core.config import settings
from task_manager.core.logging import configure_logging
from task_manager.db.session import engine
from task_manager.errors import AppError, app_error_handler, request_validation_error_handler
from task_manager.routers import health, task, user

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.
    
    - On startup: configure logging
    - On shutdown: dispose of the database engine's connection pool
    """
    configure_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)
    logger.info("Starting %s...", settings.APP_NAME)
    
    yield
    
    logger.info("Shutting down %s...", settings.APP_NAME)
    await engine.dispose()


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Personal task manager API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(user.router, prefix=settings.API_PREFIX)
app.include_router(task.router, prefix=settings.API_PREFIX)
