"""
Subscription Service - FastAPI Application
CRUD API over user subscriptions with a price total per period
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from app.database import init_db
from app.config import settings
from app.core.logging import configure_logging
from app.api.routes import health, subscriptions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    configure_logging(settings.log_level)
    logger.info("Starting %s...", settings.app_name)

    if settings.db_auto_create:
        try:
            init_db()
            logger.info("Database initialized")
        except SQLAlchemyError as e:
            logger.error("Database initialization failed: %s", e)

    logger.info("Connected to DB %s on %s:%s", settings.db_name, settings.db_host, settings.db_port)
    logger.info("API running on %s environment", settings.app_env)
    yield
    logger.info("Shutting down %s...", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="API for managing subscriptions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and mistyped fields are client errors, reported as 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


app.include_router(health.router, tags=["Health"])
app.include_router(
    subscriptions.router, prefix="/subscriptions", tags=["Subscriptions"]
)


def run() -> None:
    """Serve the API on SERVER_PORT."""
    configure_logging(settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=settings.server_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
