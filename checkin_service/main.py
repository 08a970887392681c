"""Event Check-in Web Application."""
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from checkin_service.core.config import Settings, settings as default_settings
from checkin_service.core.database import create_memory_engine
from checkin_service.core.errors import DomainError, ErrorCode
from checkin_service.core.middleware import (
    AuthOptions,
    BearerTokenMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from checkin_service.directory.seed import load_seed
from checkin_service.directory.store import EventStore
from checkin_service.routes import attendees, events
from checkin_service.schemas import HealthResponse

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging. Writes to ``settings.log_file`` when set."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=settings.log_file,
    )


def build_store(settings: Settings) -> EventStore:
    """Create an in-memory store loaded with the configured seed."""
    store = EventStore(create_memory_engine(echo=settings.debug))
    store.seed(load_seed(settings.seed_path))
    return store


async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request parameters as 400."""
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid request parameters",
            "code": ErrorCode.INVALID_REQUEST.value,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def create_app(settings: Settings | None = None, store: EventStore | None = None) -> FastAPI:
    """
    Build the application.

    The store is created and seeded here unless one is passed in, so every
    application instance owns its own data.
    """
    settings = settings or default_settings
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup and shutdown lifecycle."""
        logger.info(f"Starting {settings.app_name}")
        yield
        logger.info(f"{settings.app_name} shut down")

    app = FastAPI(
        title=settings.app_name,
        description="Tracks event attendee check-in status",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # Last added runs first: logging wraps CORS, which answers preflight
    # requests before the token check.
    app.add_middleware(BearerTokenMiddleware, options=AuthOptions(secret=settings.token))
    app.add_middleware(SecurityHeadersMiddleware)
    origins = (
        ["*"]
        if settings.allowed_origins == "*"
        else [o.strip() for o in settings.allowed_origins.split(",")]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(events.router)
    app.include_router(attendees.router)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        return HealthResponse(status="ok", time=datetime.now(UTC))

    return app


configure_logging(default_settings)
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
