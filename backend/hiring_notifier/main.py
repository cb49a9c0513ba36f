"""
Hiring Notifier Backend — FastAPI Application Factory
======================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the record store and services,
       attaches them to `app.state`, and registers middleware, exception
       handlers and routers.
Who:   Called by uvicorn (uvicorn hiring_notifier.main:app) and by tests,
       which pass their own Settings pointing at a temporary data directory.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐             │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS │             │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘             │
    │                                                          │
    │  Routes:                                                 │
    │  ┌──────────────────┐ ┌────────────┐ ┌────────────────┐  │
    │  │ /api/applications│ │ /api/teams │ │ /health  /     │  │
    │  └──────────────────┘ └────────────┘ └────────────────┘  │
    │                                                          │
    │  app.state:                                              │
    │    record_store → team_directory, application_repository │
    │    dispatcher (SmtpTransport or simulated)               │
    │    submission_service                                    │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Check mail configuration (a partial one is logged, sends are simulated)
    3. Create the data directory and seed missing collections
    Shutdown:
    1. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from hiring_notifier import __version__
from hiring_notifier.config import Settings, settings as default_settings
from hiring_notifier.exceptions import (
    DispatchError,
    HiringNotifierError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from hiring_notifier.middleware.logging import RequestLoggingMiddleware
from hiring_notifier.middleware.request_id import RequestIDMiddleware, request_id_var
from hiring_notifier.routes import applications, health, teams
from hiring_notifier.services.application_repository import ApplicationRepository
from hiring_notifier.services.notification_service import NotificationDispatcher
from hiring_notifier.services.smtp_transport import SmtpTransport
from hiring_notifier.services.submission_service import SubmissionService
from hiring_notifier.services.team_directory import TeamDirectory
from hiring_notifier.storage import RecordStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2025-01-15T12:00:00 [INFO] hiring_notifier.storage: message
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request lines come from hiring_notifier.access instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("%s backend starting up...", config.app_name)

    try:
        config.validate_mail_settings()
    except ValueError as e:
        # The server still starts; notifications are simulated
        logger.error("Configuration error: %s", str(e))

    await app.state.record_store.initialize()
    logger.info(
        "Email mode: %s",
        "SMTP " + config.mail_host if config.mail_configured else "simulated (logged only)",
    )
    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, error: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and one error body shape.

    Handler hierarchy:
        ValidationError         → 400 (bad fields, unknown team, bad status)
        RequestValidationError  → 400 (body is not the expected JSON shape)
        NotFoundError           → 404
        StorageError            → 500 (message + cause, context logged)
        DispatchError           → 500 (application already saved)
        HiringNotifierError     → 500
        Exception (fallback)    → 500, generic message, stack trace logged
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Malformed request body: %s", request_id_var.get(""), errors)
        return _error(400, "validation_error", "Invalid request body", {"errors": errors})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, "not_found", exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(
            "[%s] Storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return _error(500, "storage_error", exc.message, {"cause": exc.cause} if exc.cause else None)

    @app.exception_handler(DispatchError)
    async def handle_dispatch_error(request: Request, exc: DispatchError):
        logger.error(
            "[%s] Dispatch error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return _error(500, "dispatch_error", exc.message)

    @app.exception_handler(HiringNotifierError)
    async def handle_app_error(request: Request, exc: HiringNotifierError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return _error(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def build_dispatcher(config: Settings) -> NotificationDispatcher:
    """SMTP delivery when host and credentials are set, simulated otherwise."""
    transport = None
    if config.mail_configured:
        transport = SmtpTransport(
            host=config.mail_host,
            port=config.mail_port,
            username=config.mail_username,
            password=config.mail_password,
            use_tls=config.mail_use_tls,
            timeout=config.mail_timeout_seconds,
        )
    return NotificationDispatcher(
        transport=transport,
        app_name=config.app_name,
        sender_address=config.sender_address,
        sender_name=config.mail_from_name,
        timeout=config.mail_timeout_seconds,
    )


def create_app(
    config: Optional[Settings] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use; defaults to the module-level settings
        dispatcher: Prebuilt dispatcher (tests pass one with a fake transport)
    """
    config = config or default_settings

    app = FastAPI(
        title="Hiring Notifier API",
        description=(
            "Accepts job applications, stores them with the team directory in "
            "JSON files, and emails each team's executives and project leads."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Services ──────────────────────────────────────────────────────────
    store = RecordStore(config.data_dir)
    team_directory = TeamDirectory(store)
    application_repository = ApplicationRepository(store)
    dispatcher = dispatcher or build_dispatcher(config)

    app.state.settings = config
    app.state.record_store = store
    app.state.team_directory = team_directory
    app.state.application_repository = application_repository
    app.state.dispatcher = dispatcher
    app.state.submission_service = SubmissionService(
        teams=team_directory,
        applications=application_repository,
        dispatcher=dispatcher,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=config.cors_origins_list != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(applications.router)
    app.include_router(teams.router)
    app.include_router(health.router)

    return app


# uvicorn expects `hiring_notifier.main:app` to be importable
app = create_app()
